"""Contract data service backed by Ethereum JSON-RPC and the Etherscan API."""

import logging
import re
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Optional

import httpx

from vibeaudit.analyzers import ContractInfo
from vibeaudit.config import Settings, get_settings

logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
WEI_PER_ETHER = Decimal(10) ** 18


class ContractFetchError(Exception):
    """Error while gathering on-chain data for an address."""
    pass


class InvalidAddressError(ContractFetchError):
    """Address is not a 20-byte hex string."""
    pass


class ProviderUnavailableError(ContractFetchError):
    """No configured RPC provider could answer."""
    pass


def is_address(address: str) -> bool:
    return bool(ADDRESS_PATTERN.match(address))


def format_ether(wei: int) -> str:
    """Render a wei amount as a decimal ether string, e.g. ``1.5`` or ``0.0``."""
    text = f"{(Decimal(wei) / WEI_PER_ETHER).normalize():f}"
    return text if "." in text else f"{text}.0"


def _parse_timestamp(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def summarize_transactions(transactions: list[dict[str, Any]]) -> dict[str, Any]:
    """Build the recent-activity summary from an Etherscan txlist page."""
    senders = {tx.get("from", "").lower() for tx in transactions if tx.get("from")}
    failed = sum(1 for tx in transactions if tx.get("isError") == "1")

    parsed = (_parse_timestamp(tx.get("timeStamp")) for tx in transactions)
    timestamps = [ts for ts in parsed if ts is not None]
    last_activity = None
    if timestamps:
        last_activity = datetime.fromtimestamp(max(timestamps), tz=timezone.utc).isoformat()

    return {
        "txCount": len(transactions),
        "uniqueSenders": len(senders),
        "failedTxCount": failed,
        "lastActivity": last_activity,
    }


class ContractService:
    """Service that assembles ContractInfo records from remote providers.

    RPC endpoints are tried in order until one answers. Etherscan lookups are
    best effort: any failure there leaves the contract marked unverified.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.settings.http_timeout_seconds,
            transport=self._transport,
        )

    async def get_contract_info(self, address: str) -> ContractInfo:
        """Fetch bytecode, balance and explorer metadata for ``address``.

        Raises:
            InvalidAddressError: address is malformed
            ProviderUnavailableError: every RPC endpoint failed
        """
        address = address.strip()
        if not is_address(address):
            raise InvalidAddressError("Invalid Ethereum address format.")

        async with self._client() as client:
            bytecode, balance = await self._fetch_chain_state(client, address)
            is_contract = bytecode != "0x"

            metadata: dict[str, Any] = {}
            if is_contract and self.settings.etherscan_api_key:
                metadata = await self._fetch_explorer_metadata(client, address)
            elif is_contract:
                logger.info("No Etherscan API key configured; treating source as unavailable")

        return ContractInfo(
            address=address,
            is_contract=is_contract,
            bytecode=bytecode,
            balance=balance,
            is_verified=metadata.get("is_verified", False),
            source_code=metadata.get("source_code"),
            contract_name=metadata.get("contract_name", "Unknown"),
            creator=metadata.get("creator", "Unknown"),
            analytics=metadata.get("analytics", {}),
        )

    # =========================================================================
    # JSON-RPC
    # =========================================================================

    async def _fetch_chain_state(
        self, client: httpx.AsyncClient, address: str
    ) -> tuple[str, str]:
        for url in self.settings.rpc_urls:
            try:
                code = await self._rpc_call(client, url, "eth_getCode", [address, "latest"])
                balance_hex = await self._rpc_call(
                    client, url, "eth_getBalance", [address, "latest"]
                )
                return code or "0x", format_ether(int(balance_hex, 16))
            except (httpx.HTTPError, ContractFetchError, ValueError, TypeError) as e:
                logger.warning(f"RPC provider {url} failed: {e}")

        raise ProviderUnavailableError("All RPC providers failed")

    async def _rpc_call(
        self, client: httpx.AsyncClient, url: str, method: str, params: list[Any]
    ) -> Any:
        response = await client.post(
            url,
            json={"jsonrpc": "2.0", "id": 1, "method": method, "params": params},
        )
        response.raise_for_status()
        data = response.json()

        if "error" in data:
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else error
            raise ContractFetchError(f"{method} error: {message}")
        if "result" not in data:
            raise ContractFetchError(f"{method} returned no result")

        return data["result"]

    # =========================================================================
    # Etherscan
    # =========================================================================

    async def _fetch_explorer_metadata(
        self, client: httpx.AsyncClient, address: str
    ) -> dict[str, Any]:
        metadata: dict[str, Any] = {}

        source = await self._etherscan_get(
            client, module="contract", action="getsourcecode", address=address
        )
        if source:
            entry = source[0]
            source_code = entry.get("SourceCode") or None
            metadata["is_verified"] = source_code is not None
            metadata["source_code"] = source_code
            metadata["contract_name"] = entry.get("ContractName") or "Unknown"

        creation = await self._etherscan_get(
            client,
            module="contract",
            action="getcontractcreation",
            contractaddresses=address,
        )
        if creation:
            metadata["creator"] = creation[0].get("contractCreator") or "Unknown"

        transactions = await self._etherscan_get(
            client,
            module="account",
            action="txlist",
            address=address,
            startblock=0,
            endblock=99999999,
            page=1,
            offset=self.settings.recent_tx_limit,
            sort="desc",
        )
        metadata["analytics"] = summarize_transactions(transactions or [])

        return metadata

    async def _etherscan_get(
        self, client: httpx.AsyncClient, **params: Any
    ) -> Optional[list[dict[str, Any]]]:
        """Call Etherscan and return ``result`` as a list, or None on any failure."""
        params["chainid"] = self.settings.chain_id
        params["apikey"] = self.settings.etherscan_api_key
        action = params.get("action")
        try:
            response = await client.get(self.settings.etherscan_api_url, params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Etherscan {action} request failed: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Etherscan {action} returned an unexpected body")
            return None

        result = data.get("result")
        if data.get("status") != "1" or not isinstance(result, list):
            logger.info(f"Etherscan {action} returned no data: {data.get('message')}")
            return None

        return [row for row in result if isinstance(row, dict)]
