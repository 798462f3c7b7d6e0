"""Contract purpose classification from keyword heuristics and NatSpec tags."""

import json
import logging
import re
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_CONTRACT_TYPE = "General Utility / Unclassified"

TITLE_TAG = re.compile(r"@title\s+(.+)")
NOTICE_TAG = re.compile(r"@notice\s+(.+)")


def _has_all(*words: str) -> Callable[[str], bool]:
    return lambda code: all(word in code for word in words)


def _has_any(*words: str) -> Callable[[str], bool]:
    return lambda code: any(word in code for word in words)


# Evaluated top to bottom; first match wins.
CONTRACT_TYPE_RULES: tuple[tuple[Callable[[str], bool], str], ...] = (
    (_has_all("router", "swap"), "DeFi Router / DEX"),
    (_has_all("pair", "liquidity"), "DeFi Liquidity Pair"),
    (_has_any("erc721", "erc1155", "nft"), "NFT / Gaming"),
    (lambda code: "erc20" in code and _has_any("token", "coin")(code), "ERC20 Token"),
    (_has_any("governance", "dao", "proposal"), "DAO / Governance"),
    (_has_any("staking", "reward"), "Staking / Yield"),
    (_has_any("proxy", "implementation"), "Proxy Contract"),
)


@dataclass(frozen=True)
class Classification:
    contract_type: str
    contract_description: str


def flatten_source(source_code: str) -> str:
    """Collapse a ``{{...}}`` multi-file verification bundle into one text.

    Plain sources, and bundles that fail to parse, are returned unchanged.
    """
    if not source_code.startswith("{{"):
        return source_code

    try:
        bundle = json.loads(source_code[1:-1])
        return "\n".join(entry.get("content") or "" for entry in bundle["sources"].values())
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.debug(f"Source bundle is not valid JSON, scanning raw text: {e}")
        return source_code


def infer_contract_type(code: str) -> str:
    lower_code = code.lower()
    for predicate, label in CONTRACT_TYPE_RULES:
        if predicate(lower_code):
            return label
    return DEFAULT_CONTRACT_TYPE


def describe(code: str, contract_type: str, contract_name: str) -> str:
    """Use the first @title tag, then the first @notice tag, else a generic line."""
    for tag in (TITLE_TAG, NOTICE_TAG):
        match = tag.search(code)
        if match:
            return match.group(1).strip()
    return f"A {contract_type} contract named {contract_name}."


def classify(code: str, contract_name: str = "Unknown") -> Classification:
    contract_type = infer_contract_type(code)
    return Classification(
        contract_type=contract_type,
        contract_description=describe(code, contract_type, contract_name),
    )
