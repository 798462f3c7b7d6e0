"""Contract analysis routes."""

import logging

from fastapi import APIRouter, HTTPException, status

from vibeaudit.api.deps import ContractServiceDep, ReportServiceDep
from vibeaudit.schemas.analysis import (
    AnalyzeRequest,
    AnalyzeResponse,
    ContractInfoResponse,
    ReportResponse,
)
from vibeaudit.services.contract_service import (
    InvalidAddressError,
    ProviderUnavailableError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=AnalyzeResponse)
async def analyze_contract(
    request: AnalyzeRequest,
    contract_service: ContractServiceDep,
    report_service: ReportServiceDep,
):
    """Fetch on-chain data for an address and return its security report."""
    try:
        info = await contract_service.get_contract_info(request.address)
    except InvalidAddressError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except ProviderUnavailableError as e:
        logger.error(f"Could not fetch {request.address}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        )

    report = report_service.generate(info)

    return AnalyzeResponse(
        info=ContractInfoResponse.model_validate(info),
        analysis=ReportResponse.model_validate(report),
    )
