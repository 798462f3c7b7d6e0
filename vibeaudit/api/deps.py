"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from vibeaudit.analyzers import ContractAnalyzer
from vibeaudit.config import get_settings
from vibeaudit.services.contract_service import ContractService
from vibeaudit.services.report_service import ReportService


def get_contract_service() -> ContractService:
    """Contract data fetcher using the configured providers."""
    return ContractService(get_settings())


def get_report_service() -> ReportService:
    """Fresh analyzer and scorer for each request."""
    settings = get_settings()
    return ReportService(ContractAnalyzer(context_lines=settings.snippet_context_lines))


# Type aliases for cleaner signatures
ContractServiceDep = Annotated[ContractService, Depends(get_contract_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
