"""Analysis request and response schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from vibeaudit.analyzers import Severity


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AnalyzeRequest(BaseModel):
    """Analyze request model."""

    address: str = Field(..., min_length=1, max_length=100)


class FindingResponse(CamelModel):
    """Single finding."""

    tool: str
    severity: Severity
    description: str
    location: str
    layman: str
    technical: str
    snippet: str | None = None


class ReportResponse(CamelModel):
    """Scored analysis report."""

    findings: list[FindingResponse]
    score: int = Field(..., ge=0, le=100)
    interpretation: str
    contract_type: str
    contract_description: str
    logs: list[str]


class ContractInfoResponse(CamelModel):
    """On-chain facts about the analyzed address."""

    address: str
    is_contract: bool
    balance: str
    bytecode_size: int
    is_verified: bool
    contract_name: str
    creator: str
    analytics: dict[str, Any]


class AnalyzeResponse(BaseModel):
    """Response for the analyze endpoint."""

    info: ContractInfoResponse
    analysis: ReportResponse
