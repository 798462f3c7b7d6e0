"""Base analyzer interfaces for contract security scans."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional


class Severity(str, Enum):
    """Finding severity levels."""

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


LogCallback = Callable[[str], None]


@dataclass(frozen=True)
class ContractInfo:
    """On-chain data for one address, as supplied by the fetcher."""

    address: str
    is_contract: bool
    bytecode: str
    is_verified: bool
    source_code: Optional[str]
    contract_name: str = "Unknown"
    balance: str = "0"
    creator: str = "Unknown"
    analytics: dict[str, Any] = field(default_factory=dict)

    @property
    def bytecode_size(self) -> int:
        return len(self.bytecode)


@dataclass(frozen=True)
class Finding:
    """Finding emitted by analyzers."""

    tool: str
    severity: Severity
    description: str
    location: str
    layman: str
    technical: str
    snippet: Optional[str] = None


@dataclass
class AnalysisResult:
    """Outcome of a single contract scan."""

    findings: list[Finding]
    contract_type: str
    contract_description: str
    logs: list[str] = field(default_factory=list)


class Analyzer:
    """Base class for analyzers."""

    name: str = "base"

    def analyze(
        self, info: ContractInfo, log_callback: Optional[LogCallback] = None
    ) -> AnalysisResult:
        raise NotImplementedError
