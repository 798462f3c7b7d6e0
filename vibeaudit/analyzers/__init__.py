"""Public analyzer types and entry points."""

from vibeaudit.analyzers.base import (
    AnalysisResult,
    Analyzer,
    ContractInfo,
    Finding,
    Severity,
)
from vibeaudit.analyzers.classifier import Classification, classify, flatten_source
from vibeaudit.analyzers.contract_analyzer import ContractAnalyzer
from vibeaudit.analyzers.patterns import VIBECHECK_RULES, PatternRule, extract_snippet

__all__ = [
    "AnalysisResult",
    "Analyzer",
    "Classification",
    "ContractAnalyzer",
    "ContractInfo",
    "Finding",
    "PatternRule",
    "Severity",
    "VIBECHECK_RULES",
    "classify",
    "extract_snippet",
    "flatten_source",
]
