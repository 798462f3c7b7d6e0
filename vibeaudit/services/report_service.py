"""Report service: analysis plus scoring, merged into one report."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from vibeaudit.analyzers import AnalysisResult, ContractAnalyzer, ContractInfo, Finding
from vibeaudit.analyzers.base import LogCallback
from vibeaudit.services.scoring_service import ScoreResult, ScoringService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Report:
    """Security report returned for one address."""

    findings: list[Finding]
    score: int
    interpretation: str
    contract_type: str
    contract_description: str
    logs: list[str] = field(default_factory=list)


class ReportService:
    """Service that produces the externally consumed report."""

    def __init__(
        self,
        analyzer: Optional[ContractAnalyzer] = None,
        scoring_service: Optional[ScoringService] = None,
    ):
        self.analyzer = analyzer or ContractAnalyzer()
        self.scoring_service = scoring_service or ScoringService()

    def build_report(self, analysis: AnalysisResult, score: ScoreResult) -> Report:
        return Report(
            findings=list(analysis.findings),
            score=score.score,
            interpretation=score.interpretation,
            contract_type=analysis.contract_type,
            contract_description=analysis.contract_description,
            logs=list(analysis.logs),
        )

    def generate(
        self, info: ContractInfo, log_callback: Optional[LogCallback] = None
    ) -> Report:
        """Analyze, score and assemble the report for ``info``."""
        analysis = self.analyzer.analyze(info, log_callback)
        score = self.scoring_service.calculate_score(analysis.findings)
        return self.build_report(analysis, score)
