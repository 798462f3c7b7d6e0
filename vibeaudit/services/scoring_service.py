"""Scoring service for findings.

Turns a list of findings into a 0-100 security score and a short verdict.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from vibeaudit.analyzers.base import Finding, Severity

logger = logging.getLogger(__name__)

MAX_SCORE = 100
MIN_SCORE = 0

EXCELLENT_THRESHOLD = 90
DECENT_THRESHOLD = 70


@dataclass(frozen=True)
class ScoreResult:
    """Aggregate score for one analysis."""

    score: int  # 0-100
    interpretation: str


class ScoringService:
    """Service for scoring findings."""

    SEVERITY_PENALTIES = {
        Severity.CRITICAL: 20,
        Severity.HIGH: 10,
        Severity.MEDIUM: 5,
        Severity.LOW: 1,
    }

    INTERPRETATIONS = (
        (EXCELLENT_THRESHOLD, "Excellent vibes. Seems clean."),
        (DECENT_THRESHOLD, "Decent vibes, but check the warnings."),
        (MIN_SCORE, "Bad vibes. High risk detected."),
    )

    def calculate_score(self, findings: Iterable[Finding]) -> ScoreResult:
        """Deduct a fixed penalty per finding severity, starting from 100."""
        findings = list(findings)
        score = MAX_SCORE

        for finding in findings:
            score -= self.SEVERITY_PENALTIES.get(finding.severity, 0)

        score = max(score, MIN_SCORE)

        # Clean-verification bonus. Redundant: with no findings nothing was deducted.
        if not findings and score > 0:
            score = MAX_SCORE

        score = min(score, MAX_SCORE)

        interpretation = self.interpret(score)
        logger.info(f"Scored {len(findings)} finding(s): {score}/100")
        return ScoreResult(score=score, interpretation=interpretation)

    def interpret(self, score: int) -> str:
        for threshold, verdict in self.INTERPRETATIONS:
            if score >= threshold:
                return verdict
        return self.INTERPRETATIONS[-1][1]
