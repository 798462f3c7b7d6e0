"""Contract analyzer: bytecode gate, source classification and rule sweep."""

import logging
from typing import Iterable, Optional

from vibeaudit.analyzers.base import (
    AnalysisResult,
    Analyzer,
    ContractInfo,
    Finding,
    LogCallback,
    Severity,
)
from vibeaudit.analyzers.classifier import classify, flatten_source
from vibeaudit.analyzers.patterns import VIBECHECK_RULES, PatternRule, match_patterns

logger = logging.getLogger(__name__)

ENGINE_TOOL = "VibeAnalyzer"
EMPTY_BYTECODE = "0x"

EOA_CONTRACT_TYPE = "EOA (Externally Owned Account)"
EOA_DESCRIPTION = "This is a regular wallet address, not a smart contract."

UNVERIFIED_FINDING = Finding(
    tool=ENGINE_TOOL,
    severity=Severity.MEDIUM,
    description="Unverified Contract",
    location="Etherscan",
    layman=(
        "The source code is not public. We cannot verify what this contract actually "
        "does. Tread carefully."
    ),
    technical=(
        "Bytecode-only contract. Source code is not published on Etherscan. Static "
        "analysis is limited to opcode inspection. Verify trust or decompilation manually."
    ),
)


class _ProgressLog:
    """Ordered progress lines, forwarded to an optional callback as they arrive."""

    def __init__(self, callback: Optional[LogCallback]):
        self.lines: list[str] = []
        self._callback = callback

    def __call__(self, message: str) -> None:
        self.lines.append(message)
        logger.debug(message)
        if self._callback is not None:
            self._callback(message)


class ContractAnalyzer(Analyzer):
    """Runs the VibeCheck rule table against a contract's verified source."""

    name = "vibecheck"

    def __init__(
        self,
        rules: Iterable[PatternRule] = VIBECHECK_RULES,
        context_lines: int = 2,
    ):
        self.rules = tuple(rules)
        self.context_lines = context_lines

    def analyze(
        self, info: ContractInfo, log_callback: Optional[LogCallback] = None
    ) -> AnalysisResult:
        log = _ProgressLog(log_callback)

        log(f"[VibeAnalyzer] Starting real-time analysis for {info.address}...")
        log(f"[Bytecode] Analyzing {info.bytecode_size} bytes...")

        if info.bytecode == EMPTY_BYTECODE:
            log("[Bytecode] No code found. Is this an EOA?")
            return AnalysisResult(
                findings=[],
                contract_type=EOA_CONTRACT_TYPE,
                contract_description=EOA_DESCRIPTION,
                logs=log.lines,
            )

        findings: list[Finding] = []
        contract_type = "Unknown"
        contract_description = "No description available."

        if info.is_verified and info.source_code:
            log("[Source] Contract is verified. Scanning source code...")
            code = flatten_source(info.source_code)

            classification = classify(code, info.contract_name)
            contract_type = classification.contract_type
            contract_description = classification.contract_description

            findings.extend(match_patterns(code, self.rules, self.context_lines))
        else:
            log("[Source] Contract unverified. Skipping source analysis.")
            findings.append(UNVERIFIED_FINDING)

        log("[VibeAnalyzer] Analysis complete.")
        logger.info(
            f"Analyzed {info.address}: {contract_type}, {len(findings)} finding(s)"
        )
        return AnalysisResult(
            findings=findings,
            contract_type=contract_type,
            contract_description=contract_description,
            logs=log.lines,
        )
