"""Pattern-based analyzer helpers and the VibeCheck rule table."""

from dataclasses import dataclass
import re
from typing import Iterable, Optional

from vibeaudit.analyzers.base import Finding, Severity

STATIC_TOOL = "VibeCheck-Static"
SOURCE_LOCATION = "Source Code"


@dataclass(frozen=True)
class PatternRule:
    name: str
    pattern: str
    severity: Severity
    description: str
    layman: str
    technical: str
    suppressor: Optional[str] = None
    flags: int = 0

    def triggers(self, content: str) -> bool:
        return re.search(self.pattern, content, self.flags) is not None

    def suppressed(self, content: str) -> bool:
        if self.suppressor is None:
            return False
        return re.search(self.suppressor, content, self.flags) is not None

    def fires(self, content: str) -> bool:
        return self.triggers(content) and not self.suppressed(content)


VIBECHECK_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        name="Potential Reentrancy",
        pattern=r"\.call\s*\{.*value:",
        suppressor=r"nonReentrant",
        severity=Severity.HIGH,
        description="Potential Reentrancy (Low-level call)",
        layman=(
            "The contract sends money using a low-level method. If not protected, "
            "a hacker could re-enter the contract and drain it."
        ),
        technical=(
            "The contract uses a low-level .call() with value transfer. This passes "
            "control flow to the recipient, who can recursively call back into the "
            "contract before the state is updated (Checks-Effects-Interactions pattern "
            "violation). Ensure you use a ReentrancyGuard."
        ),
    ),
    PatternRule(
        name="Unchecked Return Value",
        pattern=r"\.call\s*\{",
        # Rudimentary: any require(...success) or if (...success) counts as handled
        suppressor=r"(require|if\s*)\s*\(.*success",
        severity=Severity.MEDIUM,
        description="Unchecked Low-Level Call",
        layman=(
            "The contract calls another contract but might not check if it succeeded. "
            "Money or data could be lost silently."
        ),
        technical=(
            "Low-level .call() returns a boolean indicating success. If this return "
            "value is not checked, the transaction continues even if the external call "
            "failed, potentially leaving the contract in an inconsistent state."
        ),
    ),
    PatternRule(
        name="Tx.Origin Usage",
        pattern=r"tx\.origin",
        severity=Severity.MEDIUM,
        description="Usage of tx.origin",
        layman=(
            "Using tx.origin for authentication is unsafe. Phishing attacks could trick "
            "you into calling a malicious contract that drains your funds."
        ),
        technical=(
            "tx.origin returns the original sender of the transaction, not the immediate "
            "caller (msg.sender). If a user calls a malicious contract that forwards the "
            "call to this contract, tx.origin will still be the user, bypassing "
            "authentication."
        ),
    ),
    PatternRule(
        name="Selfdestruct",
        pattern=r"selfdestruct|suicide",
        severity=Severity.HIGH,
        description="Usage of selfdestruct",
        layman=(
            "This contract can delete itself. If you are not the owner, your funds could "
            "be locked or stolen if the contract disappears."
        ),
        technical=(
            "The selfdestruct opcode allows the contract to be deleted from the "
            "blockchain. If access control is weak, an attacker can destroy the contract. "
            "Note: EIP-6780 limits selfdestruct functionality in newer blocks."
        ),
    ),
    PatternRule(
        name="Delegatecall",
        pattern=r"delegatecall",
        severity=Severity.HIGH,
        description="Usage of delegatecall",
        layman=(
            "This contract executes code from another address. If that other address is "
            "malicious or changeable, your funds are at risk."
        ),
        technical=(
            "delegatecall executes code from another contract in the context of the "
            "current contract (storage, msg.sender, msg.value). If the target address is "
            "malicious or can be overwritten, it allows arbitrary code execution and "
            "state manipulation."
        ),
    ),
    PatternRule(
        name="Weak Randomness",
        pattern=r"block\.difficulty|block\.prevrandao",
        severity=Severity.LOW,
        description="Weak Randomness Source",
        layman=(
            "The contract uses block difficulty for randomness. Miners can manipulate "
            "this to win games or lotteries."
        ),
        technical=(
            "block.difficulty (or block.prevrandao in PoS) is not a secure source of "
            "randomness. Validators can manipulate it to influence the outcome of random "
            "number generation."
        ),
    ),
    PatternRule(
        name="Block Timestamp",
        pattern=r"block\.timestamp",
        severity=Severity.LOW,
        description="Dependency on block.timestamp",
        layman=(
            "Miners can manipulate the time slightly. Do not use this for critical "
            "randomness or tight deadlines."
        ),
        technical=(
            "Block producers can shift block.timestamp by several seconds. Relying on it "
            "for precise randomness or exact timing constraints can be exploited."
        ),
    ),
    PatternRule(
        name="Floating Pragma",
        pattern=r"pragma\s+solidity\s+[\^><]",
        severity=Severity.LOW,
        description="Floating Pragma",
        layman=(
            "The contract allows multiple compiler versions. It should lock a specific "
            "version to ensure safety."
        ),
        technical=(
            "Using a floating pragma (e.g. ^0.8.0) allows the contract to be compiled "
            "with any newer version. This can introduce unexpected bugs if a future "
            "compiler version changes behavior. Production contracts should lock the "
            "version."
        ),
    ),
)


def extract_snippet(
    content: str, pattern: str, context_lines: int = 2, flags: int = 0
) -> Optional[str]:
    """Return a line-numbered excerpt around the first line matching ``pattern``.

    The pattern is tested one line at a time, so a match that only exists
    across a line break yields ``None``.
    """
    lines = content.split("\n")
    regex = re.compile(pattern, flags)

    match_index = next(
        (idx for idx, line in enumerate(lines) if regex.search(line)), None
    )
    if match_index is None:
        return None

    start = max(0, match_index - context_lines)
    end = min(len(lines), match_index + context_lines + 1)
    return "\n".join(
        f"{start + offset + 1} | {line}"
        for offset, line in enumerate(lines[start:end])
    )


def match_patterns(
    content: str,
    rules: Iterable[PatternRule] = VIBECHECK_RULES,
    context_lines: int = 2,
) -> list[Finding]:
    """Evaluate every rule against ``content`` in table order."""
    matches: list[Finding] = []
    for rule in rules:
        if not rule.fires(content):
            continue
        matches.append(
            Finding(
                tool=STATIC_TOOL,
                severity=rule.severity,
                description=rule.description,
                location=SOURCE_LOCATION,
                layman=rule.layman,
                technical=rule.technical,
                snippet=extract_snippet(content, rule.pattern, context_lines, rule.flags),
            )
        )
    return matches
