"""
engine/models.py

Data models for the rule engine.

Severity        — 4-level enum carried by every non-success outcome
OutcomeKind     — PASS / WARN / FAIL tag
SuccessOutcome  — the action would complete
WarningOutcome  — the action completes with a known degradation
FailureOutcome  — the action is blocked

Warnings carry a severity but are never counted as failures: they are a
separate type, so aggregators can exclude them by isinstance rather than by
inspecting a flag.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


# ---------------------------------------------------------------------------
# Severity
# ---------------------------------------------------------------------------

class Severity(str, Enum):
    LOW      = "low"
    MEDIUM   = "medium"
    HIGH     = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK: dict[Severity, int] = {
    Severity.CRITICAL: 4,
    Severity.HIGH:     3,
    Severity.MEDIUM:   2,
    Severity.LOW:      1,
}


class OutcomeKind(str, Enum):
    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"


# ---------------------------------------------------------------------------
# Escalation channels
# ---------------------------------------------------------------------------

ESCALATION_CRITICAL = "Call Safaricom Business: 0722 000 100 (available 24/7 for urgent cases)"
ESCALATION_HIGH     = "Call 100 (free) or visit your nearest Safaricom Shop with National ID"
ESCALATION_DEFAULT  = "Chat via My Safaricom App > Help, or SMS 'HELP' to 100"
ESCALATION_WARNING  = "Chat via My Safaricom App > Help"


def escalation_for(severity: Severity) -> str:
    if severity is Severity.CRITICAL:
        return ESCALATION_CRITICAL
    if severity is Severity.HIGH:
        return ESCALATION_HIGH
    return ESCALATION_DEFAULT


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SuccessOutcome:
    """The action would complete. `message` echoes the values that let it pass."""

    message: str

    kind = OutcomeKind.PASS
    code = "OK"
    severity = None
    reason = None
    fix = None
    escalation = None
    success = True
    is_warning = False
    is_failure = False

    def to_dict(self) -> dict[str, Any]:
        return _outcome_dict(self)


@dataclass(frozen=True, slots=True)
class WarningOutcome:
    """The action completes, but with a degradation the merchant should fix."""

    code: str
    severity: Severity
    message: str
    reason: str
    fix: str

    kind = OutcomeKind.WARN
    escalation = ESCALATION_WARNING
    success = False
    is_warning = True
    is_failure = False

    def to_dict(self) -> dict[str, Any]:
        return _outcome_dict(self)


@dataclass(frozen=True, slots=True)
class FailureOutcome:
    """The action is blocked. `reason` is the root cause, `fix` the remediation."""

    code: str
    severity: Severity
    message: str
    reason: str
    fix: str

    kind = OutcomeKind.FAIL
    success = False
    is_warning = False
    is_failure = True

    @property
    def escalation(self) -> str:
        return escalation_for(self.severity)

    def to_dict(self) -> dict[str, Any]:
        return _outcome_dict(self)


Outcome = Union[SuccessOutcome, WarningOutcome, FailureOutcome]


def _outcome_dict(outcome: Outcome) -> dict[str, Any]:
    severity = outcome.severity
    return {
        "kind":       outcome.kind.value,
        "success":    outcome.success,
        "code":       outcome.code,
        "severity":   severity.value if severity is not None else None,
        "message":    outcome.message,
        "reason":     outcome.reason,
        "fix":        outcome.fix,
        "escalation": outcome.escalation,
    }
