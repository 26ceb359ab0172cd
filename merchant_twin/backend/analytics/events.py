"""
analytics/events.py

EvaluationEvent — one entry of the chronological evaluation log consumed by
the anomaly detector. The log itself is owned and stored by the caller.

Only hard failures are recorded as success=False; a warning still lets the
action complete, so it logs as a success.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..engine.models import Outcome


@dataclass(frozen=True, slots=True)
class EvaluationEvent:
    success: bool
    timestamp: float | None = None
    merchant_id: str = ""
    rule_key: str = ""
    code: str = ""
    severity: str | None = None

    @classmethod
    def from_outcome(
        cls,
        outcome: Outcome,
        merchant_id: str = "",
        rule_key: str = "",
        timestamp: float | None = None,
    ) -> "EvaluationEvent":
        return cls(
            success=not outcome.is_failure,
            timestamp=time.time() if timestamp is None else timestamp,
            merchant_id=merchant_id,
            rule_key=rule_key,
            code=outcome.code,
            severity=outcome.severity.value if outcome.severity is not None else None,
        )


def event_succeeded(event: EvaluationEvent | Mapping[str, Any]) -> bool:
    """Success flag of an EvaluationEvent or of a plain {'success': bool} record."""
    if isinstance(event, Mapping):
        return bool(event["success"])
    return bool(event.success)
