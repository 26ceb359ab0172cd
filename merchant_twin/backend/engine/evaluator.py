"""
engine/evaluator.py

RuleEvaluator — runs one catalogued rule against one snapshot, safely.

Contract:
  - Unknown rule key: a synthetic success (lenient default), or an
    UNKNOWN_RULE failure when strict_keys is on.
  - Rule raises: a RULE_ERROR failure (severity high) whose reason carries
    the exception message. The exception never reaches the caller.
This is the only place rule exceptions are caught.
"""

from __future__ import annotations

import logging
import time

from ..config import settings
from ..metrics import METRICS
from ..models import MerchantSnapshot
from .catalogue import CatalogueEntry, RuleCatalogue
from .models import FailureOutcome, Outcome, Severity, SuccessOutcome

logger = logging.getLogger(__name__)

UNKNOWN_RULE_MESSAGE = "Action not found in rules engine."


class RuleEvaluator:
    def __init__(
        self,
        catalogue: RuleCatalogue,
        strict_keys: bool | None = None,
        slow_rule_ms: float | None = None,
    ) -> None:
        self.catalogue = catalogue
        self.strict_keys = settings.STRICT_RULE_KEYS if strict_keys is None else strict_keys
        self.slow_rule_ms = settings.SLOW_RULE_WARNING_MS if slow_rule_ms is None else slow_rule_ms

    def evaluate(self, snapshot: MerchantSnapshot, rule_key: str) -> Outcome:
        METRICS.rules_evaluated.inc()
        entry = self.catalogue.get(rule_key)
        if entry is None:
            return self._unknown(rule_key)
        return self._safe_evaluate(entry, snapshot)

    def evaluate_all(
        self, snapshot: MerchantSnapshot
    ) -> list[tuple[CatalogueEntry, Outcome]]:
        """One evaluation pass over the whole catalogue, in demand order."""
        return [
            (entry, self.evaluate(snapshot, entry.key))
            for entry in self.catalogue.entries()
        ]

    def _safe_evaluate(self, entry: CatalogueEntry, snapshot: MerchantSnapshot) -> Outcome:
        t0 = time.monotonic()
        try:
            outcome = entry.rule.evaluate(snapshot)
        except Exception as exc:
            METRICS.rule_errors.inc()
            logger.exception("Rule %r raised an unhandled exception: %s", entry.key, exc)
            outcome = FailureOutcome(
                "RULE_ERROR", Severity.HIGH,
                "An error occurred evaluating this action.",
                f"Rules engine threw: {exc}",
                "Report this error to the digital twin engineering team.",
            )
        elapsed_ms = (time.monotonic() - t0) * 1000
        if elapsed_ms > self.slow_rule_ms:
            logger.warning("Rule %r took %.1fms", entry.key, elapsed_ms)
        return outcome

    def _unknown(self, rule_key: str) -> Outcome:
        METRICS.unknown_rules.inc()
        if not self.strict_keys:
            logger.debug("Unknown rule key %r — treated as no-op", rule_key)
            return SuccessOutcome(UNKNOWN_RULE_MESSAGE)
        logger.warning("Unknown rule key %r rejected (strict mode)", rule_key)
        return FailureOutcome(
            "UNKNOWN_RULE", Severity.HIGH,
            UNKNOWN_RULE_MESSAGE,
            f"No rule is registered under key {rule_key!r}.",
            "Check the action key against the rules catalogue.",
        )
