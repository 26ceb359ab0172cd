"""
scanner/prescan.py

PreScanner — runs every catalogued rule against one merchant and returns
the non-success outcomes in the order an operator should fix them.

Ordering:
  1. severity rank descending: critical 4 > high 3 > medium 2 > low 1;
     warnings rank 0, so they follow every hard failure
  2. equal rank: demand rank ascending (rank 1 = most contacts)

The order is independent of evaluation order: prioritise() sorts whatever
pass it is given.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..engine.catalogue import CatalogueEntry
from ..engine.evaluator import RuleEvaluator
from ..engine.models import Outcome
from ..metrics import METRICS
from ..models import MerchantSnapshot
from .models import ScanEntry

logger = logging.getLogger(__name__)


def priority_key(entry: ScanEntry) -> tuple[int, int]:
    return (-entry.priority_rank, entry.metadata.demand_rank)


def prioritise(evaluated: Iterable[tuple[CatalogueEntry, Outcome]]) -> list[ScanEntry]:
    """Keep failures and warnings from an evaluation pass, sorted by priority."""
    entries = [
        ScanEntry(rule_key=entry.key, metadata=entry.metadata, outcome=outcome)
        for entry, outcome in evaluated
        if not outcome.success
    ]
    entries.sort(key=priority_key)
    return entries


class PreScanner:
    def __init__(self, evaluator: RuleEvaluator) -> None:
        self.evaluator = evaluator

    def scan_all(self, snapshot: MerchantSnapshot) -> list[ScanEntry]:
        """Fresh prioritised list of failures and warnings; never cached."""
        METRICS.merchants_scanned.inc()
        entries = prioritise(self.evaluator.evaluate_all(snapshot))
        logger.debug(
            "Pre-scan merchant=%r -> %d issue(s): %s",
            snapshot.id, len(entries), [e.code for e in entries],
        )
        return entries
