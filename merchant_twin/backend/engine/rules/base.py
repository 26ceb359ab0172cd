"""
engine/rules/base.py

Abstract base class that all diagnosis rules must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, ClassVar

from ...models import MerchantSnapshot
from ..models import Outcome, SuccessOutcome


@dataclass(frozen=True, slots=True)
class Guard:
    """One (predicate, outcome-builder) step of a rule's guard chain."""

    when: Callable[[MerchantSnapshot], bool]
    then: Callable[[MerchantSnapshot], Outcome]


class BaseRule(ABC):
    """
    Contract that every diagnosis rule must satisfy.

    Class-level attributes:
        key     — stable action key, e.g. 'SETTLE_FUNDS'; must match an
                  entry in engine.metadata.RULE_METADATA
        guards  — ordered guard chain; the FIRST guard whose predicate holds
                  decides the outcome, later guards are never consulted
        enabled — False for rules temporarily withdrawn from the catalogue

    Guards are not mutually exclusive, so their order is part of the rule.
    Expected business conditions must be expressed as guards returning
    outcomes; a rule raises only on a programming error, which the
    evaluator converts into a RULE_ERROR outcome.
    """

    key: ClassVar[str] = ""
    guards: ClassVar[tuple[Guard, ...]] = ()
    enabled: ClassVar[bool] = True

    def evaluate(self, snapshot: MerchantSnapshot) -> Outcome:
        for guard in self.guards:
            if guard.when(snapshot):
                return guard.then(snapshot)
        return self.passed(snapshot)

    @abstractmethod
    def passed(self, snapshot: MerchantSnapshot) -> SuccessOutcome:
        """Success outcome, echoing the snapshot values that let the action pass."""
        ...

    def __repr__(self) -> str:
        return f"<Rule:{self.key} guards={len(self.guards)} enabled={self.enabled}>"
