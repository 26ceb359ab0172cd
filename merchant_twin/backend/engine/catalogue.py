"""
engine/catalogue.py

RuleCatalogue — the explicit key -> (rule, metadata) mapping handed to the
evaluator and scanners.

Built once at startup by load_catalogue(), which discovers every BaseRule
subclass in the rules/ package and pairs it with its RULE_METADATA entry.
Iteration order is demand order (rank 1 first).
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from . import rules as rules_pkg
from .metadata import RULE_METADATA, RuleMetadata
from .rules.base import BaseRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CatalogueEntry:
    rule: BaseRule
    metadata: RuleMetadata

    @property
    def key(self) -> str:
        return self.rule.key


class RuleCatalogue(Mapping):
    """Read-only mapping of rule key to CatalogueEntry, in demand order."""

    def __init__(self, entries: Iterable[CatalogueEntry]) -> None:
        ordered = sorted(entries, key=lambda e: e.metadata.demand_rank)
        self._entries: dict[str, CatalogueEntry] = {}
        for entry in ordered:
            if entry.key in self._entries:
                raise ValueError(f"duplicate rule key {entry.key!r}")
            self._entries[entry.key] = entry

    def __getitem__(self, key: str) -> CatalogueEntry:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> list[CatalogueEntry]:
        return list(self._entries.values())

    def metadata(self) -> dict[str, RuleMetadata]:
        return {key: entry.metadata for key, entry in self._entries.items()}

    def __repr__(self) -> str:
        return f"RuleCatalogue({list(self._entries)})"


def load_catalogue(
    rules: Iterable[BaseRule] | None = None,
    metadata: Mapping[str, RuleMetadata] = RULE_METADATA,
) -> RuleCatalogue:
    """
    Build the catalogue.

    Args:
        rules:    Rule instances to catalogue. When None, every enabled
                  BaseRule subclass in the rules/ package is discovered.
        metadata: Demand metadata table keyed by rule key.

    Rules with no metadata entry are skipped and logged; they cannot be
    prioritised or counted towards calls at risk.
    """
    if rules is None:
        rules = _discover_rules()

    entries: list[CatalogueEntry] = []
    for rule in rules:
        meta = metadata.get(rule.key)
        if meta is None:
            logger.error("Rule %r has no metadata entry — skipped", rule.key)
            continue
        entries.append(CatalogueEntry(rule=rule, metadata=meta))

    catalogue = RuleCatalogue(entries)
    logger.info("RuleCatalogue loaded %d rule(s): %s", len(catalogue), list(catalogue))
    return catalogue


def _discover_rules() -> list[BaseRule]:
    rules: list[BaseRule] = []
    for _, module_name, _ in pkgutil.iter_modules(rules_pkg.__path__):
        if module_name == "base":
            continue
        try:
            module = importlib.import_module(f"{rules_pkg.__name__}.{module_name}")
        except Exception as exc:
            logger.error("Failed to import rule module %r: %s", module_name, exc)
            continue
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if (
                issubclass(obj, BaseRule)
                and obj is not BaseRule
                and obj.__module__ == module.__name__
            ):
                try:
                    instance: BaseRule = obj()
                except Exception as exc:
                    logger.error("Failed to instantiate rule %r: %s", obj, exc)
                    continue
                if instance.enabled:
                    rules.append(instance)
    return rules
