"""engine/__init__.py"""
from .catalogue import CatalogueEntry, RuleCatalogue, load_catalogue
from .evaluator import RuleEvaluator
from .metadata import RULE_METADATA, RuleMetadata
from .models import (
    FailureOutcome,
    Outcome,
    OutcomeKind,
    Severity,
    SuccessOutcome,
    WarningOutcome,
)

__all__ = [
    "CatalogueEntry",
    "RuleCatalogue",
    "load_catalogue",
    "RuleEvaluator",
    "RULE_METADATA",
    "RuleMetadata",
    "FailureOutcome",
    "Outcome",
    "OutcomeKind",
    "Severity",
    "SuccessOutcome",
    "WarningOutcome",
]
