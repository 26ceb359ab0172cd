"""
scanner/__init__.py

Public API for the scanner sub-package.
"""

from .fleet import FleetScanner, percent_of
from .models import (
    FailureFrequency,
    FleetBatchResult,
    FleetStats,
    MerchantResult,
    MerchantSummary,
    ScanEntry,
)
from .prescan import PreScanner, prioritise
from .summary import MerchantAggregator, summarize_outcomes

__all__ = [
    "FleetScanner",
    "percent_of",
    "FailureFrequency",
    "FleetBatchResult",
    "FleetStats",
    "MerchantResult",
    "MerchantSummary",
    "ScanEntry",
    "PreScanner",
    "prioritise",
    "MerchantAggregator",
    "summarize_outcomes",
]
