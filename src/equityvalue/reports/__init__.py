"""Valuation reports built from a price series and a set of grants."""

from equityvalue.reports.daily import (
    DailyState,
    DailyValuationEngine,
    DailyValuationReport,
    OptionBundle,
    ValuationRow,
    advance,
)
from equityvalue.reports.incremental import (
    IncrementalReport,
    QuarterLine,
    QuarterlyIncrementalEngine,
)

__all__ = [
    "DailyState",
    "DailyValuationEngine",
    "DailyValuationReport",
    "OptionBundle",
    "ValuationRow",
    "advance",
    "IncrementalReport",
    "QuarterLine",
    "QuarterlyIncrementalEngine",
]
