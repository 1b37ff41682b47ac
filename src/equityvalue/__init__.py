"""equityvalue — value equity compensation over time.

Materializes RSU and stock option vesting schedules and values them against
a step-function share price series, producing a daily valuation timeline
and a quarter-bucketed incremental vesting report.

Quick start::

    from equityvalue import DailyValuationEngine, load_portfolio
    portfolio = load_portfolio("portfolio")
    report = DailyValuationEngine(
        portfolio.prices, portfolio.rsu_grants, portfolio.option_grants
    ).run()
"""

from __future__ import annotations

from equityvalue.calendar import (
    CalendarQuarters,
    QuarterPolicy,
    QuarterPolicyType,
    QuarterWindow,
    SkewedQuarters,
    get_quarter_policy,
)
from equityvalue.config import ReportConfig, ReportType, config_from_env
from equityvalue.errors import (
    EquityValueError,
    EquityValueErrorCode,
    InvalidScheduleDefinition,
    MalformedInput,
    NoValuationAvailable,
)
from equityvalue.models.grant import (
    OptionGrant,
    OptionGrantValue,
    RestrictedStockUnitGrant,
    RestrictedStockUnitValue,
)
from equityvalue.models.price import PriceSeries, PriceValuation
from equityvalue.models.vesting import VestingEvent, VestingInterval, VestingSchedule
from equityvalue.money import format_currency, to_minor_units
from equityvalue.portfolio import Portfolio, load_portfolio
from equityvalue.reports.daily import DailyValuationEngine, DailyValuationReport, ValuationRow
from equityvalue.reports.incremental import (
    IncrementalReport,
    QuarterLine,
    QuarterlyIncrementalEngine,
)
from equityvalue.vesting import materialize_events, materialize_interval_schedule

__version__ = "0.1.0"

__all__ = [
    # Engines
    "DailyValuationEngine",
    "DailyValuationReport",
    "ValuationRow",
    "QuarterlyIncrementalEngine",
    "IncrementalReport",
    "QuarterLine",
    # Quarters
    "QuarterPolicy",
    "QuarterPolicyType",
    "QuarterWindow",
    "CalendarQuarters",
    "SkewedQuarters",
    "get_quarter_policy",
    # Models
    "PriceSeries",
    "PriceValuation",
    "VestingEvent",
    "VestingInterval",
    "VestingSchedule",
    "OptionGrant",
    "OptionGrantValue",
    "RestrictedStockUnitGrant",
    "RestrictedStockUnitValue",
    # Vesting materialization
    "materialize_events",
    "materialize_interval_schedule",
    # Money
    "to_minor_units",
    "format_currency",
    # Portfolio loading / config
    "Portfolio",
    "load_portfolio",
    "ReportConfig",
    "ReportType",
    "config_from_env",
    # Errors
    "EquityValueError",
    "EquityValueErrorCode",
    "NoValuationAvailable",
    "InvalidScheduleDefinition",
    "MalformedInput",
]
