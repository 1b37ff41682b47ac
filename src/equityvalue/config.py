"""Report run configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from equityvalue.calendar import QuarterPolicyType


class ReportType(Enum):
    """Available reports."""

    DAILY = "daily"
    INCREMENTAL = "incremental"


@dataclass
class ReportConfig:
    """Configuration for a single report run.

    Attributes:
        portfolio_dir: Directory holding the portfolio YAML files.
        report: Which report to produce.
        quarter_policy: Quarter convention for the incremental report.
        output: CSV destination; None writes to stdout.
        log_level: Logging level name.
    """

    portfolio_dir: Path = Path("portfolio")
    report: ReportType = ReportType.DAILY
    quarter_policy: QuarterPolicyType = QuarterPolicyType.CALENDAR
    output: Path | None = None
    log_level: str = "WARNING"


def config_from_env() -> ReportConfig:
    """Build a config from environment variables.

    Environment variables:
        EQUITY_PORTFOLIO_DIR: Portfolio directory (default: "portfolio").
        EQUITY_REPORT: "daily" or "incremental" (default: "daily").
        EQUITY_QUARTERS: "calendar" or "skewed" (default: "calendar").
        EQUITY_OUTPUT: Output CSV path (default: stdout).
        EQUITY_LOG_LEVEL: Logging level (default: "WARNING").
    """
    output = os.getenv("EQUITY_OUTPUT")
    return ReportConfig(
        portfolio_dir=Path(os.getenv("EQUITY_PORTFOLIO_DIR", "portfolio")),
        report=ReportType(os.getenv("EQUITY_REPORT", "daily").strip().lower()),
        quarter_policy=QuarterPolicyType(
            os.getenv("EQUITY_QUARTERS", "calendar").strip().lower()
        ),
        output=Path(output) if output else None,
        log_level=os.getenv("EQUITY_LOG_LEVEL", "WARNING").upper(),
    )
