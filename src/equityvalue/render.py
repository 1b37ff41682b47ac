"""Render reports as CSV via pandas DataFrames."""

from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd

from equityvalue.money import format_currency
from equityvalue.reports.daily import DailyValuationReport
from equityvalue.reports.incremental import IncrementalReport

DAILY_COLUMNS = [
    "Date",
    "Preferred Stock Price",
    "Options Vested Units",
    "Options Vested Total",
    "Options Unvested Units",
    "Options Unvested Total",
    "RSUs Vested Units",
    "RSUs Vested Total",
    "RSUs Unvested Units",
    "RSUs Unvested Total",
    "Vested Units",
    "Vested Total",
    "Unvested Units",
    "Unvested Total",
    "Grand Total",
]


def daily_frame(report: DailyValuationReport) -> pd.DataFrame:
    """One display row per day; money columns are preformatted strings."""
    records = [
        [
            row.date.isoformat(),
            format_currency(row.price),
            row.options_vested_units,
            format_currency(row.options_vested_total),
            row.options_unvested_units,
            format_currency(row.options_unvested_total),
            row.rsu_vested_units,
            format_currency(row.rsu_vested_total),
            row.rsu_unvested_units,
            format_currency(row.rsu_unvested_total),
            row.vested_units,
            format_currency(row.vested_total),
            row.unvested_units,
            format_currency(row.unvested_total),
            format_currency(row.grand_total),
        ]
        for row in report.rows
    ]
    return pd.DataFrame(records, columns=DAILY_COLUMNS)


def incremental_frame(report: IncrementalReport) -> pd.DataFrame:
    """One display row per quarter, one column per grant."""
    columns = ["Quarter Start", "Quarter End", *report.grant_names, "Total"]
    records = [
        [
            line.start.isoformat(),
            line.end.isoformat(),
            *(format_currency(v) for v in line.by_grant),
            format_currency(line.total),
        ]
        for line in report.lines
    ]
    return pd.DataFrame(records, columns=columns)


def write_csv(frame: pd.DataFrame, output: Path | str | None = None) -> None:
    """Write ``frame`` as CSV to ``output``, or to stdout when None."""
    if output is None:
        frame.to_csv(sys.stdout, index=False, lineterminator="\n")
    else:
        frame.to_csv(Path(output), index=False, lineterminator="\n")
