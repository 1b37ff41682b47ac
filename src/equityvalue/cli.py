"""``equity-value`` command line entry point."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from equityvalue.calendar import QuarterPolicyType
from equityvalue.config import ReportConfig, ReportType, config_from_env
from equityvalue.errors import EquityValueError
from equityvalue.portfolio import load_portfolio
from equityvalue.render import daily_frame, incremental_frame, write_csv
from equityvalue.reports.daily import DailyValuationEngine
from equityvalue.reports.incremental import QuarterlyIncrementalEngine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="equity-value",
        description="Value RSU and stock option grants over time and write CSV.",
    )
    parser.add_argument(
        "report",
        nargs="?",
        choices=[r.value for r in ReportType],
        help="report to produce (default: daily, or $EQUITY_REPORT)",
    )
    parser.add_argument(
        "--portfolio", type=Path, help="portfolio directory (default: $EQUITY_PORTFOLIO_DIR)"
    )
    parser.add_argument(
        "--quarters",
        choices=[q.value for q in QuarterPolicyType],
        help="quarter convention for the incremental report",
    )
    parser.add_argument("--output", "-o", type=Path, help="CSV file (default: stdout)")
    parser.add_argument("--log-level", help="logging level, e.g. INFO or DEBUG")
    return parser


def resolve_config(args: argparse.Namespace, base: ReportConfig) -> ReportConfig:
    """Overlay command-line flags on ``base``."""
    overrides: dict = {}
    if args.report:
        overrides["report"] = ReportType(args.report)
    if args.portfolio:
        overrides["portfolio_dir"] = args.portfolio
    if args.quarters:
        overrides["quarter_policy"] = QuarterPolicyType(args.quarters)
    if args.output:
        overrides["output"] = args.output
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    return replace(base, **overrides)


def run(config: ReportConfig) -> None:
    """Load the portfolio, compute the configured report and write it."""
    portfolio = load_portfolio(config.portfolio_dir)
    if config.report is ReportType.DAILY:
        report = DailyValuationEngine(
            portfolio.prices, portfolio.rsu_grants, portfolio.option_grants
        ).run()
        frame = daily_frame(report)
    else:
        report = QuarterlyIncrementalEngine(
            portfolio.prices,
            portfolio.rsu_grants,
            portfolio.option_grants,
            policy=config.quarter_policy,
        ).run()
        frame = incremental_frame(report)
    write_csv(frame, config.output)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    load_dotenv(find_dotenv(usecwd=True))
    try:
        config = resolve_config(args, config_from_env())
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        run(config)
    except EquityValueError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
