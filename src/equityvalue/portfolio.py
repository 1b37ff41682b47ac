"""Load a portfolio (prices + grants) from a directory of YAML files.

Layout::

    <portfolio>/prices.yaml          required (psp.yaml accepted instead)
    <portfolio>/rsu_grants.yaml      optional
    <portfolio>/option_grants.yaml   optional

Every file is a stream of YAML documents. Price documents are mappings
``{date, price}`` (or lists of them); each grant file holds one grant per
document. Currency amounts are decimal and converted to minor units here:
share prices in double precision, grant terms in single precision.
Grant names must be unique across both grant files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from equityvalue.errors import MalformedInput
from equityvalue.models.grant import (
    OptionGrant,
    OptionGrantValue,
    RestrictedStockUnitGrant,
    RestrictedStockUnitValue,
)
from equityvalue.models.price import PriceSeries, PriceValuation
from equityvalue.models.vesting import VestingEvent, VestingInterval
from equityvalue.money import to_minor_units
from equityvalue.vesting import materialize_events, materialize_interval_schedule

logger = logging.getLogger(__name__)

PRICES_FILE = "prices.yaml"
LEGACY_PRICES_FILE = "psp.yaml"
RSU_GRANTS_FILE = "rsu_grants.yaml"
OPTION_GRANTS_FILE = "option_grants.yaml"

DATE_FORMAT = "%Y-%m-%d"


@dataclass
class Portfolio:
    """Everything a report run needs."""

    prices: PriceSeries
    rsu_grants: list[RestrictedStockUnitGrant] = field(default_factory=list)
    option_grants: list[OptionGrant] = field(default_factory=list)


# ---- field helpers ----

def _field(doc: Any, key: str, path: Path) -> Any:
    if not isinstance(doc, dict):
        raise MalformedInput(f"expected a mapping, got {type(doc).__name__}", path)
    if key not in doc or doc[key] is None:
        raise MalformedInput(f"missing required field '{key}'", path)
    return doc[key]


def _date(value: Any, key: str, path: Path) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), DATE_FORMAT).date()
        except ValueError:
            pass
    raise MalformedInput(f"'{key}' must be a YYYY-MM-DD date, got {value!r}", path)


def _number(value: Any, key: str, path: Path) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedInput(f"'{key}' must be a number, got {value!r}", path)
    return float(value)


def _integer(value: Any, key: str, path: Path) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInput(f"'{key}' must be an integer, got {value!r}", path)
    return value


def _read_documents(path: Path) -> list[Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MalformedInput(f"unable to read file ({e.strerror})", path) from e
    try:
        return [doc for doc in yaml.safe_load_all(text) if doc is not None]
    except yaml.YAMLError as e:
        raise MalformedInput(f"invalid YAML: {e}", path) from e


# ---- prices ----

def _prices_path(portfolio_dir: Path) -> Path:
    path = portfolio_dir / PRICES_FILE
    if path.exists():
        return path
    legacy = portfolio_dir / LEGACY_PRICES_FILE
    if legacy.exists():
        return legacy
    raise MalformedInput(
        f"price file not found (also looked for {LEGACY_PRICES_FILE})", path
    )


def load_prices(portfolio_dir: Path | str) -> PriceSeries:
    """Load the price series from ``prices.yaml``, or ``psp.yaml`` if absent."""
    path = _prices_path(Path(portfolio_dir))

    valuations: list[PriceValuation] = []
    for doc in _read_documents(path):
        entries = doc if isinstance(doc, list) else [doc]
        for entry in entries:
            on = _date(_field(entry, "date", path), "date", path)
            price = _number(_field(entry, "price", path), "price", path)
            valuations.append(PriceValuation(on, to_minor_units(price)))

    if not valuations:
        raise MalformedInput("no prices defined", path)
    logger.info("Loaded %d price(s) from %s", len(valuations), path)
    return PriceSeries(valuations)


# ---- RSU grants ----

def _rsu_grant(doc: Any, path: Path) -> RestrictedStockUnitGrant:
    name = str(_field(doc, "name", path))
    granted_on = _date(_field(doc, "date", path), "date", path)

    grant_value = _field(doc, "grant_value", path)
    value = RestrictedStockUnitValue(
        grant_price=to_minor_units(
            _number(_field(grant_value, "grant_price", path), "grant_price", path),
            single_precision=True,
        ),
        total_value=to_minor_units(
            _number(_field(grant_value, "total_value", path), "total_value", path),
            single_precision=True,
        ),
    )

    vesting = _field(doc, "vesting", path)
    commences_on = _date(_field(vesting, "commences_on", path), "commences_on", path)
    has_schedule = vesting.get("schedule") is not None
    has_events = vesting.get("events") is not None
    if has_schedule == has_events:
        raise MalformedInput(
            f"grant '{name}' vesting needs exactly one of 'schedule' or 'events'", path
        )

    if has_schedule:
        schedule_doc = vesting["schedule"]
        raw_interval = _field(schedule_doc, "interval", path)
        try:
            interval = VestingInterval(raw_interval)
        except ValueError:
            raise MalformedInput(
                f"grant '{name}' has unknown vesting interval {raw_interval!r}", path
            ) from None
        over = _field(schedule_doc, "over", path)
        years = _integer(_field(over, "year", path), "year", path)
        schedule = materialize_interval_schedule(
            commences_on,
            interval,
            years,
            total_value=value.total_value,
            unit_price=value.grant_price,
            grant_name=name,
        )
    else:
        raw_events = vesting["events"]
        if not isinstance(raw_events, list):
            raise MalformedInput(f"grant '{name}' events must be a list", path)
        events = [
            VestingEvent(
                _date(_field(e, "date", path), "date", path),
                _integer(_field(e, "number", path), "number", path),
            )
            for e in raw_events
        ]
        schedule = materialize_events(commences_on, events, grant_name=name)

    return RestrictedStockUnitGrant(name, granted_on, value, schedule)


def load_rsu_grants(portfolio_dir: Path | str) -> list[RestrictedStockUnitGrant]:
    """Load RSU grants from ``rsu_grants.yaml``; a missing file means none."""
    path = Path(portfolio_dir) / RSU_GRANTS_FILE
    if not path.exists():
        logger.info("No RSU grant file at %s", path)
        return []
    grants = [_rsu_grant(doc, path) for doc in _read_documents(path)]
    logger.info("Loaded %d RSU grant(s) from %s", len(grants), path)
    return grants


# ---- option grants ----

def _option_grant(doc: Any, path: Path) -> OptionGrant:
    name = str(_field(doc, "name", path))
    granted_on = _date(_field(doc, "date", path), "date", path)

    grant_value = _field(doc, "grant_value", path)
    value = OptionGrantValue(
        exercise_price=to_minor_units(
            _number(_field(grant_value, "exercise_price", path), "exercise_price", path),
            single_precision=True,
        ),
        units=_integer(_field(grant_value, "shares", path), "shares", path),
    )

    schedule_doc = _field(doc, "vesting_schedule", path)
    commences_on = _date(_field(schedule_doc, "commences_on", path), "commences_on", path)
    raw_events = _field(schedule_doc, "events", path)
    if not isinstance(raw_events, list):
        raise MalformedInput(f"grant '{name}' events must be a list", path)
    events = [
        VestingEvent(
            _date(_field(e, "date", path), "date", path),
            _integer(_field(e, "number_of_shares", path), "number_of_shares", path),
        )
        for e in raw_events
    ]
    schedule = materialize_events(commences_on, events, grant_name=name)
    return OptionGrant(name, granted_on, value, schedule)


def load_option_grants(portfolio_dir: Path | str) -> list[OptionGrant]:
    """Load option grants from ``option_grants.yaml``; a missing file means none."""
    path = Path(portfolio_dir) / OPTION_GRANTS_FILE
    if not path.exists():
        logger.info("No option grant file at %s", path)
        return []
    grants = [_option_grant(doc, path) for doc in _read_documents(path)]
    logger.info("Loaded %d option grant(s) from %s", len(grants), path)
    return grants


def load_portfolio(portfolio_dir: Path | str) -> Portfolio:
    """Load prices and all grants from ``portfolio_dir``."""
    portfolio_dir = Path(portfolio_dir)
    if not portfolio_dir.is_dir():
        raise MalformedInput("portfolio directory not found", portfolio_dir)
    portfolio = Portfolio(
        prices=load_prices(portfolio_dir),
        rsu_grants=load_rsu_grants(portfolio_dir),
        option_grants=load_option_grants(portfolio_dir),
    )

    # Report columns are keyed by grant name
    seen: set[str] = set()
    for grant in (*portfolio.option_grants, *portfolio.rsu_grants):
        if grant.name in seen:
            raise MalformedInput(f"duplicate grant name '{grant.name}'", portfolio_dir)
        seen.add(grant.name)
    return portfolio
