"""Daily mark-to-market valuation of a grant portfolio.

The report walks every calendar day from the earliest grant or vesting
commencement date to the last vesting event, inclusive. Each day is a pure
transition ``advance(state, day) -> (state, row)``:

1. grants dated that day add their full entitlement to the unvested balance;
2. vesting events dated that day move units from unvested to vested;
3. the day's price is looked up (a missing price aborts the run);
4. RSUs are valued at ``units * price`` and options at
   ``units * (price - exercise_price)``, which may be negative.

Option balances are kept as bundles per exercise price because a portfolio
can hold options at several strikes at once.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from equityvalue.calendar import iter_days
from equityvalue.models.grant import Grant, OptionGrant, RestrictedStockUnitGrant
from equityvalue.models.price import PriceSeries
from equityvalue.models.vesting import VestingEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionBundle:
    """Options sharing one exercise price."""

    units: int
    exercise_price: int

    def value_at(self, price: int) -> int:
        return self.units * (price - self.exercise_price)


@dataclass(frozen=True)
class DailyState:
    """Running unit balances carried from one day to the next."""

    rsu_vested_units: int = 0
    rsu_unvested_units: int = 0
    options_vested: tuple[OptionBundle, ...] = ()
    options_unvested: tuple[OptionBundle, ...] = ()


@dataclass(frozen=True)
class ValuationRow:
    """One day of the valuation timeline. Money is in minor units."""

    date: date
    price: int
    options_vested_units: int
    options_vested_total: int
    options_unvested_units: int
    options_unvested_total: int
    rsu_vested_units: int
    rsu_vested_total: int
    rsu_unvested_units: int
    rsu_unvested_total: int
    vested_total: int
    unvested_total: int
    grand_total: int

    @property
    def vested_units(self) -> int:
        return self.rsu_vested_units + self.options_vested_units

    @property
    def unvested_units(self) -> int:
        return self.rsu_unvested_units + self.options_unvested_units


@dataclass(frozen=True)
class DayActivity:
    """Grants and vesting events falling on a single day."""

    granted: tuple[Grant, ...] = ()
    vesting: tuple[tuple[Grant, VestingEvent], ...] = ()


@dataclass
class DailyValuationReport:
    """Dense daily timeline, one row per calendar day."""

    rows: list[ValuationRow] = field(default_factory=list)

    @property
    def start(self) -> date | None:
        return self.rows[0].date if self.rows else None

    @property
    def end(self) -> date | None:
        return self.rows[-1].date if self.rows else None

    def row_on(self, on: date) -> ValuationRow:
        if not self.rows or not self.rows[0].date <= on <= self.rows[-1].date:
            raise KeyError(on)
        return self.rows[(on - self.rows[0].date).days]


def _shift(
    bundles: tuple[OptionBundle, ...], exercise_price: int, delta: int,
) -> tuple[OptionBundle, ...]:
    merged = {b.exercise_price: b.units for b in bundles}
    merged[exercise_price] = merged.get(exercise_price, 0) + delta
    return tuple(
        OptionBundle(units, price) for price, units in sorted(merged.items()) if units
    )


def index_activity(grants: Iterable[Grant]) -> dict[date, DayActivity]:
    """Index grant dates and vesting events by day."""
    granted: dict[date, list[Grant]] = defaultdict(list)
    vesting: dict[date, list[tuple[Grant, VestingEvent]]] = defaultdict(list)
    for grant in grants:
        granted[grant.granted_on].append(grant)
        for event in grant.vesting_schedule.events:
            vesting[event.date].append((grant, event))
    return {
        day: DayActivity(tuple(granted.get(day, ())), tuple(vesting.get(day, ())))
        for day in granted.keys() | vesting.keys()
    }


def advance(
    state: DailyState,
    day: date,
    prices: PriceSeries,
    activity: DayActivity = DayActivity(),
) -> tuple[DailyState, ValuationRow]:
    """Apply one day's activity to ``state`` and value the result.

    Raises:
        NoValuationAvailable: No price is recorded on or before ``day``.
    """
    rsu_vested = state.rsu_vested_units
    rsu_unvested = state.rsu_unvested_units
    options_vested = state.options_vested
    options_unvested = state.options_unvested

    for grant in activity.granted:
        if isinstance(grant, OptionGrant):
            options_unvested = _shift(
                options_unvested, grant.value.exercise_price, grant.entitlement_units()
            )
        else:
            rsu_unvested += grant.entitlement_units()

    for grant, event in activity.vesting:
        if isinstance(grant, OptionGrant):
            strike = grant.value.exercise_price
            options_vested = _shift(options_vested, strike, event.units)
            options_unvested = _shift(options_unvested, strike, -event.units)
        else:
            rsu_vested += event.units
            rsu_unvested -= event.units

    price = prices.value_on(day)

    options_vested_total = sum(b.value_at(price) for b in options_vested)
    options_unvested_total = sum(b.value_at(price) for b in options_unvested)
    rsu_vested_total = rsu_vested * price
    rsu_unvested_total = rsu_unvested * price
    vested_total = rsu_vested_total + options_vested_total
    unvested_total = rsu_unvested_total + options_unvested_total

    new_state = DailyState(rsu_vested, rsu_unvested, options_vested, options_unvested)
    row = ValuationRow(
        date=day,
        price=price,
        options_vested_units=sum(b.units for b in options_vested),
        options_vested_total=options_vested_total,
        options_unvested_units=sum(b.units for b in options_unvested),
        options_unvested_total=options_unvested_total,
        rsu_vested_units=rsu_vested,
        rsu_vested_total=rsu_vested_total,
        rsu_unvested_units=rsu_unvested,
        rsu_unvested_total=rsu_unvested_total,
        vested_total=vested_total,
        unvested_total=unvested_total,
        grand_total=vested_total + unvested_total,
    )
    return new_state, row


class DailyValuationEngine:
    """Builds the daily valuation timeline for a set of grants.

    Usage::

        engine = DailyValuationEngine(prices, rsu_grants, option_grants)
        report = engine.run()
    """

    def __init__(
        self,
        prices: PriceSeries,
        rsu_grants: Sequence[RestrictedStockUnitGrant] = (),
        option_grants: Sequence[OptionGrant] = (),
    ) -> None:
        self.prices = prices
        self.grants: tuple[Grant, ...] = (*option_grants, *rsu_grants)

    def date_range(self) -> tuple[date, date] | None:
        """First and last day of the timeline, or None without grants."""
        if not self.grants:
            return None
        start = min(
            min(g.granted_on, g.vesting_schedule.commences_on) for g in self.grants
        )
        end = max(
            g.vesting_schedule.last_event_date or g.granted_on for g in self.grants
        )
        return start, end

    def run(self) -> DailyValuationReport:
        span = self.date_range()
        if span is None:
            logger.warning("No grants to value; daily report is empty")
            return DailyValuationReport()

        start, end = span
        activity = index_activity(self.grants)
        idle = DayActivity()
        state = DailyState()
        rows: list[ValuationRow] = []
        for day in iter_days(start, end):
            state, row = advance(state, day, self.prices, activity.get(day, idle))
            rows.append(row)

        logger.info(
            "Daily valuation of %d grant(s) from %s to %s: %d rows",
            len(self.grants), start, end, len(rows),
        )
        return DailyValuationReport(rows)
