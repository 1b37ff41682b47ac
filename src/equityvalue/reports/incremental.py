"""Quarter-by-quarter value realized by vesting events.

Each quarter window sums, per grant, ``units * unit_value`` over the vesting
events dated inside the window. The unit value is always taken at the
event's own date (price for RSUs, price minus strike for options), never at
the window boundary. Windows with no events still produce an all-zero line.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from equityvalue.calendar import (
    CalendarQuarters,
    QuarterPolicy,
    QuarterPolicyType,
    QuarterWindow,
    get_quarter_policy,
)
from equityvalue.errors import NoValuationAvailable
from equityvalue.models.grant import Grant, OptionGrant, RestrictedStockUnitGrant
from equityvalue.models.price import PriceSeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuarterLine:
    """Realized value for one quarter window, in minor units.

    Attributes:
        start: First day of the window (inclusive).
        end: Last day of the window (inclusive).
        by_grant: Value per grant, in report column order.
        total: Sum over all grants.
    """

    start: date
    end: date
    by_grant: tuple[int, ...]
    total: int


@dataclass
class IncrementalReport:
    """Quarter lines plus the grant names giving their column order."""

    grant_names: list[str] = field(default_factory=list)
    lines: list[QuarterLine] = field(default_factory=list)

    def grant_total(self, name: str) -> int:
        """Value realized by one grant over the whole report.

        Raises:
            KeyError: No grant has this name.
            ValueError: More than one grant has this name.
        """
        matches = [i for i, n in enumerate(self.grant_names) if n == name]
        if not matches:
            raise KeyError(name)
        if len(matches) > 1:
            raise ValueError(f"grant name '{name}' is not unique in this report")
        idx = matches[0]
        return sum(line.by_grant[idx] for line in self.lines)

    @property
    def total(self) -> int:
        return sum(line.total for line in self.lines)


def realized_value(grant: Grant, window: QuarterWindow, prices: PriceSeries) -> int:
    """Value realized by ``grant``'s vesting events inside ``window``.

    Raises:
        NoValuationAvailable: An event in the window predates every price.
    """
    total = 0
    for event in grant.vesting_schedule.events:
        if event.date not in window:
            continue
        try:
            price = prices.value_on(event.date)
        except NoValuationAvailable as e:
            raise NoValuationAvailable(e.on, grant_name=grant.name) from e
        total += event.units * grant.unit_value(price)
    return total


class QuarterlyIncrementalEngine:
    """Builds the incremental vesting report over quarter windows.

    Option grants come first in column order, followed by RSU grants.
    """

    def __init__(
        self,
        prices: PriceSeries,
        rsu_grants: Sequence[RestrictedStockUnitGrant] = (),
        option_grants: Sequence[OptionGrant] = (),
        policy: QuarterPolicy | QuarterPolicyType | str | None = None,
    ) -> None:
        self.prices = prices
        self.grants: tuple[Grant, ...] = (*option_grants, *rsu_grants)
        if policy is None:
            self.policy: QuarterPolicy = CalendarQuarters()
        elif isinstance(policy, QuarterPolicy):
            self.policy = policy
        else:
            self.policy = get_quarter_policy(policy)

    def windows(self) -> list[QuarterWindow]:
        """Windows from the earliest commencement to the latest vesting event."""
        if not self.grants:
            return []
        start = min(g.vesting_schedule.commences_on for g in self.grants)
        end = max(
            g.vesting_schedule.last_event_date or g.vesting_schedule.commences_on
            for g in self.grants
        )
        return self.policy.windows_between(start, end)

    def run(self) -> IncrementalReport:
        names = [g.name for g in self.grants]
        if not self.grants:
            logger.warning("No grants to value; incremental report is empty")
            return IncrementalReport(names)

        lines: list[QuarterLine] = []
        for window in self.windows():
            by_grant = tuple(realized_value(g, window, self.prices) for g in self.grants)
            lines.append(QuarterLine(window.start, window.end, by_grant, sum(by_grant)))

        logger.info(
            "Incremental %s-quarter report of %d grant(s): %d quarters",
            self.policy.name, len(self.grants), len(lines),
        )
        return IncrementalReport(names, lines)
