"""Date arithmetic and quarter windows for vesting reports.

Two quarter conventions are supported:

* calendar quarters starting Jan 1 / Apr 1 / Jul 1 / Oct 1;
* skewed quarters starting Dec 17 / Mar 17 / Jun 17 / Sep 17, where days
  1-16 of a month belong to the quarter that started the month before.

Windows are inclusive on both ends and consecutive windows neither overlap
nor leave gaps.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from dateutil.relativedelta import relativedelta

QUARTER_MONTHS = 3
SKEWED_QUARTER_DAY = 17


# ---- Month / day arithmetic ----

def add_months(d: date, months: int) -> date:
    """Advance by calendar months, clamping to the last day of short months.

    ``add_months(date(2024, 1, 31), 1)`` is ``date(2024, 2, 29)``.
    """
    return d + relativedelta(months=months)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day in ``[start, end]``."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


# ---- Quarter windows ----

@dataclass(frozen=True)
class QuarterWindow:
    """Inclusive date range ``[start, end]`` of one quarter."""

    start: date
    end: date

    def __contains__(self, d: date) -> bool:
        return self.start <= d <= self.end

    def next(self) -> QuarterWindow:
        return _window_from(add_months(self.start, QUARTER_MONTHS))


def _window_from(start: date) -> QuarterWindow:
    return QuarterWindow(start, add_months(start, QUARTER_MONTHS) - timedelta(days=1))


class QuarterPolicy(ABC):
    """Strategy deciding where quarter windows begin."""

    name: str

    @abstractmethod
    def quarter_start(self, d: date) -> date:
        """First day of the quarter containing ``d``."""
        ...

    def window_containing(self, d: date) -> QuarterWindow:
        return _window_from(self.quarter_start(d))

    def windows_between(self, start: date, end: date) -> list[QuarterWindow]:
        """All windows from the one containing ``start`` to the one containing ``end``."""
        if end < start:
            return []
        windows: list[QuarterWindow] = []
        window = self.window_containing(start)
        while window.start <= end:
            windows.append(window)
            window = window.next()
        return windows


class CalendarQuarters(QuarterPolicy):
    """Quarters starting Jan 1 / Apr 1 / Jul 1 / Oct 1."""

    name = "calendar"

    def quarter_start(self, d: date) -> date:
        # month 1-3 -> 1, 4-6 -> 4, 7-9 -> 7, 10-12 -> 10
        first_month = (d.month - 1) // QUARTER_MONTHS * QUARTER_MONTHS + 1
        return date(d.year, first_month, 1)


class SkewedQuarters(QuarterPolicy):
    """Quarters starting Dec 17 / Mar 17 / Jun 17 / Sep 17."""

    name = "skewed"

    def quarter_start(self, d: date) -> date:
        anchor = date(d.year, d.month, SKEWED_QUARTER_DAY)
        if d.day < SKEWED_QUARTER_DAY:
            anchor = add_months(anchor, -1)
        # Skewed quarters open in months 3, 6, 9 and 12
        return add_months(anchor, -(anchor.month % QUARTER_MONTHS))


class QuarterPolicyType(Enum):
    """Selectable quarter conventions."""

    CALENDAR = "calendar"
    SKEWED = "skewed"


_POLICIES: dict[QuarterPolicyType, QuarterPolicy] = {
    QuarterPolicyType.CALENDAR: CalendarQuarters(),
    QuarterPolicyType.SKEWED: SkewedQuarters(),
}


def get_quarter_policy(policy: QuarterPolicyType | str) -> QuarterPolicy:
    """Look up a quarter policy by enum member or name."""
    return _POLICIES[QuarterPolicyType(policy)]
