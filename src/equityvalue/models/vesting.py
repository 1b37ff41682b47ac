"""Vesting event and schedule data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class VestingInterval(Enum):
    """Step between generated vesting events, in calendar months."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUALLY = "semiannually"
    ANNUALLY = "annually"

    @property
    def months(self) -> int:
        return _INTERVAL_MONTHS[self]


_INTERVAL_MONTHS = {
    VestingInterval.MONTHLY: 1,
    VestingInterval.QUARTERLY: 3,
    VestingInterval.SEMIANNUALLY: 6,
    VestingInterval.ANNUALLY: 12,
}


@dataclass(frozen=True)
class VestingEvent:
    """Units that become owned on a given date.

    Attributes:
        date: Vesting date.
        units: Number of units vesting (non-negative).
    """

    date: date
    units: int


@dataclass(frozen=True)
class VestingSchedule:
    """Dated vesting events for one grant, kept sorted by date.

    Attributes:
        commences_on: Date vesting starts accruing.
        events: Vesting events in ascending date order.
    """

    commences_on: date
    events: tuple[VestingEvent, ...]

    def __post_init__(self) -> None:
        # frozen: sort through object.__setattr__
        object.__setattr__(
            self, "events", tuple(sorted(self.events, key=lambda e: e.date))
        )

    def total_units(self) -> int:
        return sum(e.units for e in self.events)

    @property
    def first_event_date(self) -> date | None:
        return self.events[0].date if self.events else None

    @property
    def last_event_date(self) -> date | None:
        return self.events[-1].date if self.events else None
