"""Vesting schedule materialization.

Turns a grant's vesting definition into a concrete, date-sorted list of
vesting events whose unit counts add up exactly to the grant's entitlement.
Two definitions are supported:

* explicit events, passed through after sorting by date;
* an interval schedule (``commences_on`` + interval + duration in years),
  expanded into evenly spaced events with remainder-carry rounding.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from fractions import Fraction

from equityvalue.calendar import add_months
from equityvalue.errors import InvalidScheduleDefinition
from equityvalue.models.vesting import VestingEvent, VestingInterval, VestingSchedule

logger = logging.getLogger(__name__)


def materialize_events(
    commences_on: date,
    events: Iterable[VestingEvent],
    grant_name: str | None = None,
) -> VestingSchedule:
    """Build a schedule from explicitly listed events.

    Raises:
        InvalidScheduleDefinition: No events, or an event with negative units.
    """
    events = tuple(events)
    if not events:
        raise InvalidScheduleDefinition("vesting schedule has no events", grant_name)
    negative = [e for e in events if e.units < 0]
    if negative:
        raise InvalidScheduleDefinition(
            f"negative unit count on {negative[0].date.isoformat()}", grant_name
        )
    return VestingSchedule(commences_on, events)


def total_units_for(total_value: int, unit_price: int) -> int:
    """Unit entitlement for a grant value: ``ceil(total_value / unit_price)``."""
    return -(-total_value // unit_price)


def distribute_units(total_units: int, count: int) -> list[int]:
    """Split ``total_units`` over ``count`` events with remainder carry.

    Each event gets the floor of its ideal share plus the fraction carried
    from the events before it, so the parts sum to ``total_units`` exactly
    and any remainder is spread across the schedule.

    >>> distribute_units(8004, 8)
    [1000, 1001, 1000, 1001, 1000, 1001, 1000, 1001]
    """
    share = Fraction(total_units, count)
    carry = Fraction(0)
    parts: list[int] = []
    for _ in range(count):
        ideal = share + carry
        units = int(ideal)  # floor, ideal is never negative
        parts.append(units)
        carry = ideal - units
    return parts


def materialize_interval_schedule(
    commences_on: date,
    interval: VestingInterval,
    duration_years: int,
    total_value: int,
    unit_price: int,
    grant_name: str | None = None,
) -> VestingSchedule:
    """Expand an interval schedule into dated events.

    Events fall every ``interval`` months after ``commences_on``, each one
    advanced from the previous event date, for ``duration_years`` years.

    Args:
        commences_on: Vesting start; the first event is one interval later.
        interval: Step between events.
        duration_years: Total vesting duration.
        total_value: Grant value in minor units.
        unit_price: Price per unit in minor units.
        grant_name: Used in error messages.

    Raises:
        InvalidScheduleDefinition: Zero events or a non-positive unit price.
    """
    if unit_price <= 0:
        raise InvalidScheduleDefinition(
            f"unit price must be positive, got {unit_price}", grant_name
        )
    if total_value < 0:
        raise InvalidScheduleDefinition(
            f"total value must not be negative, got {total_value}", grant_name
        )

    count = duration_years * 12 // interval.months
    if count <= 0:
        raise InvalidScheduleDefinition(
            f"{duration_years} year(s) of {interval.value} vesting yields no events",
            grant_name,
        )

    total_units = total_units_for(total_value, unit_price)
    events: list[VestingEvent] = []
    on = commences_on
    for units in distribute_units(total_units, count):
        on = add_months(on, interval.months)
        events.append(VestingEvent(on, units))

    logger.debug(
        "Materialized %d %s events (%d units) from %s for %s",
        count, interval.value, total_units, commences_on, grant_name or "<unnamed>",
    )
    return VestingSchedule(commences_on, tuple(events))
