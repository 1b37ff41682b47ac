"""Equity grant data models (RSUs and stock options)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Union

from equityvalue.errors import InvalidScheduleDefinition
from equityvalue.models.vesting import VestingSchedule


@dataclass(frozen=True)
class RestrictedStockUnitValue:
    """Value terms of an RSU grant.

    Attributes:
        grant_price: Unit price used to size the grant, in minor units.
        total_value: Total grant value, in minor units.
    """

    grant_price: int
    total_value: int


@dataclass(frozen=True)
class OptionGrantValue:
    """Value terms of a stock option grant.

    Attributes:
        exercise_price: Strike price per share, in minor units.
        units: Number of options granted.
    """

    exercise_price: int
    units: int


@dataclass(frozen=True)
class RestrictedStockUnitGrant:
    """RSU grant with a materialized vesting schedule."""

    name: str
    granted_on: date
    value: RestrictedStockUnitValue
    vesting_schedule: VestingSchedule

    def total_vested_units(self) -> int:
        """Units vested once every event has occurred."""
        return self.vesting_schedule.total_units()

    def entitlement_units(self) -> int:
        return self.total_vested_units()

    def unit_value(self, price: int) -> int:
        """Value realized per vesting unit at ``price``."""
        return price


@dataclass(frozen=True)
class OptionGrant:
    """Stock option grant with an explicit vesting schedule.

    The schedule's events must account for every option granted.
    """

    name: str
    granted_on: date
    value: OptionGrantValue
    vesting_schedule: VestingSchedule

    def __post_init__(self) -> None:
        scheduled = self.vesting_schedule.total_units()
        if scheduled != self.value.units:
            raise InvalidScheduleDefinition(
                f"vesting events total {scheduled} options but "
                f"{self.value.units} were granted",
                grant_name=self.name,
            )

    def total_vested_units(self) -> int:
        return self.vesting_schedule.total_units()

    def entitlement_units(self) -> int:
        return self.value.units

    def unit_value(self, price: int) -> int:
        """Spread per option at ``price``; negative when under water."""
        return price - self.value.exercise_price


Grant = Union[OptionGrant, RestrictedStockUnitGrant]
