"""Equity valuation data models."""

from equityvalue.models.grant import (
    Grant,
    OptionGrant,
    OptionGrantValue,
    RestrictedStockUnitGrant,
    RestrictedStockUnitValue,
)
from equityvalue.models.price import PriceSeries, PriceValuation
from equityvalue.models.vesting import VestingEvent, VestingInterval, VestingSchedule

__all__ = [
    "PriceSeries",
    "PriceValuation",
    "VestingEvent",
    "VestingInterval",
    "VestingSchedule",
    "Grant",
    "OptionGrant",
    "OptionGrantValue",
    "RestrictedStockUnitGrant",
    "RestrictedStockUnitValue",
]
