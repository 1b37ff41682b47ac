"""Share price time series (step function over dates)."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date

from equityvalue.errors import NoValuationAvailable
from equityvalue.money import to_minor_units


@dataclass(frozen=True)
class PriceValuation:
    """Single recorded share price.

    Attributes:
        date: Date the price takes effect.
        price: Price per share in minor units.
    """

    date: date
    price: int


class PriceSeries:
    """Date-indexed share prices, held constant until superseded.

    Entries are normalized to ascending date order on construction; when the
    same date appears more than once the entry supplied last wins.
    """

    def __init__(self, valuations: Iterable[PriceValuation]) -> None:
        by_date: dict[date, PriceValuation] = {}
        for valuation in valuations:
            by_date[valuation.date] = valuation
        self._valuations: tuple[PriceValuation, ...] = tuple(
            by_date[d] for d in sorted(by_date)
        )
        self._dates: tuple[date, ...] = tuple(v.date for v in self._valuations)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[date, float]]) -> PriceSeries:
        """Build a series from ``(date, decimal_price)`` pairs."""
        return cls(PriceValuation(d, to_minor_units(price)) for d, price in pairs)

    def value_on(self, on: date) -> int:
        """Price in effect on ``on``: the latest entry dated on or before it.

        Raises:
            NoValuationAvailable: ``on`` precedes every recorded price.
        """
        idx = bisect_right(self._dates, on)
        if idx == 0:
            raise NoValuationAvailable(on)
        return self._valuations[idx - 1].price

    @property
    def first_date(self) -> date | None:
        return self._dates[0] if self._dates else None

    @property
    def last_date(self) -> date | None:
        return self._dates[-1] if self._dates else None

    def __len__(self) -> int:
        return len(self._valuations)

    def __iter__(self) -> Iterator[PriceValuation]:
        return iter(self._valuations)

    def __repr__(self) -> str:
        return f"PriceSeries({len(self)} valuations, {self.first_date} .. {self.last_date})"
