"""Shared fixtures for equityvalue tests."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from equityvalue.models.grant import (
    OptionGrant,
    OptionGrantValue,
    RestrictedStockUnitGrant,
    RestrictedStockUnitValue,
)
from equityvalue.models.price import PriceSeries, PriceValuation
from equityvalue.models.vesting import VestingEvent, VestingInterval, VestingSchedule
from equityvalue.vesting import materialize_interval_schedule


@pytest.fixture
def prices() -> PriceSeries:
    """$10.00 from 2024-01-01, $15.00 from 2024-07-01."""
    return PriceSeries([
        PriceValuation(date(2024, 7, 1), 1500),
        PriceValuation(date(2024, 1, 1), 1000),
    ])


@pytest.fixture
def rsu_grant() -> RestrictedStockUnitGrant:
    """$8000.00 at $1.00/unit, quarterly over 2 years from 2024-01-01."""
    schedule = materialize_interval_schedule(
        date(2024, 1, 1),
        VestingInterval.QUARTERLY,
        2,
        total_value=800000,
        unit_price=100,
        grant_name="Initial",
    )
    return RestrictedStockUnitGrant(
        name="Initial",
        granted_on=date(2024, 1, 1),
        value=RestrictedStockUnitValue(grant_price=100, total_value=800000),
        vesting_schedule=schedule,
    )


@pytest.fixture
def option_grant() -> OptionGrant:
    """400 options struck at $5.00, half vesting 2025-01-01, half 2026-01-01."""
    return OptionGrant(
        name="Options",
        granted_on=date(2024, 1, 1),
        value=OptionGrantValue(exercise_price=500, units=400),
        vesting_schedule=VestingSchedule(
            date(2024, 1, 1),
            (
                VestingEvent(date(2026, 1, 1), 200),
                VestingEvent(date(2025, 1, 1), 200),
            ),
        ),
    )


PRICES_YAML = """\
date: 2024-01-01
price: 10.00
---
date: 2024-07-01
price: 15.00
"""

RSU_GRANTS_YAML = """\
name: Initial
date: 2024-01-01
grant_value:
  grant_price: 1.00
  total_value: 8004.00
vesting:
  commences_on: 2024-01-01
  schedule:
    interval: quarterly
    over:
      year: 2
---
name: Refresh
date: 2024-06-01
grant_value:
  grant_price: 10.00
  total_value: 1000.00
vesting:
  commences_on: 2024-06-01
  events:
    - date: 2025-06-01
      number: 50
    - date: 2024-12-01
      number: 50
"""

OPTION_GRANTS_YAML = """\
name: Options
date: 2024-01-01
grant_value:
  exercise_price: 5.00
  shares: 400
vesting_schedule:
  commences_on: 2024-01-01
  events:
    - date: 2025-01-01
      number_of_shares: 200
    - date: "2026-01-01"
      number_of_shares: 200
"""


@pytest.fixture
def portfolio_dir(tmp_path: Path) -> Path:
    """Portfolio directory with prices, two RSU grants and one option grant."""
    root = tmp_path / "portfolio"
    root.mkdir()
    (root / "prices.yaml").write_text(PRICES_YAML)
    (root / "rsu_grants.yaml").write_text(RSU_GRANTS_YAML)
    (root / "option_grants.yaml").write_text(OPTION_GRANTS_YAML)
    return root
