"""Tests for loading a portfolio from YAML files."""

from datetime import date

import pytest

from equityvalue.errors import EquityValueErrorCode, InvalidScheduleDefinition, MalformedInput
from equityvalue.portfolio import (
    load_option_grants,
    load_portfolio,
    load_prices,
    load_rsu_grants,
)


class TestLoadPortfolio:
    def test_prices(self, portfolio_dir):
        prices = load_prices(portfolio_dir)
        assert len(prices) == 2
        assert prices.value_on(date(2024, 6, 30)) == 1000
        assert prices.value_on(date(2024, 7, 1)) == 1500

    def test_interval_rsu_grant(self, portfolio_dir):
        initial = load_rsu_grants(portfolio_dir)[0]
        assert initial.name == "Initial"
        assert initial.granted_on == date(2024, 1, 1)
        assert initial.value.grant_price == 100
        assert initial.value.total_value == 800400
        assert len(initial.vesting_schedule.events) == 8
        assert initial.total_vested_units() == 8004

    def test_explicit_rsu_grant_sorted(self, portfolio_dir):
        refresh = load_rsu_grants(portfolio_dir)[1]
        assert [e.date for e in refresh.vesting_schedule.events] == [
            date(2024, 12, 1), date(2025, 6, 1),
        ]
        assert refresh.total_vested_units() == 100

    def test_option_grant(self, portfolio_dir):
        (grant,) = load_option_grants(portfolio_dir)
        assert grant.value.exercise_price == 500
        assert grant.value.units == 400
        assert grant.vesting_schedule.last_event_date == date(2026, 1, 1)

    def test_load_all(self, portfolio_dir):
        portfolio = load_portfolio(portfolio_dir)
        assert len(portfolio.rsu_grants) == 2
        assert len(portfolio.option_grants) == 1

    def test_missing_grant_files_mean_no_grants(self, portfolio_dir):
        (portfolio_dir / "option_grants.yaml").unlink()
        (portfolio_dir / "rsu_grants.yaml").unlink()
        portfolio = load_portfolio(portfolio_dir)
        assert portfolio.rsu_grants == []
        assert portfolio.option_grants == []

    def test_price_list_document(self, tmp_path):
        (tmp_path / "prices.yaml").write_text(
            "- date: 2024-01-01\n  price: 1.25\n- date: '2024-02-01'\n  price: 2\n"
        )
        prices = load_prices(tmp_path)
        assert prices.value_on(date(2024, 1, 31)) == 125
        assert prices.value_on(date(2024, 2, 1)) == 200


class TestMalformedPortfolio:
    def test_missing_directory(self, tmp_path):
        with pytest.raises(MalformedInput):
            load_portfolio(tmp_path / "nope")

    def test_missing_prices(self, portfolio_dir):
        (portfolio_dir / "prices.yaml").unlink()
        with pytest.raises(MalformedInput) as exc_info:
            load_portfolio(portfolio_dir)
        assert exc_info.value.code is EquityValueErrorCode.MALFORMED_INPUT
        assert exc_info.value.path.name == "prices.yaml"

    def test_bad_date(self, tmp_path):
        (tmp_path / "prices.yaml").write_text("date: 01/02/2024\nprice: 1.0\n")
        with pytest.raises(MalformedInput, match="date"):
            load_prices(tmp_path)

    def test_missing_field(self, tmp_path):
        (tmp_path / "prices.yaml").write_text("date: 2024-01-01\n")
        with pytest.raises(MalformedInput, match="price"):
            load_prices(tmp_path)

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "prices.yaml").write_text("date: [2024-01-01\n")
        with pytest.raises(MalformedInput, match="invalid YAML"):
            load_prices(tmp_path)

    def test_schedule_and_events(self, tmp_path):
        (tmp_path / "rsu_grants.yaml").write_text(
            "name: Both\n"
            "date: 2024-01-01\n"
            "grant_value: {grant_price: 1.0, total_value: 100.0}\n"
            "vesting:\n"
            "  commences_on: 2024-01-01\n"
            "  schedule: {interval: quarterly, over: {year: 1}}\n"
            "  events: [{date: 2024-04-01, number: 100}]\n"
        )
        with pytest.raises(MalformedInput, match="exactly one"):
            load_rsu_grants(tmp_path)

    def test_unknown_interval(self, tmp_path):
        (tmp_path / "rsu_grants.yaml").write_text(
            "name: Weekly\n"
            "date: 2024-01-01\n"
            "grant_value: {grant_price: 1.0, total_value: 100.0}\n"
            "vesting:\n"
            "  commences_on: 2024-01-01\n"
            "  schedule: {interval: weekly, over: {year: 1}}\n"
        )
        with pytest.raises(MalformedInput, match="weekly"):
            load_rsu_grants(tmp_path)

    def test_zero_year_schedule(self, tmp_path):
        (tmp_path / "rsu_grants.yaml").write_text(
            "name: Zero\n"
            "date: 2024-01-01\n"
            "grant_value: {grant_price: 1.0, total_value: 100.0}\n"
            "vesting:\n"
            "  commences_on: 2024-01-01\n"
            "  schedule: {interval: quarterly, over: {year: 0}}\n"
        )
        with pytest.raises(InvalidScheduleDefinition) as exc_info:
            load_rsu_grants(tmp_path)
        assert exc_info.value.grant_name == "Zero"

    def test_option_events_must_cover_grant(self, tmp_path):
        (tmp_path / "option_grants.yaml").write_text(
            "name: Partial\n"
            "date: 2024-01-01\n"
            "grant_value: {exercise_price: 5.0, shares: 100}\n"
            "vesting_schedule:\n"
            "  commences_on: 2024-01-01\n"
            "  events: [{date: 2025-01-01, number_of_shares: 60}]\n"
        )
        with pytest.raises(InvalidScheduleDefinition, match="Partial"):
            load_option_grants(tmp_path)

    def test_duplicate_grant_name(self, portfolio_dir):
        with (portfolio_dir / "rsu_grants.yaml").open("a") as fh:
            fh.write(
                "---\n"
                "name: Options\n"
                "date: 2024-01-01\n"
                "grant_value: {grant_price: 1.0, total_value: 100.0}\n"
                "vesting:\n"
                "  commences_on: 2024-01-01\n"
                "  events: [{date: 2024-04-01, number: 100}]\n"
            )
        with pytest.raises(MalformedInput, match="duplicate grant name 'Options'"):
            load_portfolio(portfolio_dir)


class TestLegacyPriceFile:
    def test_psp_yaml_fallback(self, portfolio_dir):
        (portfolio_dir / "prices.yaml").rename(portfolio_dir / "psp.yaml")
        portfolio = load_portfolio(portfolio_dir)
        assert portfolio.prices.value_on(date(2024, 6, 30)) == 1000
        assert portfolio.prices.value_on(date(2024, 7, 1)) == 1500

    def test_prices_yaml_preferred(self, portfolio_dir):
        (portfolio_dir / "psp.yaml").write_text("date: 2024-01-01\nprice: 99.0\n")
        prices = load_prices(portfolio_dir)
        assert prices.value_on(date(2024, 1, 1)) == 1000


class TestGrantTermPrecision:
    def test_option_exercise_price(self, tmp_path):
        (tmp_path / "option_grants.yaml").write_text(
            "name: Odd\n"
            "date: 2024-01-01\n"
            "grant_value: {exercise_price: 4.35, shares: 100}\n"
            "vesting_schedule:\n"
            "  commences_on: 2024-01-01\n"
            "  events: [{date: 2025-01-01, number_of_shares: 100}]\n"
        )
        (grant,) = load_option_grants(tmp_path)
        assert grant.value.exercise_price == 435

    def test_rsu_units_from_grant_terms(self, tmp_path):
        (tmp_path / "rsu_grants.yaml").write_text(
            "name: Small\n"
            "date: 2024-01-01\n"
            "grant_value: {grant_price: 1.15, total_value: 1150.00}\n"
            "vesting:\n"
            "  commences_on: 2024-01-01\n"
            "  schedule: {interval: quarterly, over: {year: 1}}\n"
        )
        (grant,) = load_rsu_grants(tmp_path)
        assert grant.value.grant_price == 115
        assert grant.value.total_value == 115000
        assert len(grant.vesting_schedule.events) == 4
        assert grant.total_vested_units() == 1000

    def test_share_prices_keep_double_precision(self, tmp_path):
        (tmp_path / "prices.yaml").write_text("date: 2024-01-01\nprice: 4.35\n")
        assert load_prices(tmp_path).value_on(date(2024, 1, 1)) == 434
