"""Tests for CLI entry point."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from calchub import cache
from calchub.cli import main
from calchub.models import ExchangeRates

RATES = ExchangeRates("USD", {"USD": 1.0, "EUR": 0.9, "INR": 83.0}, datetime.now(UTC))


class TestCatalogCommands:
    def test_list(self) -> None:
        result = CliRunner().invoke(main, ["list"])
        assert result.exit_code == 0
        assert "mortgage" in result.output

    def test_list_category(self) -> None:
        result = CliRunner().invoke(main, ["list", "--category", "math-science"])
        assert result.exit_code == 0
        assert "titration" in result.output
        assert "mortgage" not in result.output

    def test_list_unknown_category(self) -> None:
        result = CliRunner().invoke(main, ["list", "--category", "nope"])
        assert result.exit_code == 1
        assert "Unknown category" in result.output

    def test_search_no_match(self) -> None:
        result = CliRunner().invoke(main, ["search", "zzzz"])
        assert result.exit_code == 0
        assert "No calculators match" in result.output

    def test_show(self) -> None:
        result = CliRunner().invoke(main, ["show", "vat"])
        assert result.exit_code == 0
        assert "Net Amount" in result.output

    def test_show_unknown(self) -> None:
        result = CliRunner().invoke(main, ["show", "nope"])
        assert result.exit_code == 1
        assert "Error: Calculator 'nope' not found" in result.output

    def test_check(self) -> None:
        result = CliRunner().invoke(main, ["check"])
        assert result.exit_code == 0
        assert "calculators OK" in result.output


class TestRun:
    def test_same_currency_json(self) -> None:
        result = CliRunner().invoke(
            main,
            [
                "run", "mortgage",
                "--set", "amount=300000", "--set", "rate=4", "--set", "years=25",
                "--country", "IN", "--output", "json",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["currency"] == "INR"
        emi = next(r for r in data["results"] if r["label"] == "Monthly EMI")
        assert emi["value"] == 1584
        assert emi["display"] == "₹1584.00"

    def test_converts_with_fetched_rates(self) -> None:
        with patch("calchub.fx.fetch_exchange_rates", new=AsyncMock(return_value=RATES)):
            result = CliRunner().invoke(
                main, ["run", "vat", "--set", "amount=1000", "--country", "IE"]
            )
        assert result.exit_code == 0, result.output
        assert "€180.00" in result.output

    def test_offline_without_cache_warns(self) -> None:
        result = CliRunner().invoke(main, ["run", "vat", "--country", "IE", "--offline"])
        assert result.exit_code == 0
        assert "Exchange rates unavailable" in result.output
        assert "$2000.00" in result.output

    def test_offline_uses_cached_rates(self) -> None:
        cache.save_rates_cache(RATES)
        result = CliRunner().invoke(
            main, ["run", "vat", "--country", "IE", "--offline", "--output", "csv"]
        )
        assert result.exit_code == 0
        assert "VAT Amount,2000,€1800.00,EUR" in result.output

    def test_bad_set(self) -> None:
        result = CliRunner().invoke(main, ["run", "vat", "--set", "bogus=1"])
        assert result.exit_code == 2
        assert "has no input 'bogus'" in result.output

    def test_unknown_calculator(self) -> None:
        result = CliRunner().invoke(main, ["run", "nope"])
        assert result.exit_code == 1

    def test_unknown_country(self) -> None:
        result = CliRunner().invoke(main, ["run", "vat", "--country", "ZZ"])
        assert result.exit_code == 1
        assert "Unknown country" in result.output

    def test_records_usage(self) -> None:
        CliRunner().invoke(main, ["run", "gpa-calculator"])
        result = CliRunner().invoke(main, ["stats"])
        assert result.exit_code == 0
        assert "GPA Calculator" in result.output


class TestRates:
    def test_rates_table(self) -> None:
        with patch("calchub.fx.fetch_exchange_rates", new=AsyncMock(return_value=RATES)):
            result = CliRunner().invoke(main, ["rates"])
        assert result.exit_code == 0
        assert "INR" in result.output
        assert "83.000000" in result.output

    def test_convert(self) -> None:
        with patch("calchub.fx.fetch_exchange_rates", new=AsyncMock(return_value=RATES)):
            result = CliRunner().invoke(main, ["rates", "--convert", "100", "EUR", "INR"])
        assert result.exit_code == 0
        assert "€100.00 = ₹9222.22" in result.output

    def test_unknown_provider(self) -> None:
        result = CliRunner().invoke(main, ["rates", "--provider", "nope"])
        assert result.exit_code == 2


class TestCountry:
    def test_select_and_show(self) -> None:
        result = CliRunner().invoke(main, ["country", "gb"])
        assert result.exit_code == 0
        assert "United Kingdom" in result.output
        assert cache.load_country_code() == "GB"

        result = CliRunner().invoke(main, ["country"])
        assert "* GB" in result.output

    def test_unknown(self) -> None:
        result = CliRunner().invoke(main, ["country", "ZZ"])
        assert result.exit_code == 1
        assert "Country 'ZZ' not found" in result.output


class TestCacheCommands:
    def test_cache_status_empty(self) -> None:
        result = CliRunner().invoke(main, ["cache-status"])
        assert result.exit_code == 0
        assert "No cache files found." in result.output

    def test_clear_cache(self) -> None:
        cache.save_country_code("IE")
        result = CliRunner().invoke(main, ["clear-cache"])
        assert "Cleared 1 cache file(s)." in result.output

    def test_bad_ttl(self, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setenv("CALCHUB_RATES_TTL_MINUTES", "soon")
        result = CliRunner().invoke(main, ["list"])
        assert result.exit_code == 1
        assert "CALCHUB_RATES_TTL_MINUTES" in result.output
