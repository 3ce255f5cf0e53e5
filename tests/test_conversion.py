"""Tests for currency conversion."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from calchub import conversion
from calchub.models import ExchangeRates


def _rates(base: str = "USD", **rates: float) -> ExchangeRates:
    return ExchangeRates(base=base, rates=rates, fetched_at=datetime.now(UTC))


RATES = _rates(USD=1, EUR=0.9, INR=83)


class TestConvert:
    def test_usd_to_eur(self) -> None:
        assert conversion.convert(100, "USD", "EUR", RATES) == pytest.approx(90)

    def test_cross_rate(self) -> None:
        assert conversion.convert(100, "EUR", "INR", RATES) == pytest.approx(9222.2222, rel=1e-6)

    @pytest.mark.parametrize("amount", [0, -12.5, 0.1 + 0.2, 1e12])
    def test_same_code_is_exact(self, amount: float) -> None:
        assert conversion.convert(amount, "EUR", "eur", RATES) == amount
        assert conversion.convert(amount, "ZZZ", "ZZZ", RATES) == amount

    def test_round_trip(self) -> None:
        there = conversion.convert(1234.56, "EUR", "INR", RATES)
        back = conversion.convert(there, "INR", "EUR", RATES)
        assert back == pytest.approx(1234.56, rel=1e-12)

    def test_unknown_target_returns_amount(self) -> None:
        assert conversion.convert(50, "USD", "ZZZ", RATES) == 50

    def test_unknown_source_goes_through_base(self) -> None:
        # ZZZ is treated as already being in the base currency.
        assert conversion.convert(10, "ZZZ", "EUR", RATES) == pytest.approx(9)

    def test_no_rates(self) -> None:
        assert conversion.convert(42, "USD", "EUR", None) == 42
        assert conversion.convert(42, "USD", "EUR", _rates()) == 42

    def test_identity_table(self) -> None:
        assert conversion.convert(42, "USD", "EUR", _rates(USD=1)) == 42

    def test_base_missing_from_table(self) -> None:
        rates = _rates(EUR=0.9, INR=83)
        assert conversion.convert(100, "USD", "EUR", rates) == pytest.approx(90)
        assert conversion.convert(50, "EUR", "ZZZ", rates) == 50

    def test_lowercase_table_codes(self) -> None:
        rates = _rates(usd=1, eur=0.5)
        assert conversion.convert(10, "USD", "EUR", rates) == pytest.approx(5)

    def test_non_positive_rate_ignored(self) -> None:
        rates = _rates(USD=1, EUR=0)
        assert conversion.convert(10, "USD", "EUR", rates) == 10


class TestBaseHelpers:
    def test_from_base(self) -> None:
        assert conversion.from_base(100, "INR", RATES) == pytest.approx(8300)

    def test_to_base(self) -> None:
        assert conversion.to_base(90, "EUR", RATES) == pytest.approx(100)

    def test_from_base_unknown(self, caplog) -> None:  # type: ignore[no-untyped-def]
        assert conversion.from_base(100, "ZZZ", RATES) == 100
        assert "Cannot convert" in caplog.text

    def test_without_rates(self) -> None:
        assert conversion.from_base(7, "EUR", None) == 7
        assert conversion.to_base(7, "EUR", None) == 7
