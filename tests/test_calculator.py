"""Tests for pure finance helpers."""

import pytest

from calchub.calculator import (
    amortized_payment,
    annuity_future_value,
    banded_charge,
    compound_amount,
    monthly_rate,
    percentage_of,
    round_half_up,
    simple_interest,
)


class TestRoundHalfUp:
    def test_halves_go_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2

    def test_digits(self):
        assert round_half_up(1.005 * 1000, 0) == 1005
        assert round_half_up(0.125, 2) == pytest.approx(0.13)

    def test_returns_int_without_digits(self):
        assert isinstance(round_half_up(1583.51), int)


class TestAmortizedPayment:
    def test_standard_mortgage(self):
        # 300k over 25 years at 4%
        payment = amortized_payment(300000, monthly_rate(4), 300)
        assert payment == pytest.approx(1583.51, abs=0.01)
        assert round_half_up(payment) == 1584

    def test_zero_rate(self):
        assert amortized_payment(1200, 0, 12) == 100

    def test_no_periods(self):
        assert amortized_payment(1200, 0.01, 0) == 0.0


class TestGrowth:
    def test_compound(self):
        assert compound_amount(1000, 0.05, 2) == pytest.approx(1102.5)

    def test_annuity(self):
        assert annuity_future_value(100, 0.1, 2) == pytest.approx(210)

    def test_annuity_zero_rate(self):
        assert annuity_future_value(100, 0, 12) == 1200

    def test_simple_interest(self):
        assert simple_interest(1000, 5, 3) == pytest.approx(150)


class TestBandedCharge:
    def test_within_first_band(self):
        assert banded_charge(10000, [(40000, 20)], 40) == pytest.approx(2000)

    def test_spills_into_top_rate(self):
        # 40k at 20%, 10k at 40%
        assert banded_charge(50000, [(40000, 20)], 40) == pytest.approx(12000)

    def test_multiple_bands(self):
        bands = [(12000, 0.5), (13000, 2), (45000, 4)]
        assert banded_charge(80000, bands, 8) == pytest.approx(60 + 260 + 1800 + 800)

    def test_zero_income(self):
        assert banded_charge(0, [(40000, 20)], 40) == 0


def test_percentage_of():
    assert percentage_of(250, 20) == pytest.approx(50)
