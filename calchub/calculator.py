"""Pure finance helpers shared by the catalog formulas."""

from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves toward +infinity, the rounding the published figures use.

    Python's round() uses banker's rounding, which would shift e.g. 2.5 -> 2.
    """
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def monthly_rate(annual_pct: float) -> float:
    """Annual percentage rate -> monthly decimal rate (4 -> 0.00333...)."""
    return annual_pct / 12 / 100


def amortized_payment(principal: float, rate: float, periods: float) -> float:
    """Level payment P = A*r*(1+r)^n / ((1+r)^n - 1) for a per-period rate r.

    A zero rate falls back to straight-line repayment principal / n.
    """
    if periods <= 0:
        return 0.0
    if rate == 0:
        return principal / periods
    growth = (1 + rate) ** periods
    return principal * rate * growth / (growth - 1)


def compound_amount(principal: float, rate: float, periods: float) -> float:
    """Value of ``principal`` after compounding at ``rate`` for ``periods``."""
    return principal * (1 + rate) ** periods


def annuity_future_value(payment: float, rate: float, periods: float) -> float:
    """Future value of a level contribution per period. Zero rate sums the payments."""
    if rate == 0:
        return payment * periods
    return payment * ((1 + rate) ** periods - 1) / rate


def simple_interest(principal: float, annual_pct: float, years: float) -> float:
    return principal * annual_pct * years / 100


def banded_charge(income: float, bands: list[tuple[float, float]], top_rate: float) -> float:
    """Charge across consecutive band widths, each ``(width, rate_pct)``.

    Income left after the last band is charged at ``top_rate``.
    """
    remaining = income
    total = 0.0
    for width, rate_pct in bands:
        if width <= 0:
            continue
        taxable = max(0.0, min(remaining, width))
        remaining -= taxable
        total += taxable * rate_pct / 100
    if remaining > 0:
        total += remaining * top_rate / 100
    return total


def percentage_of(amount: float, pct: float) -> float:
    return amount * pct / 100
