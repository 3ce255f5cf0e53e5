"""Pure currency conversion over an exchange-rate table.

Every rate in a table is "units of that currency per one unit of the base".
A code equal to the table's base has an implicit rate of 1 even when it is
missing from the mapping. Conversions never raise: when a code cannot be
resolved the amount is returned unchanged.
"""

from __future__ import annotations

import logging

from calchub.models import ExchangeRates

logger = logging.getLogger(__name__)


def _normalized(rates: ExchangeRates) -> dict[str, float]:
    return {code.upper(): rate for code, rate in rates.rates.items()}


def _rate_for(code: str, mapping: dict[str, float], base: str) -> float | None:
    rate = mapping.get(code)
    if isinstance(rate, (int, float)) and rate > 0:
        return float(rate)
    if code == base:
        return 1.0
    return None


def convert(
    amount: float, from_code: str, to_code: str, rates: ExchangeRates | None
) -> float:
    """Convert ``amount`` from one currency to another: amount * (r_to / r_from)."""
    f = (from_code or "").upper()
    t = (to_code or "").upper()
    if f == t:
        return amount
    if rates is None or not rates.rates:
        return amount

    mapping = _normalized(rates)
    base = (rates.base or "").upper()
    r_from = _rate_for(f, mapping, base)
    r_to = _rate_for(t, mapping, base)

    if r_from is None or r_to is None:
        if base in mapping:
            # Partial path through the base for whichever side is known.
            amount_in_base = amount / r_from if r_from is not None else amount
            result = amount_in_base * (r_to if r_to is not None else 1.0)
            logger.debug(
                "Partial conversion %s -> %s via %s: %s -> %s",
                f, t, base, amount, result,
            )
            return result
        logger.debug("Cannot convert %s -> %s; returning amount unchanged", f, t)
        return amount

    return amount * (r_to / r_from)


def to_base(amount: float, from_code: str, rates: ExchangeRates | None) -> float:
    """Express ``amount`` in the table's base currency."""
    if rates is None or not rates.rates:
        return amount
    base = (rates.base or "").upper()
    r_from = _rate_for((from_code or "").upper(), _normalized(rates), base)
    if r_from is None:
        logger.debug("No rate for %s in %s table", from_code, base)
        return amount
    return amount / r_from


def from_base(amount: float, to_code: str, rates: ExchangeRates | None) -> float:
    """Express a base-currency ``amount`` in ``to_code``."""
    if rates is None or not rates.rates:
        logger.warning("No exchange rates available; amount left unconverted")
        return amount
    base = (rates.base or "").upper()
    mapping = _normalized(rates)
    r_to = _rate_for((to_code or "").upper(), mapping, base)
    if r_to is None:
        logger.warning(
            "Cannot convert from %s to %s. Available: %s",
            base, to_code, ", ".join(sorted(mapping)),
        )
        return amount
    return amount * r_to
