"""Data models for calculators, exchange rates and country configuration."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

ResultValue = float | int | str
ComputeFn = Callable[..., dict[str, ResultValue]]


@dataclass(slots=True, frozen=True)
class InputField:
    id: str
    label: str
    min: float
    max: float
    step: float
    default: float
    suffix: str | None = None

    def __post_init__(self) -> None:
        if self.step <= 0:
            raise ValueError(f"Input {self.id!r}: step must be positive")
        if not self.min <= self.default <= self.max:
            raise ValueError(
                f"Input {self.id!r}: default {self.default} outside "
                f"[{self.min}, {self.max}]"
            )


@dataclass(slots=True, frozen=True)
class CalculatorDefinition:
    id: str
    name: str
    description: str
    category: str
    inputs: tuple[InputField, ...]
    compute: ComputeFn
    currency: str | None = None  # denomination of monetary outputs, if any

    @property
    def path(self) -> str:
        return f"/calculators/{self.id}"

    def input_field(self, field_id: str) -> InputField | None:
        for f in self.inputs:
            if f.id == field_id:
                return f
        return None


@dataclass(slots=True, frozen=True)
class Category:
    id: str
    name: str
    description: str


@dataclass(slots=True, frozen=True)
class CalculatorInfo:
    id: str
    name: str
    description: str
    category: str
    path: str


@dataclass(slots=True, frozen=True)
class ExchangeRates:
    base: str
    rates: dict[str, float]
    fetched_at: datetime

    @property
    def is_identity(self) -> bool:
        """True for the degenerate table that only knows its own base."""
        return set(self.rates) <= {self.base}


@dataclass(slots=True, frozen=True)
class CountryConfig:
    code: str
    name: str
    currency_code: str
    currency_symbol: str
    locale: str


@dataclass(slots=True)
class ResultLine:
    label: str
    value: ResultValue
    display: str
    monetary: bool = False
    converted: float | None = None


@dataclass(slots=True)
class CalculationResult:
    calculator_id: str
    calculator_name: str
    country: CountryConfig
    source_currency: str | None
    inputs: dict[str, float]
    lines: list[ResultLine] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# --- Country registry ---

def _build_country_map() -> dict[str, CountryConfig]:
    entries = [
        CountryConfig("US", "United States", "USD", "$", "en-US"),
        CountryConfig("IE", "Ireland", "EUR", "€", "en-IE"),
        CountryConfig("GB", "United Kingdom", "GBP", "£", "en-GB"),
        CountryConfig("IN", "India", "INR", "₹", "en-IN"),
    ]
    return {c.code: c for c in entries}


COUNTRY_MAP = _build_country_map()
COUNTRIES = list(COUNTRY_MAP.values())
DEFAULT_COUNTRY = COUNTRY_MAP["US"]
