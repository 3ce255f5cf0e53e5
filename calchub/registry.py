"""Calculator registry and the execution contract shared by every calculator.

A calculator is a pure function whose keyword parameters are exactly the ids
of its input fields. It is bound to its schema with ``Registry.register``:

    @REGISTRY.register("vat", name="VAT", description="...", category="tax-salary",
                       inputs=[InputField("amount", "Net Amount", 0, 1e6, 100, 10000),
                               InputField("rate", "VAT Rate (%)", 0, 30, 0.5, 20)])
    def vat(*, amount: float, rate: float) -> dict[str, float]:
        ...
"""

from __future__ import annotations

import inspect
import math
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field

from calchub.errors import CalculatorNotFoundError, RegistrationError
from calchub.models import (
    CalculatorDefinition,
    CalculatorInfo,
    Category,
    ComputeFn,
    InputField,
    ResultValue,
)


@dataclass(slots=True)
class SmokeFailure:
    calculator_id: str
    problems: list[str] = field(default_factory=list)


class Registry:
    """Explicit lookup table from calculator id to definition."""

    def __init__(self) -> None:
        self._definitions: dict[str, CalculatorDefinition] = {}
        self._categories: dict[str, Category] = {}

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[CalculatorDefinition]:
        return iter(self._definitions.values())

    def __contains__(self, calculator_id: object) -> bool:
        return calculator_id in self._definitions

    def add_category(self, category: Category) -> None:
        self._categories[category.id] = category

    @property
    def categories(self) -> list[Category]:
        return list(self._categories.values())

    def category(self, category_id: str) -> Category | None:
        return self._categories.get(category_id)

    def register(
        self,
        calculator_id: str,
        *,
        name: str,
        description: str,
        category: str,
        inputs: list[InputField],
        currency: str | None = None,
    ) -> Callable[[ComputeFn], ComputeFn]:
        def decorator(fn: ComputeFn) -> ComputeFn:
            self.add(
                CalculatorDefinition(
                    id=calculator_id,
                    name=name,
                    description=description,
                    category=category,
                    inputs=tuple(inputs),
                    compute=fn,
                    currency=currency.upper() if currency else None,
                )
            )
            return fn

        return decorator

    def add(self, definition: CalculatorDefinition) -> None:
        if definition.id in self._definitions:
            raise RegistrationError(f"Duplicate calculator id {definition.id!r}")
        if definition.category not in self._categories:
            raise RegistrationError(
                f"{definition.id}: unknown category {definition.category!r}"
            )

        ids = [f.id for f in definition.inputs]
        if len(set(ids)) != len(ids):
            raise RegistrationError(f"{definition.id}: duplicate input ids")

        params = inspect.signature(definition.compute).parameters.values()
        named = {p.name for p in params if p.kind is not p.VAR_KEYWORD}
        takes_rest = any(p.kind is p.VAR_KEYWORD for p in params)
        if named != set(ids) and not (takes_rest and named <= set(ids)):
            raise RegistrationError(
                f"{definition.id}: compute parameters {sorted(named)} "
                f"do not match inputs {sorted(ids)}"
            )
        self._definitions[definition.id] = definition

    def get(self, calculator_id: str) -> CalculatorDefinition:
        try:
            return self._definitions[calculator_id]
        except KeyError:
            raise CalculatorNotFoundError(calculator_id) from None

    def in_category(self, category_id: str) -> list[CalculatorDefinition]:
        return [d for d in self._definitions.values() if d.category == category_id]

    def all_calculators(self) -> list[CalculatorInfo]:
        infos = []
        for d in self._definitions.values():
            cat = self._categories[d.category]
            infos.append(CalculatorInfo(d.id, d.name, d.description, cat.name, d.path))
        return infos

    def search(self, query: str) -> list[CalculatorInfo]:
        """Case-insensitive substring match over id, name, description and category."""
        q = query.strip().lower()
        if not q:
            return []
        return [
            c
            for c in self.all_calculators()
            if q in c.id.lower()
            or q in c.name.lower()
            or q in c.description.lower()
            or q in c.category.lower()
        ]


def compute_defaults(definition: CalculatorDefinition) -> dict[str, float]:
    return {f.id: f.default for f in definition.inputs}


def resolve_values(
    definition: CalculatorDefinition, values: Mapping[str, float] | None = None
) -> dict[str, float]:
    """Fill every input id, using the field default (never zero) for unset ones."""
    values = values or {}
    resolved: dict[str, float] = {}
    for f in definition.inputs:
        raw = values.get(f.id)
        resolved[f.id] = f.default if raw is None else float(raw)
    return resolved


def compute(
    definition: CalculatorDefinition, values: Mapping[str, float] | None = None
) -> dict[str, ResultValue]:
    """Run a calculator. Result labels are display strings, not stable keys."""
    return dict(definition.compute(**resolve_values(definition, values)))


def is_bad_number(value: ResultValue) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isfinite(value)


def smoke_check(registry: Registry) -> list[SmokeFailure]:
    """Run every calculator with its defaults; report NaN/infinite outputs and errors."""
    failures: list[SmokeFailure] = []
    for definition in registry:
        try:
            result = compute(definition, compute_defaults(definition))
        except Exception as exc:  # noqa: BLE001 - reported, not swallowed
            failures.append(
                SmokeFailure(definition.id, [f"{type(exc).__name__}: {exc}"])
            )
            continue
        problems = [f"{k}: {v}" for k, v in result.items() if is_bad_number(v)]
        if problems:
            failures.append(SmokeFailure(definition.id, problems))
    return failures
