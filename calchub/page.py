"""Calculator execution: look up, compute, convert and label each result."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from calchub import analytics
from calchub.catalog import REGISTRY
from calchub.context import CurrencyContext
from calchub.formatters import format_currency, format_number
from calchub.models import CalculationResult, CalculatorDefinition, ResultLine, ResultValue
from calchub.registry import Registry, compute, resolve_values

logger = logging.getLogger(__name__)

# Result labels that name rates, counts, scores or physical quantities, not money.
NON_MONETARY_LABEL = re.compile(
    r"%|roi|rate|years|tenor|count|score|grade|letter|gpa|level|status|profile|"
    r"allocation|plan|recommendation|approach|optimizer|planner|focus|"
    r"months|days|hours|weeks|kwh|litres|size",
    re.IGNORECASE,
)
# A parenthesised percentage qualifies an amount, as in "Contingency (15%)".
PERCENT_SUFFIX = re.compile(r"\s*\(\s*[\d.]+\s*%\s*\)")


def is_monetary(definition: CalculatorDefinition, label: str, value: ResultValue) -> bool:
    if definition.currency is None:
        return False
    if isinstance(value, (str, bool)):
        return False
    return NON_MONETARY_LABEL.search(PERCENT_SUFFIX.sub("", label)) is None


def _first_numeric(values: Mapping[str, ResultValue]) -> float | None:
    for value in values.values():
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    return None


def run_calculator(
    calculator_id: str,
    values: Mapping[str, float] | None,
    context: CurrencyContext,
    registry: Registry = REGISTRY,
    track: bool = True,
) -> CalculationResult:
    """Run a calculator and express its monetary results in the selected currency.

    When no usable rates are loaded, amounts in a foreign currency are shown
    unconverted in their own currency and a warning is attached.
    """
    definition = registry.get(calculator_id)
    resolved = resolve_values(definition, values)
    raw = compute(definition, resolved)

    target = context.selected.currency_code
    source = definition.currency
    result = CalculationResult(
        calculator_id=definition.id,
        calculator_name=definition.name,
        country=context.selected,
        source_currency=source,
        inputs=resolved,
    )

    can_convert = source is None or source == target or context.conversion_enabled
    if not can_convert:
        result.warnings.append(
            f"Exchange rates unavailable: amounts shown in {source}, not {target}"
        )

    for label, value in raw.items():
        if not is_monetary(definition, label, value):
            result.lines.append(ResultLine(label, value, format_number(value)))
            continue
        if can_convert:
            converted = context.convert(float(value), source, target)
            display = format_currency(converted, target)
        else:
            converted = float(value)
            display = format_currency(converted, source)
        result.lines.append(ResultLine(label, value, display, True, converted))

    if track:
        primary = definition.inputs[0] if definition.inputs else None
        analytics.track_usage(
            definition.id,
            definition.name,
            _first_numeric(raw),
            primary.label if primary else None,
            resolved[primary.id] if primary else None,
        )

    logger.debug("Ran %s with %s", definition.id, resolved)
    return result
