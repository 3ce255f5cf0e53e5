"""Output formatters: money text, and table/JSON/CSV renderings."""

from __future__ import annotations

import csv
import io
import json
import math
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from calchub.models import (
    COUNTRIES,
    CalculationResult,
    CalculatorDefinition,
    CalculatorInfo,
    CountryConfig,
    ExchangeRates,
    ResultValue,
)

CURRENCY_SYMBOLS = {c.currency_code: c.currency_symbol for c in COUNTRIES}
NOT_AVAILABLE = "N/A"


def format_currency(value: float, currency_code: str) -> str:
    """Two decimals, no grouping, dot decimal separator, symbol prefix.

    The fixed layout applies for every locale (1234.56, never 1.234,56).
    """
    if not math.isfinite(value):
        return NOT_AVAILABLE
    symbol = CURRENCY_SYMBOLS.get(currency_code.upper())
    prefix = symbol if symbol else f"{currency_code.upper()} "
    sign = "-" if value < 0 and round(value, 2) != 0 else ""
    return f"{sign}{prefix}{abs(value):.2f}"


def format_money(value: float, country: CountryConfig) -> str:
    return format_currency(value, country.currency_code)


def format_number(value: ResultValue) -> str:
    """Plain (non-money) result value."""
    if isinstance(value, str):
        return value
    if not math.isfinite(value):
        return NOT_AVAILABLE
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")


def _console(buf: io.StringIO) -> Console:
    return Console(file=buf, width=120, no_color=True)


def format_table(result: CalculationResult) -> str:
    """Format a calculation as a Rich table rendered to string."""
    buf = io.StringIO()
    rich_console = _console(buf)

    c = result.country
    header = (
        f"{result.calculator_name}\n"
        f"{'=' * len(result.calculator_name)}\n"
        f"Currency: {c.currency_code} ({c.name})\n"
    )

    inputs = Table(box=box.SIMPLE_HEAD, pad_edge=False, title="Inputs", title_justify="left")
    inputs.add_column("Input")
    inputs.add_column("Value", justify="right")
    for key, value in result.inputs.items():
        inputs.add_row(key, format_number(value))

    table = Table(box=box.SIMPLE_HEAD, pad_edge=False, title="Results", title_justify="left")
    table.add_column("Result", style="bold")
    table.add_column("Value", justify="right")
    for line in result.lines:
        table.add_row(line.label, line.display)

    rich_console.print(header, end="")
    rich_console.print(inputs)
    rich_console.print(table)

    if result.warnings:
        footer = "Warnings:"
        for w in result.warnings:
            footer += f"\n  ⚠ {w}"
        rich_console.print(footer)

    return buf.getvalue()


def format_json(result: CalculationResult) -> str:
    data: dict[str, Any] = {
        "calculator": result.calculator_id,
        "name": result.calculator_name,
        "country": result.country.code,
        "currency": result.country.currency_code,
        "source_currency": result.source_currency,
        "inputs": result.inputs,
        "results": [],
    }
    for line in result.lines:
        entry: dict[str, Any] = {
            "label": line.label,
            "value": line.value,
            "display": line.display,
        }
        if line.monetary:
            entry["converted"] = (
                round(line.converted, 2) if line.converted is not None else None
            )
        data["results"].append(entry)

    if result.warnings:
        data["warnings"] = result.warnings

    return json.dumps(data, indent=2, ensure_ascii=False)


def format_csv(result: CalculationResult) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=["label", "value", "display", "currency"])
    writer.writeheader()
    for line in result.lines:
        writer.writerow({
            "label": line.label,
            "value": line.value,
            "display": line.display,
            "currency": result.country.currency_code if line.monetary else "",
        })
    return buf.getvalue()


def format_calculator_list(infos: list[CalculatorInfo]) -> str:
    buf = io.StringIO()
    table = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    table.add_column("Id", style="bold")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Description")
    for info in infos:
        table.add_row(info.id, info.name, info.category, info.description)
    _console(buf).print(table)
    return buf.getvalue()


def format_definition(definition: CalculatorDefinition) -> str:
    buf = io.StringIO()
    rich_console = _console(buf)
    rich_console.print(f"{definition.name} ({definition.id})\n{definition.description}")
    if definition.currency:
        rich_console.print(f"Amounts in {definition.currency}")

    table = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    table.add_column("Input", style="bold")
    table.add_column("Label")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Step", justify="right")
    table.add_column("Default", justify="right")
    for f in definition.inputs:
        table.add_row(
            f.id, f.label, format_number(f.min), format_number(f.max),
            format_number(f.step), format_number(f.default),
        )
    rich_console.print(table)
    return buf.getvalue()


def format_rates(rates: ExchangeRates, codes: list[str] | None = None) -> str:
    buf = io.StringIO()
    rich_console = _console(buf)
    rich_console.print(
        f"Base: {rates.base}  fetched {rates.fetched_at.isoformat(timespec='seconds')}"
    )
    table = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    table.add_column("Currency", style="bold")
    table.add_column("Rate", justify="right")
    wanted = [c.upper() for c in codes] if codes else sorted(rates.rates)
    for code in wanted:
        rate = rates.rates.get(code)
        table.add_row(code, f"{rate:.6f}" if rate is not None else NOT_AVAILABLE)
    rich_console.print(table)
    return buf.getvalue()


def format_usage(stats: dict[str, Any]) -> str:
    buf = io.StringIO()
    rich_console = _console(buf)
    rich_console.print(
        f"Calculations: {stats['total_calculations']}  "
        f"Calculators used: {stats['total_calculators']}"
    )
    table = Table(box=box.SIMPLE_HEAD, pad_edge=False, title="Most used", title_justify="left")
    table.add_column("Calculator", style="bold")
    table.add_column("Uses", justify="right")
    table.add_column("Last used")
    for usage in stats["top_used"]:
        table.add_row(usage["name"], str(usage["count"]), usage["last_used"])
    rich_console.print(table)
    return buf.getvalue()
