"""CLI entry point for calchub."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import sys
from typing import NoReturn

import click
import httpx

from calchub import analytics, cache, conversion, formatters, fx
from calchub.catalog import REGISTRY, all_calculators, search as search_catalog
from calchub.config import Settings
from calchub.context import CurrencyContext
from calchub.errors import CalchubError, NotFoundError
from calchub.models import COUNTRIES, COUNTRY_MAP, CalculatorDefinition, ExchangeRates
from calchub.page import run_calculator
from calchub.registry import smoke_check

HTTP_TIMEOUT = 30.0


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _settings() -> Settings:
    return click.get_current_context().find_root().obj


def _parse_sets(definition: CalculatorDefinition, raw: tuple[str, ...]) -> dict[str, float]:
    values: dict[str, float] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep:
            raise click.BadParameter(f"Expected ID=VALUE, got {item!r}", param_hint="--set")
        if definition.input_field(key) is None:
            known = ", ".join(f.id for f in definition.inputs)
            raise click.BadParameter(
                f"{definition.id} has no input {key!r}. Inputs: {known}", param_hint="--set"
            )
        try:
            values[key] = float(value)
        except ValueError as exc:
            raise click.BadParameter(
                f"Value for {key!r} must be a number, got {value!r}", param_hint="--set"
            ) from exc
    return values


async def _refresh(context: CurrencyContext, force: bool = False) -> ExchangeRates:
    async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
        return await context.refresh_rates(client, force=force)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """calchub: calculators with currency-aware results."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        _fail(str(exc))
    if settings.cache_dir is not None:
        cache.set_cache_dir(settings.cache_dir)
    ctx.obj = settings


@main.command("list")
@click.option("--category", "category_id", help="Only calculators in this category id")
def list_calculators(category_id: str | None) -> None:
    """List the calculator catalog."""
    infos = all_calculators()
    if category_id:
        if REGISTRY.category(category_id) is None:
            known = ", ".join(c.id for c in REGISTRY.categories)
            _fail(f"Unknown category {category_id!r}. Categories: {known}")
        ids = {d.id for d in REGISTRY.in_category(category_id)}
        infos = [i for i in infos if i.id in ids]
    click.echo(formatters.format_calculator_list(infos), nl=False)


@main.command()
@click.argument("query")
def search(query: str) -> None:
    """Search calculators by id, name, description or category."""
    matches = search_catalog(query)
    if not matches:
        click.echo(f"No calculators match {query!r}.")
        return
    click.echo(formatters.format_calculator_list(matches), nl=False)


@main.command()
@click.argument("calculator_id")
def show(calculator_id: str) -> None:
    """Show a calculator's inputs and their defaults."""
    try:
        definition = REGISTRY.get(calculator_id)
    except NotFoundError as exc:
        _fail(str(exc))
    click.echo(formatters.format_definition(definition), nl=False)


@main.command()
@click.argument("calculator_id")
@click.option("--set", "sets", multiple=True, metavar="ID=VALUE", help="Input value")
@click.option("--country", help="Country code for this run (US, IE, GB, IN)")
@click.option(
    "--output",
    "output_format",
    default="table",
    type=click.Choice(["table", "json", "csv"]),
    help="Output format",
)
@click.option("--offline", is_flag=True, help="Use cached rates only; no network")
def run(
    calculator_id: str,
    sets: tuple[str, ...],
    country: str | None,
    output_format: str,
    offline: bool,
) -> None:
    """Run a calculator, unset inputs take their defaults."""
    settings = _settings()
    try:
        definition = REGISTRY.get(calculator_id)
    except NotFoundError as exc:
        _fail(str(exc))
    values = _parse_sets(definition, sets)

    if country:
        selected = COUNTRY_MAP.get(country.strip().upper())
        if selected is None:
            _fail(f"Unknown country {country!r}")
        context = CurrencyContext(selected, settings=settings)
    else:
        context = CurrencyContext.load(settings=settings)

    needs_rates = (
        definition.currency is not None
        and definition.currency != context.selected.currency_code
    )
    if needs_rates:
        if offline:
            context.set_rates(cache.load_rates_cache())
        else:
            try:
                asyncio.run(_refresh(context))
            except ValueError as exc:
                _fail(str(exc))

    result = run_calculator(definition.id, values, context)

    if output_format == "json":
        click.echo(formatters.format_json(result))
    elif output_format == "csv":
        click.echo(formatters.format_csv(result), nl=False)
    else:
        click.echo(formatters.format_table(result), nl=False)


@main.command()
@click.option("--base", help="Base currency (default from CALCHUB_EXCHANGE_BASE or USD)")
@click.option("--provider", type=click.Choice(fx.PROVIDER_NAMES), help="Use only this provider")
@click.option("--refresh", is_flag=True, help="Ignore the cached table")
@click.option("--all", "show_all", is_flag=True, help="Show every currency, not just ours")
@click.option(
    "--convert",
    nargs=3,
    type=(float, str, str),
    default=None,
    metavar="AMOUNT FROM TO",
    help="Convert an amount with the fetched table",
)
def rates(
    base: str | None,
    provider: str | None,
    refresh: bool,
    show_all: bool,
    convert: tuple[float, str, str] | None,
) -> None:
    """Fetch and show exchange rates."""
    settings = _settings()
    if base:
        settings = dataclasses.replace(settings, base_currency=base.strip().upper())
    if provider:
        settings = dataclasses.replace(settings, provider=provider)

    context = CurrencyContext(settings=settings)
    try:
        table = asyncio.run(_refresh(context, force=refresh))
    except ValueError as exc:
        _fail(str(exc))

    if table.is_identity:
        click.echo("Warning: no provider answered; showing the identity table.", err=True)

    if convert:
        amount, from_code, to_code = convert
        converted = conversion.convert(amount, from_code, to_code, table)
        click.echo(
            f"{formatters.format_currency(amount, from_code)} = "
            f"{formatters.format_currency(converted, to_code)}"
        )
        return

    codes = None if show_all else sorted({c.currency_code for c in COUNTRIES} | {table.base})
    click.echo(formatters.format_rates(table, codes), nl=False)


@main.command()
@click.argument("code", required=False)
def country(code: str | None) -> None:
    """Show or change the saved country."""
    context = CurrencyContext.load(settings=_settings())
    if code:
        try:
            context.select(code)
        except CalchubError as exc:
            _fail(str(exc))
        click.echo(f"Country set to {context.selected.name} ({context.selected.currency_code}).")
        return

    for c in COUNTRIES:
        marker = "*" if c.code == context.selected.code else " "
        click.echo(f"{marker} {c.code}  {c.name:16s} {c.currency_code} {c.currency_symbol}")


@main.command()
def check() -> None:
    """Run every calculator with its defaults and report bad outputs."""
    failures = smoke_check(REGISTRY)
    for failure in failures:
        click.echo(f"FAIL {failure.calculator_id}: {'; '.join(failure.problems)}")
    if failures:
        click.echo(f"{len(failures)} of {len(REGISTRY)} calculators failed.", err=True)
        sys.exit(1)
    click.echo(f"All {len(REGISTRY)} calculators OK.")


@main.command()
@click.option("--clear", is_flag=True, help="Forget recorded usage")
def stats(clear: bool) -> None:
    """Show local usage statistics."""
    if clear:
        analytics.clear_analytics()
        click.echo("Usage statistics cleared.")
        return
    click.echo(formatters.format_usage(analytics.usage_stats()), nl=False)


@main.command("cache-status")
def cache_status() -> None:
    """Show cache file locations and freshness."""
    entries = cache.cache_status()
    if not entries:
        click.echo("No cache files found.")
    else:
        click.echo("Cache files:")
        for e in entries:
            click.echo(
                f"  {e['file']:20s}  {e['size_bytes']:>8d} bytes  modified {e['modified']}"
            )
    click.echo(f"\nCache directory: {cache.CACHE_DIR}")


@main.command("clear-cache")
def clear_cache() -> None:
    """Delete all cache files."""
    count = cache.clear_cache()
    click.echo(f"Cleared {count} cache file(s).")


if __name__ == "__main__":
    main()
