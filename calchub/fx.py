"""Async exchange-rate client with ordered provider fallback.

Data flow per request:
    1. Return the cached table if it is fresh for the requested base
    2. Try each provider in priority order; first non-empty table wins
    3. Normalize codes to uppercase and pin rates[base] to 1
    4. Save the table to cache
    5. If every provider fails, use the cached table of any age
    6. With no cache at all, return the identity table {base: 1}

Provider priority:
    currency-api (jsDelivr CDN) -> Fixer (key) -> Open Exchange Rates (key)
    -> exchangerate.host -> currency-api (Cloudflare mirror)
"""

from __future__ import annotations

import asyncio
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from calchub import cache
from calchub.errors import ProviderError
from calchub.models import ExchangeRates

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=1)
PROVIDER_TIMEOUT = 5.0

CURRENCY_API_JSDELIVR = (
    "https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest/v1/currencies"
)
CURRENCY_API_CLOUDFLARE = "https://latest.currency-api.pages.dev/v1/currencies"
EXCHANGERATE_HOST_URL = "https://api.exchangerate.host/latest"
FIXER_URL = "https://data.fixer.io/api/latest"
OPENEXCHANGERATES_URL = "https://openexchangerates.org/api/latest.json"


def normalize_rates(raw: dict[str, Any]) -> dict[str, float]:
    """Uppercase the codes and drop anything that is not a positive finite number."""
    rates: dict[str, float] = {}
    for code, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if not math.isfinite(value) or value <= 0:
            continue
        rates[str(code).upper()] = float(value)
    return rates


def _rebase(rates: dict[str, float], source: str, target: str, name: str) -> dict[str, float]:
    """Re-express a table quoted against ``source`` as one quoted against ``target``."""
    if source == target:
        return rates
    pivot = rates.get(target)
    if not pivot:
        raise ProviderError(name, f"cannot rebase {source} table to {target}")
    return {code: rate / pivot for code, rate in rates.items()} | {source: 1 / pivot}


async def _get_json(
    client: httpx.AsyncClient,
    name: str,
    url: str,
    params: dict[str, str] | None = None,
) -> Any:
    try:
        resp = await client.get(url, params=params, timeout=PROVIDER_TIMEOUT)
        resp.raise_for_status()
        return resp.json()
    except httpx.HTTPStatusError as exc:
        raise ProviderError(name, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise ProviderError(name, f"{type(exc).__name__}: {exc}") from exc
    except ValueError as exc:
        raise ProviderError(name, "response is not valid JSON") from exc


# --- Providers ---


class RateProvider:
    """One source of exchange rates.

    ``fetch`` returns a mapping of currency code to units per one ``base``,
    or raises ProviderError.
    """

    name = "provider"
    requires_key = False

    async def fetch(self, client: httpx.AsyncClient, base: str) -> dict[str, float]:
        raise NotImplementedError


class CurrencyApiProvider(RateProvider):
    """Static JSON file per base currency, served from a CDN."""

    def __init__(self, name: str, root_url: str) -> None:
        self.name = name
        self.root_url = root_url

    async def fetch(self, client: httpx.AsyncClient, base: str) -> dict[str, float]:
        key = base.lower()
        data = await _get_json(client, self.name, f"{self.root_url}/{key}.json")
        table = data.get(key) if isinstance(data, dict) else None
        if not isinstance(table, dict):
            raise ProviderError(self.name, f"no rates for base {base}")
        rates = normalize_rates(table)
        if not rates:
            raise ProviderError(self.name, f"empty rates for base {base}")
        return rates


class ExchangerateHostProvider(RateProvider):
    """Latest-rates-by-base REST endpoint; Fixer shares its response shape."""

    name = "exchangerate_host"

    def __init__(self, url: str = EXCHANGERATE_HOST_URL) -> None:
        self.url = url

    def _params(self, base: str) -> dict[str, str]:
        return {"base": base}

    async def fetch(self, client: httpx.AsyncClient, base: str) -> dict[str, float]:
        data = await _get_json(client, self.name, self.url, self._params(base))
        if not isinstance(data, dict) or not data:
            raise ProviderError(self.name, "empty response")
        if data.get("success") is False:
            info = (data.get("error") or {}).get("info") or "API error"
            raise ProviderError(self.name, str(info))
        raw = data.get("rates")
        if not isinstance(raw, dict):
            raise ProviderError(
                self.name, f"no rates in response. Keys: {', '.join(data)}"
            )
        rates = normalize_rates(raw)
        if not rates:
            raise ProviderError(self.name, "empty rates")
        source = str(data.get("base") or base).upper()
        return _rebase(rates, source, base, self.name)


class FixerProvider(ExchangerateHostProvider):
    name = "fixer"
    requires_key = True

    def __init__(self, api_key: str) -> None:
        super().__init__(FIXER_URL)
        self.api_key = api_key

    def _params(self, base: str) -> dict[str, str]:
        return {"access_key": self.api_key, "base": base}


class OpenExchangeRatesProvider(RateProvider):
    """Paid-key API; free plans only quote against USD, so tables are rebased."""

    name = "openexchangerates"
    requires_key = True

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    async def fetch(self, client: httpx.AsyncClient, base: str) -> dict[str, float]:
        data = await _get_json(
            client, self.name, OPENEXCHANGERATES_URL, {"app_id": self.api_key}
        )
        if not isinstance(data, dict) or not data:
            raise ProviderError(self.name, "empty response")
        if data.get("error"):
            raise ProviderError(
                self.name, str(data.get("description") or data.get("message") or "API error")
            )
        raw = data.get("rates")
        if not isinstance(raw, dict):
            raise ProviderError(self.name, "no rates in response")
        rates = normalize_rates(raw)
        if not rates:
            raise ProviderError(self.name, "empty rates")
        source = str(data.get("base") or "USD").upper()
        return _rebase(rates, source, base, self.name)


PROVIDER_NAMES = (
    "currency_api",
    "fixer",
    "openexchangerates",
    "exchangerate_host",
    "currency_api_mirror",
)


def build_providers(
    provider: str | None = None, api_key: str | None = None
) -> list[RateProvider]:
    """Providers in priority order, optionally restricted to one by name.

    Key-based providers are only included when ``api_key`` is set.
    """
    if provider is not None and provider not in PROVIDER_NAMES:
        raise ValueError(
            f"Unknown provider {provider!r}. Known: {', '.join(PROVIDER_NAMES)}"
        )

    chain: list[RateProvider] = [
        CurrencyApiProvider("currency_api", CURRENCY_API_JSDELIVR)
    ]
    if api_key:
        chain.append(FixerProvider(api_key))
        chain.append(OpenExchangeRatesProvider(api_key))
    chain.append(ExchangerateHostProvider())
    chain.append(CurrencyApiProvider("currency_api_mirror", CURRENCY_API_CLOUDFLARE))

    if provider is not None:
        chain = [p for p in chain if p.name == provider]
        if not chain:
            logger.warning("Provider %s needs an API key; none configured", provider)
    return chain


# --- Client ---


def identity_rates(base: str) -> ExchangeRates:
    """Degenerate table under which every conversion is a no-op."""
    code = base.upper()
    return ExchangeRates(base=code, rates={code: 1.0}, fetched_at=datetime.now(timezone.utc))


# One in-flight round per (base, provider chain, api key).
_inflight: dict[tuple[object, ...], asyncio.Task[ExchangeRates]] = {}


async def _fetch_from_providers(
    client: httpx.AsyncClient,
    base: str,
    providers: list[RateProvider],
) -> ExchangeRates:
    for p in providers:
        try:
            rates = await p.fetch(client, base)
        except ProviderError as exc:
            logger.warning("Exchange-rate provider %s failed: %s", p.name, exc.reason)
            continue

        rates[base] = 1.0
        entry = ExchangeRates(
            base=base, rates=rates, fetched_at=datetime.now(timezone.utc)
        )
        cache.save_rates_cache(entry)
        logger.info("Fetched %d rates for base %s from %s", len(rates), base, p.name)
        return entry

    logger.warning("All exchange-rate providers failed for base %s", base)
    stale = cache.load_rates_cache()
    if stale is not None and stale.rates:
        logger.warning("Using stale cached rates from %s", stale.fetched_at.isoformat())
        return stale

    logger.warning("No cached rates; currency conversion disabled")
    return identity_rates(base)


async def fetch_exchange_rates(
    client: httpx.AsyncClient,
    base: str = "USD",
    *,
    provider: str | None = None,
    api_key: str | None = None,
    ttl: timedelta = DEFAULT_TTL,
    providers: list[RateProvider] | None = None,
) -> ExchangeRates:
    """Return an exchange-rate table for ``base``; never raises for provider failures.

    Concurrent calls for the same base and provider chain share one round.
    """
    base = base.upper()

    cached = cache.load_rates_cache()
    if cached is not None and cached.base == base and cache.is_rates_fresh(cached, ttl):
        logger.debug("Using cached rates for %s", base)
        return cached

    chain = providers if providers is not None else build_providers(provider, api_key)
    key = (base, *(id(p) if providers is not None else p.name for p in chain), api_key)
    task = _inflight.get(key)
    if task is None or task.done():
        task = asyncio.ensure_future(_fetch_from_providers(client, base, chain))
        _inflight[key] = task

        def _forget(done: asyncio.Task[ExchangeRates]) -> None:
            if _inflight.get(key) is done:
                del _inflight[key]

        task.add_done_callback(_forget)

    return await asyncio.shield(task)
