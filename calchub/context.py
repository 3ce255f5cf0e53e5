"""Per-session currency context: selected country, rates, formatting.

A context is created per session (one CLI invocation, one request) and
passed explicitly to whatever renders money; it is never a module global.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from datetime import timedelta

import httpx

from calchub import cache, conversion, fx
from calchub.config import Settings
from calchub.errors import CountryNotFoundError
from calchub.formatters import format_money
from calchub.models import COUNTRIES, COUNTRY_MAP, DEFAULT_COUNTRY, CountryConfig, ExchangeRates

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = timedelta(hours=1)

Listener = Callable[[CountryConfig], None]


def _system_locale() -> str | None:
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX"):
            return value
    return None


def detect_country_from_locale(locale: str | None = None) -> CountryConfig | None:
    """Match a locale like ``en_IE.UTF-8`` or ``en-IN`` to a known country.

    Region matches win over language-only matches.
    """
    locale = locale if locale is not None else _system_locale()
    if not locale:
        return None
    tag = locale.split(".")[0].split("@")[0].replace("_", "-").lower()
    language, _, region = tag.partition("-")

    if region:
        for country in COUNTRIES:
            if country.code.lower() == region:
                return country
    for country in COUNTRIES:
        if country.locale.split("-")[0].lower() == language:
            return country
    return None


class CurrencyContext:
    def __init__(
        self,
        country: CountryConfig = DEFAULT_COUNTRY,
        rates: ExchangeRates | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._country = country
        self._rates = rates
        self._listeners: list[Listener] = []
        self.settings = settings or Settings()

    @classmethod
    def load(
        cls, locale: str | None = None, settings: Settings | None = None
    ) -> CurrencyContext:
        """Saved preference, then locale auto-detect, then the default country."""
        saved = cache.load_country_code()
        if saved and saved in COUNTRY_MAP:
            return cls(COUNTRY_MAP[saved], settings=settings)
        if saved:
            logger.warning("Ignoring unknown saved country %r", saved)
        detected = detect_country_from_locale(locale)
        return cls(detected or DEFAULT_COUNTRY, settings=settings)

    # --- selection ---

    @property
    def selected(self) -> CountryConfig:
        return self._country

    def get_selected(self) -> CountryConfig:
        return self._country

    def select(self, country_code: str) -> CountryConfig:
        code = country_code.strip().upper()
        country = COUNTRY_MAP.get(code)
        if country is None:
            raise CountryNotFoundError(country_code)
        self._country = country
        cache.save_country_code(code)
        for listener in list(self._listeners):
            listener(country)
        return country

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` synchronously on every selection. Returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- rates ---

    @property
    def rates(self) -> ExchangeRates | None:
        return self._rates

    def set_rates(self, rates: ExchangeRates | None) -> None:
        self._rates = rates

    @property
    def conversion_enabled(self) -> bool:
        return self._rates is not None and not self._rates.is_identity

    async def refresh_rates(
        self, client: httpx.AsyncClient, force: bool = False
    ) -> ExchangeRates:
        if force:
            cache.clear_rates_cache()
        rates = await fx.fetch_exchange_rates(
            client,
            self.settings.base_currency,
            provider=self.settings.provider,
            api_key=self.settings.api_key,
            ttl=self.settings.rates_ttl,
        )
        self._rates = rates
        if rates.is_identity:
            logger.warning("Exchange rates unavailable; showing unconverted amounts")
        return rates

    async def run_refresh_loop(
        self,
        client: httpx.AsyncClient,
        interval: timedelta = REFRESH_INTERVAL,
        stop: asyncio.Event | None = None,
    ) -> None:
        """Refresh rates now and then every ``interval`` until ``stop`` is set."""
        stop = stop or asyncio.Event()
        while not stop.is_set():
            await self.refresh_rates(client)
            try:
                await asyncio.wait_for(stop.wait(), timeout=interval.total_seconds())
            except asyncio.TimeoutError:
                continue

    # --- conversion & formatting ---

    def convert(self, amount: float, from_code: str, to_code: str | None = None) -> float:
        return conversion.convert(
            amount, from_code, to_code or self._country.currency_code, self._rates
        )

    def convert_from_base(self, amount: float, to_code: str | None = None) -> float:
        if self._rates is None:
            return amount
        return conversion.from_base(amount, to_code or self._country.currency_code, self._rates)

    def convert_to_base(self, amount: float, from_code: str | None = None) -> float:
        if self._rates is None:
            return amount
        return conversion.to_base(amount, from_code or self._country.currency_code, self._rates)

    def format(self, amount: float) -> str:
        return format_money(amount, self._country)
