"""Tests for exchange-rate fetching."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime, timedelta

import httpx
import pytest
import pytest_httpx

from calchub import cache, fx
from calchub.errors import ProviderError
from calchub.models import ExchangeRates

JSDELIVR_USD = f"{fx.CURRENCY_API_JSDELIVR}/usd.json"
HOST_USD = f"{fx.EXCHANGERATE_HOST_URL}?base=USD"


def _primary() -> list[fx.RateProvider]:
    return [fx.CurrencyApiProvider("currency_api", fx.CURRENCY_API_JSDELIVR)]


@pytest.mark.asyncio
async def test_fetch_normalizes_and_pins_base(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(
        url=JSDELIVR_USD,
        json={"date": "2026-10-19", "usd": {"usd": 1.0001, "eur": 0.9, "inr": 83, "bad": "x"}},
    )

    async with httpx.AsyncClient() as client:
        rates = await fx.fetch_exchange_rates(client, "usd")

    assert rates.base == "USD"
    assert rates.rates == {"USD": 1.0, "EUR": 0.9, "INR": 83.0}
    assert rates.fetched_at.tzinfo is not None


@pytest.mark.asyncio
async def test_second_fetch_uses_cache(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(url=JSDELIVR_USD, json={"usd": {"eur": 0.9}})

    async with httpx.AsyncClient() as client:
        first = await fx.fetch_exchange_rates(client, "USD")
        second = await fx.fetch_exchange_rates(client, "USD")

    assert len(httpx_mock.get_requests()) == 1
    assert second.rates == first.rates


@pytest.mark.asyncio
async def test_concurrent_fetches_share_one_request(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(url=JSDELIVR_USD, json={"usd": {"eur": 0.9}})

    async with httpx.AsyncClient() as client:
        a, b = await asyncio.gather(
            fx.fetch_exchange_rates(client, "USD"),
            fx.fetch_exchange_rates(client, "USD"),
        )

    assert len(httpx_mock.get_requests()) == 1
    assert a is b


@pytest.mark.asyncio
async def test_cached_other_base_is_not_a_hit(httpx_mock: pytest_httpx.HTTPXMock):
    cache.save_rates_cache(
        ExchangeRates("EUR", {"EUR": 1.0, "USD": 1.1}, datetime.now(UTC))
    )
    httpx_mock.add_response(url=JSDELIVR_USD, json={"usd": {"eur": 0.9}})

    async with httpx.AsyncClient() as client:
        rates = await fx.fetch_exchange_rates(client, "USD")

    assert rates.base == "USD"
    assert cache.load_rates_cache().base == "USD"  # type: ignore[union-attr]


@pytest.mark.asyncio
async def test_falls_back_in_order(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(url=JSDELIVR_USD, status_code=503)
    httpx_mock.add_response(
        url=HOST_USD,
        json={"success": True, "base": "USD", "rates": {"EUR": 0.92, "GBP": 0.79}},
    )

    async with httpx.AsyncClient() as client:
        rates = await fx.fetch_exchange_rates(client, "USD")

    assert rates.rates == {"EUR": 0.92, "GBP": 0.79, "USD": 1.0}
    # The Cloudflare mirror is never reached.
    hosts = [r.url.host for r in httpx_mock.get_requests()]
    assert hosts == ["cdn.jsdelivr.net", "api.exchangerate.host"]


@pytest.mark.asyncio
async def test_stale_cache_when_all_fail(httpx_mock: pytest_httpx.HTTPXMock):
    old = ExchangeRates(
        "USD", {"USD": 1.0, "EUR": 0.8}, datetime.now(UTC) - timedelta(days=30)
    )
    cache.save_rates_cache(old)
    httpx_mock.add_response(url=JSDELIVR_USD, status_code=500)

    async with httpx.AsyncClient() as client:
        rates = await fx.fetch_exchange_rates(client, "USD", providers=_primary())

    assert rates.rates == {"USD": 1.0, "EUR": 0.8}
    assert rates.fetched_at == old.fetched_at


@pytest.mark.asyncio
async def test_identity_when_nothing_available(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(url=JSDELIVR_USD, json={"usd": {}})

    async with httpx.AsyncClient() as client:
        rates = await fx.fetch_exchange_rates(client, "USD", providers=_primary())

    assert rates.rates == {"USD": 1.0}
    assert rates.is_identity
    assert cache.load_rates_cache() is None


@pytest.mark.asyncio
async def test_exchangerate_host_rebases(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(
        url=HOST_USD, json={"base": "EUR", "rates": {"USD": 1.25, "GBP": 0.85}}
    )

    async with httpx.AsyncClient() as client:
        rates = await fx.ExchangerateHostProvider().fetch(client, "USD")

    assert rates["USD"] == pytest.approx(1.0)
    assert rates["EUR"] == pytest.approx(0.8)
    assert rates["GBP"] == pytest.approx(0.68)


@pytest.mark.asyncio
async def test_fixer_error_payload(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(
        url=f"{fx.FIXER_URL}?access_key=k&base=USD",
        json={"success": False, "error": {"code": 101, "info": "Invalid access key"}},
    )

    async with httpx.AsyncClient() as client:
        with pytest.raises(ProviderError, match="Invalid access key"):
            await fx.FixerProvider("k").fetch(client, "USD")


@pytest.mark.asyncio
async def test_openexchangerates_from_usd(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(
        url=f"{fx.OPENEXCHANGERATES_URL}?app_id=k",
        json={"base": "USD", "rates": {"EUR": 0.5, "INR": 80}},
    )

    async with httpx.AsyncClient() as client:
        rates = await fx.OpenExchangeRatesProvider("k").fetch(client, "EUR")

    assert rates["EUR"] == pytest.approx(1.0)
    assert rates["USD"] == pytest.approx(2.0)
    assert rates["INR"] == pytest.approx(160.0)


class TestBuildProviders:
    def test_default_order(self) -> None:
        names = [p.name for p in fx.build_providers()]
        assert names == ["currency_api", "exchangerate_host", "currency_api_mirror"]

    def test_keyed_providers_included(self) -> None:
        names = [p.name for p in fx.build_providers(api_key="secret")]
        assert names == list(fx.PROVIDER_NAMES)

    def test_restrict_to_one(self) -> None:
        names = [p.name for p in fx.build_providers("exchangerate_host")]
        assert names == ["exchangerate_host"]

    def test_keyed_provider_without_key(self) -> None:
        assert fx.build_providers("fixer") == []

    def test_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="Unknown provider"):
            fx.build_providers("nope")


def test_normalize_rates() -> None:
    raw = {"eur": 0.9, "gbp": -1, "jpy": float("inf"), "flag": True, "inr": 83}
    assert fx.normalize_rates(raw) == {"EUR": 0.9, "INR": 83.0}


@pytest.mark.asyncio
async def test_unwritable_cache_still_returns_rates(
    httpx_mock: pytest_httpx.HTTPXMock, tmp_path, monkeypatch
):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    monkeypatch.setattr("calchub.cache.CACHE_DIR", blocker / "cache")
    httpx_mock.add_response(url=JSDELIVR_USD, json={"usd": {"eur": 0.9}})

    async with httpx.AsyncClient() as client:
        rates = await fx.fetch_exchange_rates(client, "USD")

    assert rates.rates == {"EUR": 0.9, "USD": 1.0}


@pytest.mark.asyncio
async def test_concurrent_fetches_with_different_chains(httpx_mock: pytest_httpx.HTTPXMock):
    httpx_mock.add_response(url=JSDELIVR_USD, json={"usd": {"eur": 0.9}})
    httpx_mock.add_response(
        url=f"{fx.CURRENCY_API_CLOUDFLARE}/usd.json", json={"usd": {"eur": 0.8}}
    )
    mirror = [fx.CurrencyApiProvider("currency_api_mirror", fx.CURRENCY_API_CLOUDFLARE)]

    async with httpx.AsyncClient() as client:
        primary, secondary = await asyncio.gather(
            fx.fetch_exchange_rates(client, "USD", providers=_primary()),
            fx.fetch_exchange_rates(client, "USD", providers=mirror),
        )

    assert len(httpx_mock.get_requests()) == 2
    assert primary.rates["EUR"] == 0.9
    assert secondary.rates["EUR"] == 0.8
