"""Tests for cache module."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from calchub import cache
from calchub.models import ExchangeRates


class TestRatesCache:
    def test_save_and_load(self) -> None:
        entry = ExchangeRates("USD", {"USD": 1.0, "EUR": 0.9}, datetime.now(UTC))
        cache.save_rates_cache(entry)

        loaded = cache.load_rates_cache()
        assert loaded == entry

    def test_load_missing(self) -> None:
        assert cache.load_rates_cache() is None

    def test_load_corrupt(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        (tmp_path / cache.RATES_FILE).write_text("not json")
        assert cache.load_rates_cache() is None

    def test_load_wrong_shape(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        (tmp_path / cache.RATES_FILE).write_text('{"base": "USD"}')
        assert cache.load_rates_cache() is None

    def test_naive_timestamp_is_utc(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        (tmp_path / cache.RATES_FILE).write_text(
            '{"base": "usd", "rates": {"eur": 0.9}, "fetched_at": "2026-01-01T00:00:00"}'
        )
        loaded = cache.load_rates_cache()
        assert loaded is not None
        assert loaded.base == "USD"
        assert loaded.rates == {"EUR": 0.9}
        assert loaded.fetched_at.tzinfo is not None

    def test_freshness(self) -> None:
        now = datetime.now(UTC)
        ttl = timedelta(hours=1)
        fresh = ExchangeRates("USD", {"EUR": 0.9}, now - timedelta(minutes=59))
        stale = ExchangeRates("USD", {"EUR": 0.9}, now - timedelta(minutes=61))
        empty = ExchangeRates("USD", {}, now)
        assert cache.is_rates_fresh(fresh, ttl, now)
        assert not cache.is_rates_fresh(stale, ttl, now)
        assert not cache.is_rates_fresh(empty, ttl, now)

    def test_clear_rates(self) -> None:
        cache.save_rates_cache(ExchangeRates("USD", {"USD": 1.0}, datetime.now(UTC)))
        assert cache.clear_rates_cache() is True
        assert cache.clear_rates_cache() is False
        assert cache.load_rates_cache() is None


class TestCountryPreference:
    def test_round_trip(self) -> None:
        assert cache.load_country_code() is None
        cache.save_country_code("IE")
        assert cache.load_country_code() == "IE"


class TestCacheManagement:
    def test_status_and_clear(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        cache.save_country_code("GB")
        cache.save_analytics({"usage_by_calculator": {}, "total_calculations": 0})

        files = {e["file"] for e in cache.cache_status()}
        assert files == {cache.COUNTRY_FILE, cache.ANALYTICS_FILE}

        assert cache.clear_cache() == 2
        assert cache.cache_status() == []

    def test_clear_missing_dir(self, tmp_path, monkeypatch) -> None:  # type: ignore[no-untyped-def]
        monkeypatch.setattr("calchub.cache.CACHE_DIR", tmp_path / "absent")
        assert cache.clear_cache() == 0


class TestUnwritableCache:
    def test_write_failure_is_logged(self, tmp_path, monkeypatch, caplog) -> None:  # type: ignore[no-untyped-def]
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        monkeypatch.setattr("calchub.cache.CACHE_DIR", blocker / "cache")

        cache.save_rates_cache(ExchangeRates("USD", {"USD": 1.0}, datetime.now(UTC)))
        cache.save_country_code("IE")

        assert "Could not write cache file" in caplog.text
        assert cache.load_rates_cache() is None
        assert cache.load_country_code() is None
