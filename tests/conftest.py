"""Shared fixtures: every test gets its own cache directory."""

from __future__ import annotations

import pytest

from calchub import fx


@pytest.fixture(autouse=True)
def isolated_cache(tmp_path, monkeypatch):  # type: ignore[no-untyped-def]
    """Redirect cache to tmp dir so tests don't pollute the real cache."""
    monkeypatch.setattr("calchub.cache.CACHE_DIR", tmp_path)
    for var in (
        "CALCHUB_CACHE_DIR",
        "CALCHUB_EXCHANGE_PROVIDER",
        "CALCHUB_EXCHANGE_API_KEY",
        "CALCHUB_EXCHANGE_BASE",
        "CALCHUB_RATES_TTL_MINUTES",
    ):
        monkeypatch.delenv(var, raising=False)
    fx._inflight.clear()
    return tmp_path
