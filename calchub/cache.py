"""File-based local store for exchange rates, country preference and usage data.

Cache layout:
    ~/.calchub/cache/
        exchange_rates.json
        country.json
        analytics.json
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from calchub.models import ExchangeRates

logger = logging.getLogger(__name__)

CACHE_DIR = Path.home() / ".calchub" / "cache"

RATES_FILE = "exchange_rates.json"
COUNTRY_FILE = "country.json"
ANALYTICS_FILE = "analytics.json"


def set_cache_dir(path: Path) -> None:
    global CACHE_DIR
    CACHE_DIR = path


def _ensure_cache_dir() -> None:
    CACHE_DIR.mkdir(parents=True, exist_ok=True)


def _read_json(name: str) -> Any:
    path = CACHE_DIR / name
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return None


def _write_json(name: str, data: Any) -> bool:
    """Write a cache file. Storage failures are logged, never raised."""
    try:
        _ensure_cache_dir()
        (CACHE_DIR / name).write_text(
            json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8"
        )
    except OSError as exc:
        logger.warning("Could not write cache file %s: %s", CACHE_DIR / name, exc)
        return False
    return True


def _remove(name: str) -> bool:
    path = CACHE_DIR / name
    if not path.exists():
        return False
    path.unlink()
    return True


# --- Exchange rates ---

def load_rates_cache() -> ExchangeRates | None:
    data = _read_json(RATES_FILE)
    if not isinstance(data, dict):
        return None
    try:
        fetched_at = datetime.fromisoformat(data["fetched_at"])
        if fetched_at.tzinfo is None:
            fetched_at = fetched_at.replace(tzinfo=timezone.utc)
        return ExchangeRates(
            base=str(data["base"]).upper(),
            rates={str(k).upper(): float(v) for k, v in data["rates"].items()},
            fetched_at=fetched_at,
        )
    except (KeyError, TypeError, ValueError, AttributeError):
        return None


def save_rates_cache(entry: ExchangeRates) -> None:
    _write_json(
        RATES_FILE,
        {
            "base": entry.base,
            "rates": entry.rates,
            "fetched_at": entry.fetched_at.isoformat(),
        },
    )


def clear_rates_cache() -> bool:
    return _remove(RATES_FILE)


def is_rates_fresh(
    entry: ExchangeRates, ttl: timedelta, now: datetime | None = None
) -> bool:
    now = now or datetime.now(timezone.utc)
    return bool(entry.rates) and now - entry.fetched_at < ttl


# --- Country preference ---

def load_country_code() -> str | None:
    data = _read_json(COUNTRY_FILE)
    if isinstance(data, dict) and isinstance(data.get("code"), str):
        return data["code"]
    return None


def save_country_code(code: str) -> None:
    _write_json(COUNTRY_FILE, {"code": code})


# --- Usage analytics ---

def load_analytics() -> dict[str, Any] | None:
    data = _read_json(ANALYTICS_FILE)
    return data if isinstance(data, dict) else None


def save_analytics(data: dict[str, Any]) -> None:
    _write_json(ANALYTICS_FILE, data)


def clear_analytics() -> bool:
    return _remove(ANALYTICS_FILE)


# --- Cache management ---

def cache_status() -> list[dict]:
    """Return info about each cache file for the cache-status command."""
    _ensure_cache_dir()
    results = []
    for path in sorted(CACHE_DIR.iterdir()):
        if not path.is_file():
            continue
        stat = path.stat()
        results.append({
            "file": path.name,
            "path": str(path),
            "size_bytes": stat.st_size,
            "modified": datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
        })
    return results


def clear_cache() -> int:
    """Delete all cache files. Returns count of files removed."""
    if not CACHE_DIR.exists():
        return 0
    count = 0
    for path in CACHE_DIR.iterdir():
        if path.is_file():
            path.unlink()
            count += 1
    return count
