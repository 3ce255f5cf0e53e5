"""Runtime settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

DEFAULT_BASE = "USD"
DEFAULT_TTL_MINUTES = 60


@dataclass(slots=True)
class Settings:
    provider: str | None = None
    api_key: str | None = None
    base_currency: str = DEFAULT_BASE
    rates_ttl: timedelta = timedelta(minutes=DEFAULT_TTL_MINUTES)
    cache_dir: Path | None = None

    @classmethod
    def from_env(cls) -> Settings:
        ttl_raw = os.environ.get("CALCHUB_RATES_TTL_MINUTES", "")
        try:
            ttl_minutes = float(ttl_raw) if ttl_raw else DEFAULT_TTL_MINUTES
        except ValueError as exc:
            raise ValueError(
                f"CALCHUB_RATES_TTL_MINUTES must be a number, got {ttl_raw!r}"
            ) from exc

        cache_dir = os.environ.get("CALCHUB_CACHE_DIR")
        return cls(
            provider=os.environ.get("CALCHUB_EXCHANGE_PROVIDER") or None,
            api_key=os.environ.get("CALCHUB_EXCHANGE_API_KEY") or None,
            base_currency=(
                os.environ.get("CALCHUB_EXCHANGE_BASE") or DEFAULT_BASE
            ).upper(),
            rates_ttl=timedelta(minutes=ttl_minutes),
            cache_dir=Path(cache_dir).expanduser() if cache_dir else None,
        )
