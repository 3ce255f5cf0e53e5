"""Local calculator usage tracking, persisted in the cache directory."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any

from calchub import cache

logger = logging.getLogger(__name__)

RESULTS_LIMIT = 100
TOP_USED_LIMIT = 10
RECENT_LIMIT = 5
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _now_iso(now: datetime | None = None) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def _empty(now: datetime | None = None) -> dict[str, Any]:
    return {"usage_by_calculator": {}, "total_calculations": 0, "last_updated": _now_iso(now)}


def _parse_stamp(value: Any) -> datetime:
    try:
        stamp = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return EPOCH
    return stamp if stamp.tzinfo else stamp.replace(tzinfo=timezone.utc)


def _clean_usage(calculator_id: str, usage: Any) -> dict[str, Any] | None:
    """Fill missing fields of a stored entry; None for entries beyond repair."""
    if not isinstance(usage, dict):
        return None
    count = usage.get("count")
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        usage["count"] = 0
    if not isinstance(usage.get("name"), str):
        usage["name"] = calculator_id
    if not isinstance(usage.get("events"), list):
        usage["events"] = []
    usage["id"] = calculator_id
    usage["last_used"] = _parse_stamp(usage.get("last_used")).isoformat()
    return usage


def get_analytics() -> dict[str, Any]:
    """Stored usage data. Malformed entries are repaired or dropped."""
    data = cache.load_analytics()
    if data is None or not isinstance(data.get("usage_by_calculator"), dict):
        return _empty()
    cleaned = {}
    for calculator_id, usage in data["usage_by_calculator"].items():
        entry = _clean_usage(calculator_id, usage)
        if entry is None:
            logger.debug("Dropping malformed usage entry for %s", calculator_id)
            continue
        cleaned[calculator_id] = entry
    data["usage_by_calculator"] = cleaned
    total = data.get("total_calculations")
    if isinstance(total, bool) or not isinstance(total, int):
        data["total_calculations"] = 0
    return data


def track_usage(
    calculator_id: str,
    name: str,
    result: float | None = None,
    criteria: str | None = None,
    input_value: float | None = None,
    now: datetime | None = None,
) -> None:
    """Record one calculation. Result history is capped at the last RESULTS_LIMIT."""
    data = get_analytics()
    stamp = _now_iso(now)
    usage = data["usage_by_calculator"].setdefault(
        calculator_id,
        {"id": calculator_id, "name": name, "count": 0, "last_used": stamp, "events": []},
    )
    usage["count"] += 1
    usage["last_used"] = stamp

    if result is not None and math.isfinite(result):
        events = usage["events"]
        events.append(
            {"criteria": criteria, "input": input_value, "result": result, "timestamp": stamp}
        )
        del events[:-RESULTS_LIMIT]

    data["total_calculations"] += 1
    data["last_updated"] = stamp
    cache.save_analytics(data)
    logger.debug("Tracked usage of %s (%d uses)", calculator_id, usage["count"])


def usage_stats() -> dict[str, Any]:
    data = get_analytics()
    calculators = list(data["usage_by_calculator"].values())
    return {
        "top_used": sorted(calculators, key=lambda u: u["count"], reverse=True)[:TOP_USED_LIMIT],
        "recently_used": sorted(
            calculators, key=lambda u: _parse_stamp(u["last_used"]), reverse=True
        )[:RECENT_LIMIT],
        "total_calculators": len(calculators),
        "total_calculations": data["total_calculations"],
    }


def clear_analytics() -> bool:
    return cache.clear_analytics()
