"""Tests for local usage analytics."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from calchub import analytics, cache


class TestTrackUsage:
    def test_first_use(self) -> None:
        analytics.track_usage("vat", "VAT Calculator", 200.0, "Net Amount", 1000.0)

        data = analytics.get_analytics()
        usage = data["usage_by_calculator"]["vat"]
        assert usage["count"] == 1
        assert usage["name"] == "VAT Calculator"
        assert usage["events"][0]["result"] == 200.0
        assert usage["events"][0]["criteria"] == "Net Amount"
        assert data["total_calculations"] == 1

    def test_no_result_counts_without_event(self) -> None:
        analytics.track_usage("gpa-calculator", "GPA", None)
        analytics.track_usage("gpa-calculator", "GPA", float("nan"))

        usage = analytics.get_analytics()["usage_by_calculator"]["gpa-calculator"]
        assert usage["count"] == 2
        assert usage["events"] == []

    def test_events_capped(self) -> None:
        for i in range(analytics.RESULTS_LIMIT + 5):
            analytics.track_usage("vat", "VAT", float(i))

        events = analytics.get_analytics()["usage_by_calculator"]["vat"]["events"]
        assert len(events) == analytics.RESULTS_LIMIT
        assert events[0]["result"] == 5.0
        assert events[-1]["result"] == float(analytics.RESULTS_LIMIT + 4)


class TestUsageStats:
    def test_top_and_recent(self) -> None:
        start = datetime(2026, 1, 1, tzinfo=UTC)
        for i in range(12):
            for _ in range(i + 1):
                analytics.track_usage(f"calc-{i}", f"Calc {i}", 1.0, now=start + timedelta(days=i))

        stats = analytics.usage_stats()
        assert stats["total_calculators"] == 12
        assert stats["total_calculations"] == sum(range(1, 13))
        assert len(stats["top_used"]) == analytics.TOP_USED_LIMIT
        assert stats["top_used"][0]["id"] == "calc-11"
        assert [u["id"] for u in stats["recently_used"]] == [
            "calc-11", "calc-10", "calc-9", "calc-8", "calc-7",
        ]

    def test_empty(self) -> None:
        stats = analytics.usage_stats()
        assert stats["top_used"] == []
        assert stats["total_calculations"] == 0

    def test_clear(self) -> None:
        analytics.track_usage("vat", "VAT", 1.0)
        assert analytics.clear_analytics() is True
        assert analytics.usage_stats()["total_calculators"] == 0


class TestMalformedData:
    def test_entry_missing_fields(self) -> None:
        cache.save_analytics({"usage_by_calculator": {"vat": {"name": "VAT"}}})

        analytics.track_usage("vat", "VAT", 1.0)

        usage = analytics.get_analytics()["usage_by_calculator"]["vat"]
        assert usage["count"] == 1
        assert len(usage["events"]) == 1
        assert analytics.get_analytics()["total_calculations"] == 1

    def test_non_dict_entry_dropped(self) -> None:
        cache.save_analytics({
            "usage_by_calculator": {"vat": "junk", "loan": {"count": 2}},
            "total_calculations": "x",
        })

        stats = analytics.usage_stats()
        assert stats["total_calculators"] == 1
        assert stats["top_used"][0]["id"] == "loan"
        assert stats["recently_used"][0]["name"] == "loan"
        assert stats["total_calculations"] == 0

    def test_mixed_timestamps_sort(self) -> None:
        cache.save_analytics({
            "usage_by_calculator": {
                "a": {"count": 1, "last_used": "2026-01-01T00:00:00"},
                "b": {"count": 1, "last_used": "2026-02-01T00:00:00+00:00"},
                "c": {"count": 1, "last_used": "yesterday"},
            },
        })

        recent = [u["id"] for u in analytics.usage_stats()["recently_used"]]
        assert recent == ["b", "a", "c"]
