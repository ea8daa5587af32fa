"""Tests for the clock adapters."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from taskview.adapters.system_clock import FixedClock, SystemClock, resolve_timezone


class TestResolveTimezone:
    def test_utc(self):
        assert resolve_timezone("UTC") is timezone.utc
        assert resolve_timezone("") is timezone.utc

    def test_iana_name(self):
        assert resolve_timezone("America/Toronto") == ZoneInfo("America/Toronto")

    def test_unknown_falls_back_to_utc(self, caplog):
        assert resolve_timezone("Mars/Olympus_Mons") is timezone.utc
        assert "Unknown timezone" in caplog.text


class TestSystemClock:
    def test_now_is_aware_in_configured_zone(self):
        clock = SystemClock("America/Toronto")
        now = clock.now()
        assert now.tzinfo == ZoneInfo("America/Toronto")


class TestFixedClock:
    def test_returns_instant(self):
        instant = datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc)
        assert FixedClock(instant).now() == instant
