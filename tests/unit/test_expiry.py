"""
Tests for auction expiry rules.

Tests cover:
1. Duration string parsing
2. Duration resolution and fallback
3. Expiry predicate and its inclusive boundary
"""

import logging
from datetime import timedelta

import pytest

from auctioneer.core.auction import (
    AuctionStatus,
    DurationResolver,
    DEFAULT_AUCTION_DURATION,
    duration_seconds,
    expiry_cutoff,
    is_expired,
    parse_duration,
)


NOW = 1_700_000_000
TEN_MINUTES = timedelta(minutes=10)


# =============================================================================
# Duration Parsing Tests
# =============================================================================


class TestParseDuration:
    """Tests for Go-style duration strings."""

    @pytest.mark.parametrize("text,expected", [
        ("10m", timedelta(minutes=10)),
        ("90s", timedelta(seconds=90)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("1.5h", timedelta(minutes=90)),
        ("2h45m30s", timedelta(hours=2, minutes=45, seconds=30)),
        ("300ms", timedelta(milliseconds=300)),
        ("+5m", timedelta(minutes=5)),
        ("-5m", timedelta(minutes=-5)),
        ("0", timedelta(0)),
        (".5s", timedelta(milliseconds=500)),
    ])
    def test_valid_durations(self, text, expected):
        assert parse_duration(text) == expected

    def test_microsecond_units(self):
        """Both micro sign spellings and 'us' are accepted."""
        assert parse_duration("1500us") == timedelta(microseconds=1500)
        assert parse_duration("1500µs") == timedelta(microseconds=1500)
        assert parse_duration("1500μs") == timedelta(microseconds=1500)

    @pytest.mark.parametrize("text", [
        "",
        "10",
        "m",
        "10x",
        "ten minutes",
        "10 m",
        "1h-30m",
        ".s",
        "-",
        "10mm",
        "100000000000h",
        "9" * 400 + "s",
    ])
    def test_invalid_durations(self, text):
        with pytest.raises(ValueError):
            parse_duration(text)

    def test_fractional_seconds_round_up(self):
        """An integer age satisfies age >= 1.5s only from 2s on."""
        assert duration_seconds(timedelta(seconds=1.5)) == 2
        assert duration_seconds(timedelta(minutes=10)) == 600
        assert duration_seconds(timedelta(0)) == 0

    def test_largest_duration_accepted(self):
        assert parse_duration("2562047h") == timedelta(hours=2562047)


# =============================================================================
# Duration Resolver Tests
# =============================================================================


class TestDurationResolver:
    """Tests for configured duration resolution."""

    def test_valid_setting(self):
        resolver = DurationResolver("20m")
        assert resolver.resolve() == timedelta(minutes=20)
        assert not resolver.is_fallback

    def test_setting_is_stripped(self):
        assert DurationResolver("  2h \n").resolve() == timedelta(hours=2)

    def test_missing_setting_uses_default(self):
        resolver = DurationResolver(None)
        assert resolver.resolve() == timedelta(minutes=10)
        assert resolver.is_fallback

    def test_blank_setting_uses_default(self):
        assert DurationResolver("   ").resolve() == DEFAULT_AUCTION_DURATION

    def test_unparsable_setting_falls_back_to_ten_minutes(self):
        """Misconfiguration resolves to exactly 10 minutes, never raises."""
        resolver = DurationResolver("not-a-duration")
        assert resolver.resolve() == timedelta(minutes=10)
        assert resolver.is_fallback

    @pytest.mark.parametrize("setting", ["100000000000h", "9" * 400 + "s"])
    def test_out_of_range_setting_falls_back(self, setting):
        resolver = DurationResolver(setting)
        assert resolver.resolve() == timedelta(minutes=10)
        assert resolver.is_fallback

    def test_custom_default(self):
        resolver = DurationResolver("bogus", default=timedelta(seconds=30))
        assert resolver.resolve() == timedelta(seconds=30)

    def test_fallback_logs_warning_once(self, caplog):
        resolver = DurationResolver("bogus")
        with caplog.at_level(logging.WARNING, logger="auctioneer"):
            resolver.resolve()
            resolver.resolve()
            resolver.resolve()

        warnings = [r for r in caplog.records if "Invalid auction duration" in r.getMessage()]
        assert len(warnings) == 1

    def test_resolution_is_stable(self):
        resolver = DurationResolver("45s")
        assert resolver.resolve() == resolver.resolve() == timedelta(seconds=45)


# =============================================================================
# Expiry Predicate Tests
# =============================================================================


class TestIsExpired:
    """Tests for the expiry predicate."""

    def test_old_active_auction_is_expired(self):
        assert is_expired(AuctionStatus.ACTIVE, NOW - 3600, NOW, TEN_MINUTES)

    def test_fresh_active_auction_is_not_expired(self):
        assert not is_expired(AuctionStatus.ACTIVE, NOW - 10, NOW, TEN_MINUTES)

    def test_boundary_is_inclusive(self):
        """Exactly `duration` old is expired; one second less is not."""
        assert is_expired(AuctionStatus.ACTIVE, NOW - 600, NOW, TEN_MINUTES)
        assert not is_expired(AuctionStatus.ACTIVE, NOW - 599, NOW, TEN_MINUTES)

    def test_completed_never_expires(self):
        assert not is_expired(AuctionStatus.COMPLETED, 0, NOW, TEN_MINUTES)
        assert not is_expired(AuctionStatus.COMPLETED, NOW - 10**9, NOW, timedelta(0))

    def test_zero_duration_expires_immediately(self):
        assert is_expired(AuctionStatus.ACTIVE, NOW, NOW, timedelta(0))

    def test_future_timestamp_not_expired(self):
        assert not is_expired(AuctionStatus.ACTIVE, NOW + 60, NOW, TEN_MINUTES)

    def test_cutoff(self):
        assert expiry_cutoff(NOW, TEN_MINUTES) == NOW - 600
        assert expiry_cutoff(NOW, timedelta(seconds=1.5)) == NOW - 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
