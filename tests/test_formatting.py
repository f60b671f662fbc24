"""Tests for duration and timestamp helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from nats_health_check.formatting import (
    format_instant,
    humanize_duration,
    parse_duration,
    parse_instant,
    short_duration,
)


class TestHumanizeDuration:
    @pytest.mark.parametrize("duration,expected", [
        (timedelta(seconds=1), "1.00s"),
        (timedelta(seconds=59.5), "59.50s"),
        (timedelta(seconds=599), "9m59s"),
        (timedelta(seconds=600), "10m0s"),
        (timedelta(hours=2, seconds=5), "2h0m5s"),
        (timedelta(days=30), "30d0h0m0s"),
        (timedelta(days=100 * 365), "100y0d0h0m0s"),
        (timedelta(seconds=-90), "-1m30s"),
    ])
    def test_humanize(self, duration, expected):
        assert humanize_duration(duration) == expected


class TestShortDuration:
    @pytest.mark.parametrize("duration,expected", [
        (timedelta(seconds=1), "1s"),
        (timedelta(milliseconds=500), "500ms"),
        (timedelta(microseconds=1500), "1.5ms"),
        (timedelta(microseconds=20), "20us"),
        (timedelta(seconds=90), "1m30s"),
        (timedelta(hours=1), "1h0m0s"),
    ])
    def test_short(self, duration, expected):
        assert short_duration(duration) == expected


class TestParseDuration:
    @pytest.mark.parametrize("value,expected", [
        (5, timedelta(seconds=5)),
        (1.5, timedelta(seconds=1.5)),
        ("30", timedelta(seconds=30)),
        ("500ms", timedelta(milliseconds=500)),
        ("1h30m", timedelta(minutes=90)),
        ("2d", timedelta(days=2)),
        ("1y", timedelta(days=365)),
        (timedelta(minutes=1), timedelta(minutes=1)),
    ])
    def test_parse(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize("value", ["", "ten seconds", "5x", "1h 30m"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)

    def test_roundtrip_with_short_duration(self):
        for duration in (timedelta(milliseconds=500), timedelta(seconds=1), timedelta(seconds=90), timedelta(days=30)):
            assert parse_duration(short_duration(duration)) == duration


class TestInstants:
    def test_parse_rfc3339_nanoseconds(self):
        parsed = parse_instant("2024-06-01T12:00:00.123456789Z")
        assert parsed == datetime(2024, 6, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

    def test_parse_unix_seconds(self):
        assert parse_instant(4102444800) == datetime(2100, 1, 1, tzinfo=timezone.utc)

    def test_naive_is_utc(self):
        assert parse_instant(datetime(2024, 1, 1)).tzinfo is not None

    def test_format_instant(self):
        assert format_instant(datetime(2100, 1, 1, tzinfo=timezone.utc)) == "2100-01-01 00:00:00 +0000 UTC"
