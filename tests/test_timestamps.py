"""
Device timestamp normalization.

Run:
    pytest tests/test_timestamps.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest

from src.Services.timestamps import normalize_timestamp, resolve_event_time


UTC = timezone.utc
EXPECTED = datetime(2024, 1, 15, 10, 30, tzinfo=UTC)


@pytest.mark.parametrize("raw", [
    "2024-01-15T10:30:00Z",
    "2024-01-15T13:30:00+03:00",
    "2024-01-15 10:30:00",
    1705314600000,
    "1705314600000",
    1705314600,
    datetime(2024, 1, 15, 10, 30),
    datetime(2024, 1, 15, 12, 30, tzinfo=timezone(timedelta(hours=2))),
])
def test_supported_encodings_land_on_the_same_utc_instant(raw):
    assert normalize_timestamp(raw) == EXPECTED


def test_fallback_format_keeps_fractional_seconds():
    parsed = normalize_timestamp("2024-01-15 10:30:00.123456")
    assert parsed == EXPECTED.replace(microsecond=123456)
    assert parsed.tzinfo == UTC


@pytest.mark.parametrize("raw, expected", [
    ("2024-01-15T13:30:00+0300", EXPECTED),
    ("2024-01-15T10:30:00.1234Z", EXPECTED.replace(microsecond=123400)),
    ("2024-01-15T10:30:00.12+00:00", EXPECTED.replace(microsecond=120000)),
    ("2024-01-15 13:30:00+0300", EXPECTED),
])
def test_iso_variants_keep_the_device_instant(raw, expected):
    assert normalize_timestamp(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   ", "null", "yesterday", "15/01/2024", True, [], {}])
def test_unparseable_values_are_none(raw):
    assert normalize_timestamp(raw) is None


def test_resolve_event_time_falls_back_to_now():
    now = datetime(2025, 3, 1, 8, 0, tzinfo=UTC)
    assert resolve_event_time("garbage", now=now) == now
    assert resolve_event_time(None, now=now) == now


def test_resolve_event_time_prefers_the_device_value():
    now = datetime(2025, 3, 1, 8, 0, tzinfo=UTC)
    assert resolve_event_time("2024-01-15T10:30:00Z", now=now) == EXPECTED


def test_resolve_event_time_default_is_current_utc():
    before = datetime.now(UTC)
    resolved = resolve_event_time(None)
    assert before <= resolved <= datetime.now(UTC)
