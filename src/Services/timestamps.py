# src/Services/timestamps.py
"""
Device Timestamp Normalizers
============================
Terminals in the field run several app versions and do not agree on how to
encode the event time. Everything funnels through normalize_timestamp() so the
log table only ever stores UTC-aware datetimes.

Accepted encodings:
- datetime objects (naive values are taken as UTC)
- ISO-8601 strings ("2024-01-15T10:30:00Z", "2024-01-15T13:30:00+03:00")
- Fallback patterns "yyyy-MM-dd HH:mm:ss[.ffffff]" and explicit ISO-8601
  forms ("T" separator, "+0300" or "+03:00" offsets)
- UNIX epoch as a number or numeric string (milliseconds, or seconds for
  values up to 10^10)

Functions:
- normalize_timestamp(): any supported value -> UTC datetime, or None
- resolve_event_time(): normalize_timestamp() with "now" as the fallback
"""

from datetime import datetime, timezone
from typing import Any, Optional


FALLBACK_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S%z",
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
)
"""Patterns tried when datetime.fromisoformat() rejects the value (on 3.10 it
refuses "+0300" offsets and fractions that are not 3 or 6 digits)."""

EPOCH_MS_THRESHOLD = 10_000_000_000
"""Epoch values above this are milliseconds (seconds reached 10^10 only in 2286)."""


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _from_epoch(number: float) -> Optional[datetime]:
    if number > EPOCH_MS_THRESHOLD:
        number = number / 1000.0
    try:
        return datetime.fromtimestamp(number, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _from_string(text: str) -> Optional[datetime]:
    # Numeric strings are epoch values, never compact ISO dates
    try:
        return _from_epoch(float(text))
    except ValueError:
        pass

    try:
        return _as_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass

    for pattern in FALLBACK_FORMATS:
        try:
            return _as_utc(datetime.strptime(text, pattern))
        except ValueError:
            continue

    return None


def normalize_timestamp(ts_value: Any) -> Optional[datetime]:
    """
    Normalize a device timestamp to a UTC-aware datetime.

    Args:
        ts_value: Raw value from the request body

    Returns:
        datetime in UTC, or None when the value is absent or unparseable

    Examples:
        >>> normalize_timestamp("2024-01-15T10:30:00Z")
        datetime.datetime(2024, 1, 15, 10, 30, tzinfo=datetime.timezone.utc)
        >>> normalize_timestamp(1705314600000)
        datetime.datetime(2024, 1, 15, 10, 30, tzinfo=datetime.timezone.utc)
        >>> normalize_timestamp("yesterday") is None
        True
    """
    if ts_value is None:
        return None

    if isinstance(ts_value, datetime):
        return _as_utc(ts_value)

    # bool is an int subclass, a flag is never a timestamp
    if isinstance(ts_value, bool):
        return None

    if isinstance(ts_value, (int, float)):
        return _from_epoch(float(ts_value))

    if isinstance(ts_value, str):
        text = ts_value.strip()
        if not text or text.lower() == "null":
            return None
        return _from_string(text)

    return None


def resolve_event_time(ts_value: Any, now: Optional[datetime] = None) -> datetime:
    """
    Normalize a device timestamp, falling back to the current server time.

    Args:
        ts_value: Raw value from the request body
        now: Override for the fallback instant (tests)
    """
    parsed = normalize_timestamp(ts_value)
    if parsed is not None:
        return parsed
    return now or datetime.now(timezone.utc)
