"""Internal validation helpers for timemachine."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone


def ensure_aware_datetime(value: datetime, *, name: str) -> datetime:
    if not isinstance(value, datetime):
        raise TypeError(f"{name} must be datetime, got {type(value).__name__}")
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware datetime")
    return value


def ensure_utc_datetime(value: datetime, *, name: str) -> datetime:
    return ensure_aware_datetime(value, name=name).astimezone(timezone.utc)


def coerce_duration(value: timedelta | float, *, name: str) -> timedelta:
    """Accept a timedelta, or a finite number of seconds.

    Seconds are rounded to the microsecond resolution of ``timedelta``.
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"{name} must be timedelta or seconds, got {type(value).__name__}")
    try:
        seconds = float(value)
    except OverflowError:
        raise ValueError(f"{name} is out of range, got {value!r}") from None
    if math.isnan(seconds) or math.isinf(seconds):
        raise ValueError(f"{name} must be finite, got {value!r}")
    try:
        return timedelta(seconds=seconds)
    except OverflowError:
        raise ValueError(f"{name} is out of range, got {value!r}") from None


__all__ = [
    "coerce_duration",
    "ensure_aware_datetime",
    "ensure_utc_datetime",
]
