"""Fixed display format for virtual instants."""

from __future__ import annotations

from datetime import datetime, timezone

from .validation import ensure_aware_datetime


def format_instant(instant: datetime) -> str:
    """Render ``instant`` in UTC as ``YYYY-MM-DDTHH:MM:SS.fffZ``."""
    utc = ensure_aware_datetime(instant, name="instant").astimezone(timezone.utc)
    return f"{utc:%Y-%m-%dT%H:%M:%S}.{utc.microsecond // 1000:03d}Z"


__all__ = ["format_instant"]
