"""Internal helpers shared by the clock and timer."""

from .formatting import format_instant
from .log import logger
from .validation import coerce_duration, ensure_aware_datetime, ensure_utc_datetime

__all__ = [
    "coerce_duration",
    "ensure_aware_datetime",
    "ensure_utc_datetime",
    "format_instant",
    "logger",
]
