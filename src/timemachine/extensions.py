"""Convenience callers of the :class:`VirtualClock` API."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from timemachine._internals import coerce_duration, ensure_aware_datetime, format_instant
from timemachine.clock import VirtualClock


def adjust_by_steps(clock: VirtualClock, steps: Iterable[timedelta | float]) -> None:
    """Advance ``clock`` by each step in turn."""
    for step in steps:
        clock.advance_by(coerce_duration(step, name="step"))


def adjust_to_times(clock: VirtualClock, instants: Iterable[datetime]) -> None:
    """Advance ``clock`` to each instant, earliest first.

    All instants are validated before the clock moves.
    """
    ordered = sorted(
        ensure_aware_datetime(instant, name="instant").astimezone(timezone.utc)
        for instant in instants
    )
    for instant in ordered:
        clock.advance_to(instant)


def clock_from_local(local_time: datetime, timezone_name: str) -> VirtualClock:
    """Build a clock starting at ``local_time`` in the IANA zone ``timezone_name``.

    A naive ``local_time`` is read as wall time in that zone; an aware one is
    converted to it. The zone becomes the clock's ``local_timezone``.
    """
    zone = ZoneInfo(timezone_name)
    if local_time.tzinfo is None:
        start = local_time.replace(tzinfo=zone)
    else:
        start = local_time.astimezone(zone)
    return VirtualClock(start, local_timezone=zone)


__all__ = [
    "adjust_by_steps",
    "adjust_to_times",
    "clock_from_local",
    "format_instant",
]
