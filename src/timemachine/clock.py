"""Manually advanced virtual clock."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any

from timemachine._internals import coerce_duration, ensure_utc_datetime, format_instant, logger
from timemachine.errors import BackwardMovementError, MissingCallbackError
from timemachine.timer import TimerCallback, VirtualTimer

TIMESTAMP_FREQUENCY = 1_000_000_000
_ZERO = timedelta(0)


class VirtualClock:
    """Clock whose time only moves when :meth:`advance_to` or :meth:`advance_by` is called.

    Timers created through :meth:`create_timer` fire synchronously, inside the
    advance call, at the exact instants they are due. Callbacks may create,
    change or dispose timers, and may advance the clock again; such nested
    advances complete before the outer one continues.

    ``start_time`` defaults to the real current UTC time. ``local_timezone`` is
    only used by :meth:`local_now` and never affects scheduling.
    """

    def __init__(
        self,
        start_time: datetime | None = None,
        local_timezone: tzinfo | None = None,
    ) -> None:
        if start_time is None:
            start_time = datetime.now(timezone.utc)
        self._start_time = ensure_utc_datetime(start_time, name="start_time")
        self._current_time = self._start_time
        self._local_timezone = local_timezone if local_timezone is not None else timezone.utc
        self._timers: list[VirtualTimer] = []
        self._advancing = False

    @property
    def start_time(self) -> datetime:
        return self._start_time

    @property
    def local_timezone(self) -> tzinfo:
        return self._local_timezone

    @property
    def current_time(self) -> datetime:
        return self._current_time

    @current_time.setter
    def current_time(self, value: datetime) -> None:
        self.advance_to(value)

    @property
    def duration(self) -> timedelta:
        """Virtual time elapsed since ``start_time``. Assigning advances the clock."""
        return self._current_time - self._start_time

    @duration.setter
    def duration(self, value: timedelta | float) -> None:
        self.advance_to(self._start_time + coerce_duration(value, name="duration"))

    @property
    def timers(self) -> tuple[VirtualTimer, ...]:
        return tuple(self._timers)

    def now(self) -> datetime:
        return self._current_time

    def local_now(self) -> datetime:
        return self._current_time.astimezone(self._local_timezone)

    def timestamp(self) -> int:
        """Nanoseconds elapsed since ``start_time`` (see ``TIMESTAMP_FREQUENCY``)."""
        return (self._current_time - self._start_time) // timedelta(microseconds=1) * 1_000

    def create_timer(
        self,
        callback: TimerCallback | None,
        state: Any = None,
        offset: timedelta | float = _ZERO,
        period: timedelta | float = _ZERO,
    ) -> VirtualTimer:
        if callback is None:
            raise MissingCallbackError()
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")

        offset = coerce_duration(offset, name="offset")
        period = coerce_duration(period, name="period")
        timer = VirtualTimer(self, callback, state)
        self._timers.append(timer)
        timer.change(offset, period)
        return timer

    def advance_by(self, duration: timedelta | float) -> None:
        step = coerce_duration(duration, name="duration")
        if step < _ZERO:
            raise BackwardMovementError(current=self._current_time, target=self._current_time + step)
        if step == _ZERO:
            return
        self.advance_to(self._current_time + step)

    def advance_to(self, target: datetime) -> None:
        target = ensure_utc_datetime(target, name="target")
        if target < self._current_time:
            raise BackwardMovementError(current=self._current_time, target=target)
        if target == self._current_time:
            return

        logger.debug("Advancing {} -> {}", format_instant(self._current_time), format_instant(target))

        while True:
            nearest, batch = self._due_batch(target)
            if not batch:
                break

            self._current_time = nearest
            logger.debug("Firing {} timer(s) at {}", len(batch), format_instant(nearest))

            saved_advancing = self._advancing
            self._advancing = True
            try:
                for timer in batch:
                    timer.fire()
            finally:
                self._advancing = saved_advancing

            self.compact()

        # A nested advance from a callback may already have gone past target.
        if target > self._current_time:
            self._current_time = target

    def compact(self) -> None:
        """Drop disposed timers, keeping the order of the rest.

        Deferred while timers are firing; the outermost advance compacts after
        each batch.
        """
        if self._advancing:
            return

        alive = [timer for timer in self._timers if not timer.is_disposed]
        removed = len(self._timers) - len(alive)
        if removed:
            self._timers[:] = alive
            logger.debug("Compacted {} disposed timer(s)", removed)

    def _due_batch(self, target: datetime) -> tuple[datetime | None, list[VirtualTimer]]:
        nearest: datetime | None = None
        batch: list[VirtualTimer] = []

        for timer in self._timers:
            fire_time = timer.next_fire_time()
            if fire_time is None or fire_time > target:
                continue
            if nearest is None or fire_time < nearest:
                nearest = fire_time
                batch = [timer]
            elif fire_time == nearest:
                batch.append(timer)

        return nearest, batch

    def __str__(self) -> str:
        return format_instant(self._current_time)

    def __repr__(self) -> str:
        return (
            f"VirtualClock(start_time={self._start_time.isoformat()}, "
            f"current_time={self._current_time.isoformat()}, timers={len(self._timers)})"
        )


__all__ = [
    "TIMESTAMP_FREQUENCY",
    "VirtualClock",
]
