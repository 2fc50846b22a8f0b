"""Virtual timers driven by a :class:`~timemachine.clock.VirtualClock`."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from timemachine._internals import coerce_duration, logger

if TYPE_CHECKING:
    from timemachine.clock import VirtualClock

TimerCallback = Callable[[Any], Any]
FiredListener = Callable[["VirtualTimer"], Any]

DISABLED = timedelta(seconds=-1)
_ZERO = timedelta(0)


class VirtualTimer:
    """A one-shot or periodic timer whose callback fires when its clock advances.

    ``offset`` is measured from the clock's start time, not from the moment the
    timer was created or changed. A negative offset disables the timer. A
    non-positive period makes it one-shot.

    Timers are created through :meth:`VirtualClock.create_timer`; the clock
    keeps them in creation order and fires them from inside ``advance_to``.
    """

    def __init__(self, clock: VirtualClock, callback: TimerCallback, state: Any = None) -> None:
        self._clock: VirtualClock | None = clock
        self._callback: TimerCallback | None = callback
        self._state = state
        self._listeners: list[FiredListener] = []
        self._offset = DISABLED
        self._period = DISABLED

    @property
    def clock(self) -> VirtualClock | None:
        return self._clock

    @property
    def offset(self) -> timedelta:
        return self._offset

    @property
    def period(self) -> timedelta:
        return self._period

    @property
    def state(self) -> Any:
        return self._state

    @property
    def is_disposed(self) -> bool:
        return self._clock is None

    @property
    def enabled(self) -> bool:
        clock = self._clock
        if clock is None:
            return False
        if self._offset < _ZERO:
            return False
        if self._period > _ZERO:
            return True
        return self._offset >= clock.now() - clock.start_time

    def add_listener(self, listener: FiredListener) -> None:
        """Call ``listener(timer)`` after the callback each time this timer fires."""
        if self._clock is None:
            return
        self._listeners.append(listener)

    def remove_listener(self, listener: FiredListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def change(self, offset: timedelta | float, period: timedelta | float) -> bool:
        """Reconfigure the timer.

        Fires synchronously when ``start_time + offset`` is exactly the current
        time. Returns ``False`` if the timer has been disposed.
        """
        clock = self._clock
        if clock is None:
            return False

        offset = coerce_duration(offset, name="offset")
        period = coerce_duration(period, name="period")
        self._offset = offset
        self._period = period

        if self._offset >= _ZERO and clock.start_time + self._offset == clock.now():
            self.fire()

        return True

    def next_fire_time(self) -> datetime | None:
        """Return the next instant strictly after the clock's current time, if any."""
        clock = self._clock
        if clock is None or not self.enabled:
            return None

        first = clock.start_time + self._offset
        now = clock.now()

        if self._period <= _ZERO:
            if first <= now:
                return None
            return first

        elapsed = now - first
        steps = elapsed // self._period if elapsed >= _ZERO else 0
        candidate = first + steps * self._period
        if candidate <= now:
            candidate += self._period
        return candidate

    def fire(self) -> None:
        callback = self._callback
        if callback is None:
            return
        logger.trace("Firing timer {!r}", self)
        callback(self._state)

        for listener in list(self._listeners):
            listener(self)

    def dispose(self) -> None:
        clock = self._clock
        self._clock = None
        self._callback = None
        self._state = None
        self._listeners.clear()

        if clock is not None:
            clock.compact()

    def __enter__(self) -> VirtualTimer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def __repr__(self) -> str:
        if self._clock is None:
            return "VirtualTimer(disposed)"
        return f"VirtualTimer(offset={self._offset!r}, period={self._period!r})"


__all__ = [
    "DISABLED",
    "FiredListener",
    "TimerCallback",
    "VirtualTimer",
]
