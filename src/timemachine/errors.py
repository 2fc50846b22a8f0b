from __future__ import annotations

from datetime import datetime


class BackwardMovementError(ValueError):
    """Raised when a clock is asked to move to an instant before its current time."""

    def __init__(self, *, current: datetime, target: datetime) -> None:
        self.current = current
        self.target = target
        super().__init__(
            f"Time can't be moved backward: current time is {current.isoformat()}, "
            f"requested {target.isoformat()}"
        )


class MissingCallbackError(TypeError):
    """Raised when a timer is created without a callback."""

    def __init__(self) -> None:
        super().__init__(
            "Timer callback must not be None\n"
            "Hint: pass a callable accepting the timer state, e.g. `clock.create_timer(print, 'tick')`"
        )


__all__ = ["BackwardMovementError", "MissingCallbackError"]
