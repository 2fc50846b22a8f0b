"""Public API for timemachine."""

from __future__ import annotations

from loguru import logger as _logger

from .clock import TIMESTAMP_FREQUENCY, VirtualClock
from .config import DEFAULT_CONFIG, clock_from_config, load_config
from .errors import BackwardMovementError, MissingCallbackError
from .extensions import adjust_by_steps, adjust_to_times, clock_from_local, format_instant
from .timer import VirtualTimer

_logger.disable("timemachine")

__all__ = [
    "BackwardMovementError",
    "DEFAULT_CONFIG",
    "MissingCallbackError",
    "TIMESTAMP_FREQUENCY",
    "VirtualClock",
    "VirtualTimer",
    "adjust_by_steps",
    "adjust_to_times",
    "clock_from_config",
    "clock_from_local",
    "format_instant",
    "load_config",
]
