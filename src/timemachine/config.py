"""Configuration for building virtual clocks.

Values are resolved in order: ``DEFAULT_CONFIG``, then environment variables,
then explicit overrides passed to :func:`load_config`.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo

from timemachine._internals import ensure_aware_datetime, logger
from timemachine.clock import VirtualClock

START_TIME_KEY = "timemachine.start_time"
LOCAL_TIMEZONE_KEY = "timemachine.local_timezone"

START_TIME_ENV_KEY = "TIMEMACHINE_START_TIME"
LOCAL_TIMEZONE_ENV_KEY = "TIMEMACHINE_LOCAL_TIMEZONE"

DEFAULT_CONFIG: dict[str, Any] = {
    START_TIME_KEY: None,  # None means "real current UTC time"
    LOCAL_TIMEZONE_KEY: "UTC",
}

_ENV_KEYS = {
    START_TIME_ENV_KEY: START_TIME_KEY,
    LOCAL_TIMEZONE_ENV_KEY: LOCAL_TIMEZONE_KEY,
}


def _check_keys(values: Mapping[str, Any]) -> None:
    for key in values:
        if key not in DEFAULT_CONFIG:
            raise KeyError(f"Unknown timemachine config key: {key!r}")


def _parse_start_time(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return ensure_aware_datetime(datetime.fromisoformat(value), name=START_TIME_KEY)
    raise TypeError(f"{START_TIME_KEY} must be datetime or ISO-8601 string, got {type(value).__name__}")


def load_config(
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return the merged configuration dict.

    Args:
        overrides: ``timemachine.*`` values that win over the environment.
        environ: Environment mapping, ``os.environ`` when omitted.
    """
    environ = os.environ if environ is None else environ
    config = {**DEFAULT_CONFIG}

    for env_key, config_key in _ENV_KEYS.items():
        value = environ.get(env_key)
        if value:
            config[config_key] = value

    if overrides:
        _check_keys(overrides)
        config.update(overrides)

    config[START_TIME_KEY] = _parse_start_time(config[START_TIME_KEY])
    return config


def clock_from_config(config: Mapping[str, Any] | None = None) -> VirtualClock:
    resolved = load_config(config)
    start_time = resolved[START_TIME_KEY]
    zone_name = resolved[LOCAL_TIMEZONE_KEY]
    local_timezone = timezone.utc if zone_name == "UTC" else ZoneInfo(zone_name)

    logger.debug("Creating clock from config: start_time={}, local_timezone={}", start_time, zone_name)
    return VirtualClock(start_time, local_timezone=local_timezone)


__all__ = [
    "DEFAULT_CONFIG",
    "LOCAL_TIMEZONE_ENV_KEY",
    "LOCAL_TIMEZONE_KEY",
    "START_TIME_ENV_KEY",
    "START_TIME_KEY",
    "clock_from_config",
    "load_config",
]
