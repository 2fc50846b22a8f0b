"""Package logger."""

from __future__ import annotations

from loguru import logger as _loguru_logger

logger = _loguru_logger.bind(component="timemachine")

__all__ = ["logger"]
