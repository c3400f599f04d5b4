"""Logging utilities for monitoring and debugging."""

from etfpulse.core.logging.logger import (
    configure_logging,
    current_trace_id,
    get_logger,
    log_context,
    logger,
)

__all__ = [
    "current_trace_id",
    "get_logger",
    "configure_logging",
    "log_context",
    "logger",
]
