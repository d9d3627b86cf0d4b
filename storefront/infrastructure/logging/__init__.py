"""
Logging Infrastructure

Structured logging, JSON output and backend request metrics.
"""

from .logging_config import (
    LoggingConfigOptions,
    RequestLog,
    get_request_metrics,
    get_structured_logger,
    log_request,
    options_from_settings,
    reset_request_metrics,
    setup_logging,
)

__all__ = [
    "LoggingConfigOptions",
    "RequestLog",
    "get_request_metrics",
    "get_structured_logger",
    "log_request",
    "options_from_settings",
    "reset_request_metrics",
    "setup_logging",
]
