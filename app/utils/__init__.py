"""Utilities: logging and metrics."""

from app.utils.logging import (
    clear_request_context,
    get_logger,
    get_request_id,
    set_request_context,
    setup_logging,
)
from app.utils.metrics import MetricsCollector, get_metrics

__all__ = [
    "clear_request_context",
    "get_logger",
    "get_metrics",
    "get_request_id",
    "MetricsCollector",
    "set_request_context",
    "setup_logging",
]
