"""Structured logging with loguru for the vector search service."""

from __future__ import annotations

import sys
from contextvars import ContextVar
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger as _loguru_logger

if TYPE_CHECKING:
    from loguru import Logger

# Request-scoped metadata, set by RequestIdMiddleware
_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_client_host: ContextVar[str | None] = ContextVar("client_host", default=None)
_operation: ContextVar[str | None] = ContextVar("operation", default=None)

LOG_DIR = Path("logs")
LOG_FILE_NAME = "app.log"
ROTATION = "10 MB"
RETENTION = "7 days"
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan> | {message}"
)


def _enrich_record(record: dict) -> bool:
    """Copy the current request context into the record's extras."""
    for key, var in (
        ("request_id", _request_id),
        ("client_host", _client_host),
        ("operation", _operation),
    ):
        value = var.get()
        if value is not None:
            record["extra"][key] = value
    return True


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | str | None = None,
) -> None:
    """Configure loguru sinks.

    - JSON lines in ``<log_dir>/app.log``, rotated at 10 MB, kept 7 days
    - Coloured console output on stderr

    Safe to call more than once; existing sinks are replaced.

    Args:
        log_level: Minimum level (DEBUG, INFO, WARNING, ...).
        log_dir: Directory for the log file. Defaults to ./logs.
    """
    _loguru_logger.remove()
    _loguru_logger.configure(extra={"module": "app"})

    log_path = Path(log_dir) if log_dir else LOG_DIR
    log_path.mkdir(parents=True, exist_ok=True)

    _loguru_logger.add(
        log_path / LOG_FILE_NAME,
        format="{message}",
        rotation=ROTATION,
        retention=RETENTION,
        level=log_level,
        serialize=True,
        filter=_enrich_record,
    )
    _loguru_logger.add(sys.stderr, format=CONSOLE_FORMAT, level=log_level)


def get_logger(module_name: str) -> Logger:
    """Return a loguru logger bound with the caller's module name.

    Args:
        module_name: Typically ``__name__`` of the calling module.
    """
    return _loguru_logger.bind(module=module_name)


def set_request_context(
    request_id: str | None = None,
    client_host: str | None = None,
    operation: str | None = None,
) -> None:
    """Set context for the current request (used by middleware)."""
    if request_id is not None:
        _request_id.set(request_id)
    if client_host is not None:
        _client_host.set(client_host)
    if operation is not None:
        _operation.set(operation)


def get_request_id() -> str | None:
    """Return the request id of the current context, if any."""
    return _request_id.get()


def clear_request_context() -> None:
    """Reset request context at the end of a request."""
    _request_id.set(None)
    _client_host.set(None)
    _operation.set(None)
