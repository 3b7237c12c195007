"""Logging utilities for the credential helper.

This module provides event-tagged logging for helper operations. The
package logger carries a ``NullHandler`` so nothing reaches standard error
unless ``configure_logging`` is called; protocol failures are always
reported on standard output by the CLI instead.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

PACKAGE_LOGGER_NAME = "acr_credential_helper"

logging.getLogger(PACKAGE_LOGGER_NAME).addHandler(logging.NullHandler())


class LogLevel(int, Enum):
    """Log levels for the helper."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEvent(str, Enum):
    """Event types for helper logging."""

    REGISTRY_VALIDATION = "registry_validation"
    TOKEN_ACQUISITION = "token_acquisition"
    TENANT_RESOLUTION = "tenant_resolution"
    TOKEN_EXCHANGE = "token_exchange"
    HELPER_PROTOCOL = "helper_protocol"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace.

    Args:
        name: Module name, either dotted (``acr_credential_helper.auth``) or short (``auth``)

    Returns:
        Logger instance
    """
    if not name or name == PACKAGE_LOGGER_NAME:
        return logging.getLogger(PACKAGE_LOGGER_NAME)
    if name.startswith(PACKAGE_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{name}")


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Send package log records to standard error at the given level.

    Calling this more than once replaces the previously installed handler.

    Args:
        level: Level name (``"DEBUG"``) or numeric level
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logger = get_logger()
    for handler in list(logger.handlers):
        if getattr(handler, "_acr_helper_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    handler._acr_helper_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)


def _log(level: LogLevel, event: LogEvent, message: str, **data: Any) -> None:
    """Log an event on the package logger.

    Args:
        level: Severity level
        event: Event type
        message: Human-readable message
        **data: Extra key/value context appended to the message
    """
    logger = get_logger()
    if not logger.isEnabledFor(level):
        return
    if data:
        details = " ".join(f"{key}={value}" for key, value in sorted(data.items()))
        message = f"{message} ({details})"
    logger.log(level, "[%s] %s", event.value, message)


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug-level event."""
    _log(LogLevel.DEBUG, event, message, **data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info-level event."""
    _log(LogLevel.INFO, event, message, **data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning-level event."""
    _log(LogLevel.WARNING, event, message, **data)


def log_error(event: LogEvent, message: str, **data: Any) -> None:
    """Log an error-level event."""
    _log(LogLevel.ERROR, event, message, **data)
