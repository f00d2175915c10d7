# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: oerror
"""
Logging integration for tagged errors.

Provides a stdlib ``logging.Formatter`` that renders exceptions with their
full stack and merged info, a structlog processor doing the same for event
dicts, and a small helper for logging an error on a stdlib logger.
"""

from __future__ import annotations

import datetime
import enum
import json
import logging
import sys
import uuid
from typing import Any

from structlog.types import EventDict, WrappedLogger

from oerror.tagging import get_full_info, get_full_stack


class FullStackFormatter(logging.Formatter):
    """Formatter that renders exceptions with ``get_full_stack`` and ``get_full_info``."""

    def __init__(
        self,
        json_format: bool = False,
        include_timestamp: bool = True,
        include_level: bool = True,
    ) -> None:
        """Initialize the formatter.

        Args:
            json_format: Whether to format logs as JSON
            include_timestamp: Whether to include timestamps in logs
            include_level: Whether to include log level in logs
        """
        self.json_format = json_format
        self.include_timestamp = include_timestamp
        self.include_level = include_level

        fmt = "%(message)s"
        if include_timestamp:
            fmt = "%(asctime)s " + fmt
        if include_level and not json_format:
            fmt = fmt + " [%(levelname)s]"

        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        error = _record_error(record)
        if self.json_format:
            return self._format_json(record, error)

        # Render the exception ourselves, not through formatException.
        exc_info, exc_text = record.exc_info, record.exc_text
        record.exc_info, record.exc_text = None, None
        try:
            message = super().format(record)
        finally:
            record.exc_info, record.exc_text = exc_info, exc_text

        if error is None:
            return message
        info = get_full_info(error)
        if info:
            message += " " + " ".join(
                f"{k}={_format_value(v)}" for k, v in info.items()
            )
        return message + "\n" + get_full_stack(error)

    def _format_json(
        self, record: logging.LogRecord, error: BaseException | None
    ) -> str:
        log_data: dict[str, Any] = {"message": record.getMessage()}
        if self.include_level:
            log_data["level"] = record.levelname
        if self.include_timestamp:
            log_data["timestamp"] = self.formatTime(record, self.datefmt)
        if error is not None:
            log_data["error"] = str(error)
            log_data["info"] = get_full_info(error)
            log_data["stack"] = get_full_stack(error)
        return json.dumps(log_data, default=_json_default)


def add_full_error_info(
    _: WrappedLogger, __: str, event_dict: EventDict
) -> EventDict:
    """structlog processor adding merged info and full stack for a logged error.

    Looks for the error under ``exc_info`` (an exception, an exc_info tuple,
    or ``True`` for the exception being handled) and then under ``error``.

    Args:
        _: The logger instance
        __: The log method name
        event_dict: The event dictionary to modify

    Returns:
        The event dictionary with ``error_info`` and ``error_stack`` added
    """
    error = _event_error(event_dict)
    if error is None:
        return event_dict

    info = get_full_info(error)
    if info:
        event_dict["error_info"] = info
    event_dict["error_stack"] = get_full_stack(error)
    # The full stack replaces structlog's own traceback rendering.
    event_dict.pop("exc_info", None)
    return event_dict


def log_error(
    logger: logging.Logger,
    message: str,
    error: BaseException | None,
    level: int = logging.ERROR,
) -> None:
    """Log ``error`` on a stdlib logger with its merged info and full stack.

    The record carries ``error_info`` and ``error_stack`` as extra fields, so
    any formatter (not only ``FullStackFormatter``) can use them.
    """
    logger.log(
        level,
        message,
        extra={
            "error_info": get_full_info(error),
            "error_stack": get_full_stack(error),
        },
    )


def _record_error(record: logging.LogRecord) -> BaseException | None:
    if record.exc_info and record.exc_info[1] is not None:
        return record.exc_info[1]
    return None


def _event_error(event_dict: EventDict) -> BaseException | None:
    exc_info = event_dict.get("exc_info")
    if exc_info is True:
        exc_info = sys.exc_info()
    if isinstance(exc_info, BaseException):
        return exc_info
    if isinstance(exc_info, tuple) and len(exc_info) == 3 and exc_info[1] is not None:
        return exc_info[1]
    error = event_dict.get("error")
    if isinstance(error, BaseException):
        return error
    return None


def _format_value(value: Any) -> str:
    if isinstance(value, str):
        # Quote strings that contain spaces
        if " " in value:
            return f'"{value}"'
        return value
    try:
        return json.dumps(value, default=_json_default)
    except (TypeError, ValueError):
        return str(value)


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (datetime.datetime, datetime.date)):
        return obj.isoformat()
    if isinstance(obj, uuid.UUID):
        return str(obj)
    if isinstance(obj, enum.Enum):
        return obj.value
    if hasattr(obj, "model_dump"):  # Pydantic v2 models
        return obj.model_dump()
    return str(obj)
