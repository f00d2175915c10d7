# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: oerror
"""
Errors raised by oerror itself.

Tagging and aggregation never raise; only invalid configuration does.
"""

from __future__ import annotations

from typing import Any


class OErrorConfigError(ValueError):
    """Raised when oerror is given an invalid configuration value."""

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize a configuration error.

        Args:
            message: Human-readable error message
            **context: The offending setting names and values
        """
        super().__init__(message)
        self.message = message
        self.context = context

    @classmethod
    def wrap(cls, exception: Exception, **context: Any) -> OErrorConfigError:
        """Wrap a validation failure, keeping it as the cause."""
        error = cls(f"Invalid oerror configuration: {exception}", **context)
        error.__cause__ = exception
        return error
