# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: oerror
"""
Base error class for oerror.

``OError`` is an exception carrying a message, an optional info mapping and
an optional cause. It captures its own stack at construction, so the stack
is available even if the error is passed around without being raised.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from oerror.stack import capture_stack_outside, stack_header
from oerror.tagging import (
    Tag,
    get_full_info,
    get_full_stack,
    get_tags,
    tag,
    tag_if_exists,
)


class OError(Exception):
    """
    Exception with extra info and an optional cause.

    Subclass it for specific errors; the ``name`` of each instance is the
    name of its concrete class.
    """

    message: str
    name: str
    info: Mapping[str, Any] | None
    cause: BaseException | None
    stack: str

    # Tags are created on first use.
    _oerror_tags: list[Tag] | None = None

    def __init__(
        self,
        message: str,
        info: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize a new OError.

        Args:
            message: Human-readable error message
            info: Extra data to attach to the error
            cause: The internal error that caused this error
        """
        super().__init__(message)
        self.message = message
        self.name = type(self).__name__
        self.info = info
        self.cause = None
        if cause is not None:
            self.with_cause(cause)
        self.stack = capture_stack_outside(stack_header(self.name, message), self)

    @classmethod
    def wrap(
        cls,
        cause: BaseException,
        message: str | None = None,
        info: Mapping[str, Any] | None = None,
    ) -> OError:
        """Create an error of this class caused by ``cause``.

        Args:
            cause: The error being wrapped
            message: Message for the new error (defaults to ``str(cause)``)
            info: Extra data to attach to the new error

        Returns:
            A new instance with ``cause`` as its cause
        """
        return cls(message if message is not None else str(cause), info, cause)

    def with_info(self, info: Mapping[str, Any] | None) -> OError:
        """Set the extra info for this error and return self for chaining."""
        self.info = info
        return self

    def with_cause(self, cause: BaseException | None) -> OError:
        """Set the error which caused this error and return self for chaining."""
        self.cause = cause
        self.__cause__ = cause
        return self

    @property
    def tags(self) -> list[Tag] | None:
        """Tags recorded on this error, or None if it was never tagged."""
        return get_tags(self)

    tag = staticmethod(tag)
    tag_if_exists = staticmethod(tag_if_exists)
    get_full_info = staticmethod(get_full_info)
    get_full_stack = staticmethod(get_full_stack)

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error.

        Returns:
            Dictionary with the name, message, own and merged info, and the
            full stack
        """
        return {
            "name": self.name,
            "message": self.message,
            "info": self.info,
            "full_info": get_full_info(self),
            "stack": get_full_stack(self),
        }

    def __repr__(self) -> str:
        return f"{self.name}({self.message!r})"
