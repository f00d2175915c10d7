# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: oerror
"""
Tagging and aggregation for any exception.

``tag`` records where an error passed through, with an optional message and
info mapping, without replacing the error. ``get_full_info`` and
``get_full_stack`` later fold the tags and the cause chain back into a
single mapping and a single stack document for logging.

These functions work on any exception or error-shaped value, not only
``OError`` instances; they read ``info``, ``cause`` (or ``__cause__``) and
``stack`` when present.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Final, TypeVar

from oerror.config import get_max_tags
from oerror.protocols import ErrorLike
from oerror.stack import (
    NO_STACK,
    capture_stack,
    format_exception_stack,
    indent,
    stack_header,
)

E = TypeVar("E", bound=ErrorLike)

TAG_NAME: Final = "TaggedError"
TAGS_ATTR: Final = "_oerror_tags"
CAUSED_BY: Final = "caused by:"

logger = logging.getLogger("oerror")


@dataclass(frozen=True)
class Tag:
    """A single annotation recorded by ``tag``."""

    message: str | None
    info: Mapping[str, Any] | None
    stack: str


DROPPED_TAGS: Final = Tag(
    message="... dropped tags",
    info=None,
    stack=f"{TAG_NAME}: ... dropped tags",
)


def get_tags(error: ErrorLike | None) -> list[Tag] | None:
    """Return the tags recorded on ``error``, or None if it was never tagged."""
    if error is None:
        return None
    return getattr(error, TAGS_ATTR, None)


def tag(error: E, message: str | None = None, info: Mapping[str, Any] | None = None) -> E:
    """Tag debugging information onto any error and return it.

    The recorded stack starts at the caller, so the error keeps a trail of
    every place it passed through::

        try:
            os.unlink(path)
        except OSError as e:
            raise tag(e, "failed to remove scratch file", {"path": path})

    Args:
        error: The error to tag
        message: Message with which to tag ``error``
        info: Extra data with which to tag ``error``

    Returns:
        The same ``error``, modified in place
    """
    _append_tag(error, message, info)
    return error


def tag_if_exists(
    error: E | None, message: str | None = None, info: Mapping[str, Any] | None = None
) -> E | None:
    """Tag ``error`` if there is one; pass None through untouched.

    Handy when forwarding an optional error, such as the first argument of an
    error-first callback.
    """
    if error is None:
        return None
    _append_tag(error, message, info)
    return error


def _append_tag(
    error: ErrorLike, message: str | None, info: Mapping[str, Any] | None
) -> None:
    # Elide this frame and the public wrapper that called it.
    new_tag = Tag(
        message=message,
        info=info,
        stack=capture_stack(stack_header(TAG_NAME, message), skip=2),
    )

    tags: list[Tag] | None = getattr(error, TAGS_ATTR, None)
    if tags is None:
        tags = []
        setattr(error, TAGS_ATTR, tags)

    max_tags = get_max_tags()
    if len(tags) < max_tags:
        tags.append(new_tag)
        return

    # Full: keep the first tag, mark the drop once, discard the new tag.
    if max_tags >= 2 and tags[1] is not DROPPED_TAGS:
        tags[1] = DROPPED_TAGS
        logger.debug(
            "Dropping tags on %s: limit of %d reached", type(error).__name__, max_tags
        )


def get_full_info(error: ErrorLike | None) -> dict[str, Any]:
    """The merged info from an error, its tags and its causes.

    Causes contribute first, then the error's own info, then each tag in the
    order it was added. If a key is repeated, the last one wins.

    Args:
        error: Any error (may or may not be an ``OError``)

    Returns:
        A new dict; empty if ``error`` is None
    """
    return _full_info(error, set())


def _full_info(error: ErrorLike | None, seen: set[int]) -> dict[str, Any]:
    info: dict[str, Any] = {}
    if error is None or id(error) in seen:
        return info
    seen.add(id(error))

    cause = get_cause(error)
    if cause is not None:
        info.update(_full_info(cause, seen))

    own_info = getattr(error, "info", None)
    if isinstance(own_info, Mapping):
        info.update(own_info)

    for t in get_tags(error) or ():
        if isinstance(t.info, Mapping):
            info.update(t.info)

    return info


def get_full_stack(error: ErrorLike | None) -> str:
    """Return the stack of ``error``, its tags and, indented, its causes.

    Args:
        error: Any error (may or may not be an ``OError``)

    Returns:
        The combined stack document; empty if ``error`` is None
    """
    return _full_stack(error, set())


def _full_stack(error: ErrorLike | None, seen: set[int]) -> str:
    if error is None or id(error) in seen:
        return ""
    seen.add(id(error))

    stack = get_stack(error)

    tags = get_tags(error)
    if tags:
        stack += "\n" + "\n".join(t.stack for t in tags)

    cause_stack = _full_stack(get_cause(error), seen)
    if cause_stack:
        stack += f"\n{CAUSED_BY}\n" + indent(cause_stack)

    return stack


def get_cause(error: ErrorLike) -> ErrorLike | None:
    """The error's ``cause``, falling back to the ``__cause__`` set by ``raise ... from``."""
    cause = getattr(error, "cause", None)
    if cause is None:
        cause = getattr(error, "__cause__", None)
    return cause


def get_stack(error: ErrorLike) -> str:
    """The error's own stack text, or a placeholder if none is available."""
    stack = getattr(error, "stack", None)
    if isinstance(stack, str) and stack:
        return stack
    return format_exception_stack(error) or NO_STACK
