# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: oerror
"""
Stack capture helpers.

Stacks are rendered as plain text: a ``"<name>: <message>"`` header
followed by the formatted frames, most recent call last, matching what
``traceback`` prints for a live exception.
"""

from __future__ import annotations

import inspect
import traceback
from types import FrameType

INDENT: str = "    "
NO_STACK: str = "(no stack)"


def stack_header(name: str, message: str | None) -> str:
    """Return the first line of a rendered stack."""
    if message:
        return f"{name}: {message}"
    return name


def capture_stack(header: str, skip: int = 0) -> str:
    """Capture the current call stack as text.

    Args:
        header: First line of the rendered stack
        skip: Number of frames above the caller of this function to elide,
            so the captured stack starts at the code that asked for it

    Returns:
        The header followed by the formatted frames
    """
    frame = inspect.currentframe()
    if frame is None:
        # No frame introspection on this interpreter; keep the full stack.
        frames = traceback.format_stack()
    else:
        frame = _walk_back(frame, skip + 1)
        frames = traceback.format_stack(frame)
    return header + "\n" + "".join(frames).rstrip("\n")


def capture_stack_outside(header: str, owner: object) -> str:
    """Capture the stack above every ``__init__`` frame bound to ``owner``.

    Used by exception constructors so that subclass ``__init__`` chains
    calling ``super().__init__`` do not show up in the recorded stack.
    """
    frame = inspect.currentframe()
    if frame is None:
        return header + "\n" + "".join(traceback.format_stack()).rstrip("\n")
    frame = frame.f_back
    while (
        frame is not None
        and frame.f_back is not None
        and frame.f_code.co_name == "__init__"
        and frame.f_locals.get("self") is owner
    ):
        frame = frame.f_back
    return header + "\n" + "".join(traceback.format_stack(frame)).rstrip("\n")


def format_exception_stack(error: object) -> str | None:
    """Render the traceback of a raised exception, or None if there is none."""
    if not isinstance(error, BaseException):
        return None
    if getattr(error, "__traceback__", None) is None:
        return None
    lines = traceback.format_exception(error, chain=False)
    return "".join(lines).rstrip("\n")


def indent(text: str) -> str:
    """Indent every line of ``text``, including empty ones."""
    return "\n".join(INDENT + line for line in text.split("\n"))


def _walk_back(frame: FrameType, count: int) -> FrameType:
    for _ in range(count):
        if frame.f_back is None:
            break
        frame = frame.f_back
    return frame
