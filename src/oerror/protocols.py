# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: oerror
"""
Protocol definitions for taggable errors.

Any exception can be tagged, not only ``OError`` instances. The protocol
below describes the optional attributes the tagging and aggregation
functions look for; none of them is required to be present.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from oerror.tagging import Tag


@runtime_checkable
class TaggableError(Protocol):
    """Shape of an error carrying info, a cause, a stack and tags."""

    info: Mapping[str, Any] | None
    cause: BaseException | None
    stack: str | None
    _oerror_tags: list[Tag] | None


ErrorLike = BaseException | TaggableError
