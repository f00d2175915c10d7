# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: oerror

"""
Light-weight helpers for annotating and chaining errors.
"""

from __future__ import annotations

from oerror.base import OError
from oerror.config import (
    DEFAULT_MAX_TAGS,
    OErrorSettings,
    configure,
    get_max_tags,
    get_settings,
    reset_settings,
    set_max_tags,
)
from oerror.errors import OErrorConfigError
from oerror.protocols import ErrorLike, TaggableError
from oerror.tagging import (
    DROPPED_TAGS,
    Tag,
    get_full_info,
    get_full_stack,
    tag,
    tag_if_exists,
)

__all__ = [
    # Errors
    "OError",
    "OErrorConfigError",
    "Tag",
    "TaggableError",
    "ErrorLike",
    "DROPPED_TAGS",
    # Tagging and aggregation
    "tag",
    "tag_if_exists",
    "get_full_info",
    "get_full_stack",
    # Configuration
    "DEFAULT_MAX_TAGS",
    "OErrorSettings",
    "configure",
    "get_settings",
    "get_max_tags",
    "set_max_tags",
    "reset_settings",
]
