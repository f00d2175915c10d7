# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: oerror
"""
Configuration for oerror.

Settings load from environment variables (prefix ``OERROR_``) and are held
process-wide. Changing them affects subsequent tag calls only; tag lists
that already exist are never resized.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from oerror.errors import OErrorConfigError

DEFAULT_MAX_TAGS: int = 100

logger = logging.getLogger("oerror")


class OErrorSettings(BaseSettings):
    """
    Configuration settings for oerror.
    Loads from environment variables using Pydantic v2's env support.
    """

    model_config = SettingsConfigDict(
        env_prefix="OERROR_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    max_tags: int = Field(
        default=DEFAULT_MAX_TAGS,
        ge=1,
        description="Maximum number of tags kept on any one error instance",
    )

    @classmethod
    def load(cls, **overrides: Any) -> OErrorSettings:
        """
        Load settings from environment variables, applying any overrides.

        Raises:
            OErrorConfigError: If a value fails validation
        """
        try:
            return cls(**overrides)
        except ValidationError as e:
            raise OErrorConfigError.wrap(e, **overrides) from e


_settings: OErrorSettings | None = None


def get_settings() -> OErrorSettings:
    """Return the active settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = OErrorSettings.load()
    return _settings


def configure(settings: OErrorSettings | None = None, **overrides: Any) -> OErrorSettings:
    """Install new process-wide settings.

    Args:
        settings: A ready settings instance; loaded from the environment if None
        **overrides: Individual values applied on top of ``settings``

    Returns:
        The settings now in effect
    """
    global _settings
    if settings is None:
        new_settings = OErrorSettings.load(**overrides)
    elif overrides:
        new_settings = OErrorSettings.load(**{**settings.model_dump(), **overrides})
    else:
        new_settings = settings
    _settings = new_settings
    logger.debug("oerror configured: max_tags=%d", new_settings.max_tags)
    return new_settings


def reset_settings() -> None:
    """Forget the active settings; the next read reloads them from the environment."""
    global _settings
    _settings = None


def get_max_tags() -> int:
    """Maximum number of tags kept on any one error instance."""
    return get_settings().max_tags


def set_max_tags(max_tags: int) -> None:
    """Set the maximum number of tags kept on any one error instance.

    Must be at least 1. Applies to later tag calls only.
    """
    configure(get_settings(), max_tags=max_tags)
