"""Top-level pytest configuration for oerror."""

from collections.abc import Iterator

import pytest

from oerror.config import reset_settings


@pytest.fixture(autouse=True)
def default_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test with settings freshly loaded from a clean environment."""
    monkeypatch.delenv("OERROR_MAX_TAGS", raising=False)
    reset_settings()
    yield
    reset_settings()
