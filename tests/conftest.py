"""Pytest fixtures for the fieldguard test-suite."""
from __future__ import annotations

import pytest

from fieldguard.config import reload_settings
from fieldguard.metadata import registry


@pytest.fixture(autouse=True)
def _isolate_registry():  # noqa: D401
    """Forget types registered inside a test; module-level types survive."""
    before = set(registry.registered_types())
    yield
    for klass in set(registry.registered_types()) - before:
        registry.unregister(klass)


@pytest.fixture(autouse=True)
def _fresh_settings():  # noqa: D401
    """Settings are cached from the environment; re-read them around each test."""
    reload_settings()
    yield
    reload_settings()


@pytest.fixture(autouse=True)
def _silence_logging(caplog):  # noqa: D401
    """Reduce noise – most tests assert behaviour, not log output."""
    caplog.set_level("WARNING")
    yield


@pytest.fixture()
def anyio_backend():  # noqa: D401
    return "asyncio"
