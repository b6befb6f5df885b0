# tests/conftest.py
"""Shared test setup for project."""

from collections.abc import Generator

import pytest

import launchrc.logs as mod_logs
from tests.utils import DEFAULT_TEST_LOG_LEVEL
from tests.utils.log_fixtures import (
    direct_logger,
    module_logger,
)


# These fixtures are intentionally re-exported so pytest can discover them.
__all__ = [
    "direct_logger",
    "module_logger",
]


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset the app logger level before and after each test for isolation."""
    logger = mod_logs.get_app_logger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
    logger.enable_color = False
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host's log/color settings out of the tests."""
    for var in ("NO_COLOR", "FORCE_COLOR", "LOG_LEVEL", "LAUNCHRC_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
