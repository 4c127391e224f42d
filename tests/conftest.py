"""Shared pytest fixtures for servicebus-jms tests.

This module provides fixtures for:
- An environment free of SERVICEBUS_* variables
- Settings cache cleanup between tests
- Valid baseline settings

Usage:
    def test_something(valid_settings):
        assert valid_settings.validate_settings() is valid_settings
"""

import os
from collections.abc import Generator

import pytest

from servicebus_jms.config.settings import ServiceBusJmsSettings, get_settings

VALID_CONNECTION_STRING = (
    "Endpoint=sb://contoso.servicebus.windows.net/;"
    "SharedAccessKeyName=RootManageSharedAccessKey;"
    "SharedAccessKey=c2VjcmV0LWtleQ=="
)


# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_environment() -> Generator[None, None, None]:
    """Remove SERVICEBUS_* variables and clear cached settings around each test."""
    original_env = os.environ.copy()
    for key in list(os.environ):
        if key.upper().startswith("SERVICEBUS_"):
            del os.environ[key]
    get_settings.cache_clear()

    yield

    get_settings.cache_clear()
    os.environ.clear()
    os.environ.update(original_env)


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def connection_string() -> str:
    """Provide a well-formed namespace connection string."""
    return VALID_CONNECTION_STRING


@pytest.fixture
def valid_settings(connection_string: str) -> ServiceBusJmsSettings:
    """Provide settings that pass validation, ignoring any .env file."""
    return ServiceBusJmsSettings(
        _env_file=None,  # type: ignore[call-arg]
        connection_string=connection_string,
        pricing_tier="standard",
    )
