"""
Pytest configuration and shared fixtures for SunX connector tests.
"""

import os
from datetime import datetime, timezone

import pytest

# Configure test environment before loggers are created
os.environ['ENVIRONMENT'] = 'test'

from sunx_perps.config.structs import SunxCredentials
from sunx_perps.infrastructure.logging import get_logger
from sunx_perps.infrastructure.logging.factory import LoggerFactory
from sunx_perps.infrastructure.logging.structs import LoggingConfig, ConsoleBackendConfig


FIXED_NOW = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def setup_test_logging():
    """Console only, warnings and above."""
    LoggerFactory.clear_cache()
    LoggerFactory._default_config = LoggingConfig(
        environment="test",
        console=ConsoleBackendConfig(enabled=True, min_level="WARNING", color=False),
    )
    yield
    LoggerFactory.clear_cache()


@pytest.fixture
def logger():
    """Provide HFT logger for tests."""
    return get_logger("test_sunx")


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def credentials():
    return SunxCredentials(
        access_key_id="AK1",
        secret_key="secret",
        base_url="https://api.example.com",
    )


@pytest.fixture
def sunx_credentials():
    return SunxCredentials(
        access_key_id="ak-0123456789",
        secret_key="sk-secret-value",
        base_url="https://api.sunx.io",
    )
