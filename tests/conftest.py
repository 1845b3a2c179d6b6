"""Pytest configuration and shared fixtures for Logelse SDK tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest

from logelse import ClientConfig, LogelseClient
from mocks import API_KEY, APP_NAME, APP_UUID, ScriptedTransport


@pytest.fixture
def fast_config() -> ClientConfig:
    """Configuration with a short delay so retry tests stay quick."""
    return ClientConfig(retry_attempts=3, retry_delay=0.01)


@pytest.fixture
def transport() -> ScriptedTransport:
    """A transport that accepts every entry."""
    return ScriptedTransport()


@pytest.fixture
async def client(transport: ScriptedTransport, fast_config: ClientConfig) -> AsyncGenerator[LogelseClient, None]:
    """A client with default app identity wired to the scripted transport."""
    async with LogelseClient(
        API_KEY,
        app_name=APP_NAME,
        app_uuid=APP_UUID,
        config=fast_config,
        transport=transport,
    ) as c:
        yield c


@pytest.fixture
def sample_log_entry() -> dict:
    """Return a sample log entry for testing."""
    return {
        "timestamp": "2024-01-15T10:30:00Z",
        "level": "INFO",
        "message": "Test log message",
        "app_name": APP_NAME,
        "app_uuid": APP_UUID,
    }


@pytest.fixture
def sample_log_batch(sample_log_entry: dict) -> list[dict]:
    """Return a batch of sample log entries."""
    return [
        sample_log_entry,
        {
            **sample_log_entry,
            "level": "ERROR",
            "message": "Test error message",
        },
        {
            **sample_log_entry,
            "level": "WARN",
            "message": "Test warning message",
        },
    ]
