"""
Logelse SDK - Python client for the Logelse log ingest API.

This package provides:
- LogelseClient: Validated, retried delivery of structured log entries
- LogEntry / ClientConfig: The entry sent on the wire and the client settings
- HttpTransport: httpx-based transport with classified failure results

Usage:
    from logelse import LogelseClient

    async with LogelseClient("YOUR_API_KEY", app_name="my-app", app_uuid="app-123") as client:
        await client.info("Service started")

Example:
    # Environment-based configuration
    from logelse import from_env

    client = from_env()  # reads LOGELSE_API_KEY, LOGELSE_APP_NAME, ...
    await client.warn("High memory usage detected")
"""

from .__version__ import __version__
from .client import LogelseClient, from_env
from .errors import (
    BatchValidationError,
    LogelseError,
    RetryExhaustedError,
    ValidationError,
)
from .models import DEFAULT_BASE_URL, LOGS_ENDPOINT, ClientConfig, LogEntry, LogLevel
from .retry import RetryOutcome, describe_failure, send_with_retry
from .transport import (
    HttpFailure,
    HttpTransport,
    NetworkFailure,
    OtherFailure,
    SendSuccess,
    Transport,
    TransportFailure,
    TransportResult,
)
from .validation import coerce_entry, validate_entry

__all__ = [
    # Client
    "LogelseClient",
    "from_env",
    # Models
    "LogEntry",
    "LogLevel",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "LOGS_ENDPOINT",
    # Validation
    "validate_entry",
    "coerce_entry",
    # Retry
    "send_with_retry",
    "describe_failure",
    "RetryOutcome",
    # Transport
    "Transport",
    "HttpTransport",
    "TransportResult",
    "TransportFailure",
    "SendSuccess",
    "HttpFailure",
    "NetworkFailure",
    "OtherFailure",
    # Errors
    "LogelseError",
    "ValidationError",
    "BatchValidationError",
    "RetryExhaustedError",
    "__version__",
]
