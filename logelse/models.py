"""
Data model for the Logelse SDK.

Defines the log entry sent to the ingest API, the closed set of
conventional log levels, and the immutable client configuration.
"""

from dataclasses import dataclass
from enum import StrEnum

# Default Logelse log ingestion endpoint
DEFAULT_BASE_URL = "https://ingst.logelse.com"

# Path the entries are POSTed to, relative to the base URL
LOGS_ENDPOINT = "/logs"


class LogLevel(StrEnum):
    """Conventional log levels understood by the ingest API."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    FATAL = "FATAL"


@dataclass(frozen=True)
class LogEntry:
    """A single log record destined for the ingest endpoint."""

    timestamp: str  # ISO 8601
    level: str
    message: str
    app_name: str
    app_uuid: str

    def to_payload(self) -> dict:
        """Build the JSON request body (the API names the level ``log_level``)."""
        return {
            "timestamp": self.timestamp,
            "log_level": self.level,
            "message": self.message,
            "app_name": self.app_name,
            "app_uuid": self.app_uuid,
        }


@dataclass(frozen=True)
class ClientConfig:
    """Configuration resolved once when a client is constructed."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 5.0  # Request timeout in seconds
    retry_attempts: int = 3  # Total attempts, not retries after the first
    retry_delay: float = 1.0  # Constant delay between attempts in seconds
    debug: bool = False  # Raise attempt tracing from DEBUG to INFO

    def __post_init__(self):
        if not self.base_url or not isinstance(self.base_url, str):
            raise ValueError("base_url is required and must be a string")
        if isinstance(self.retry_attempts, bool) or not isinstance(self.retry_attempts, int):
            raise ValueError("retry_attempts must be an integer")
        if self.retry_attempts < 1:
            raise ValueError("retry_attempts must be at least 1")
        if self.retry_delay < 0:
            raise ValueError("retry_delay must not be negative")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
