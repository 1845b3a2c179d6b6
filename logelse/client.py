"""
Logelse client - send structured logs to the Logelse ingest API.

Usage:
    from logelse import LogelseClient

    # Option 1: Per-level shorthands with client-wide app identity
    async with LogelseClient("YOUR_API_KEY", app_name="my-app", app_uuid="app-123") as client:
        await client.info("Application started successfully")
        await client.error("Database connection failed")

    # Option 2: Explicit entries
    client = LogelseClient("YOUR_API_KEY", retry_attempts=2, timeout=3.0)
    await client.log({
        "timestamp": "2024-01-01T12:00:00Z",
        "level": "ERROR",
        "message": "Database connection failed",
        "app_name": "my-app",
        "app_uuid": "app-123",
    })

    # Option 3: Batch
    await client.log_batch([
        client.create_log_entry("DEBUG", "Processing user request", "my-app", "app-123"),
        client.create_log_entry("INFO", "User authenticated", "my-app", "app-123"),
    ])
    await client.aclose()
"""

import asyncio
import logging
import os
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime

import httpx

from .errors import BatchValidationError, RetryExhaustedError, ValidationError
from .models import DEFAULT_BASE_URL, LOGS_ENDPOINT, ClientConfig, LogEntry, LogLevel
from .retry import RetryOutcome, send_with_retry
from .transport import HttpTransport, Transport
from .validation import coerce_entry

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    """Current UTC time as ISO 8601 with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LogelseClient:
    """
    Async client for the Logelse log ingest API.

    Every send is validated first and then delivered with a fixed number of
    attempts and a constant delay between them. Safe to share between
    concurrent tasks on one event loop.
    """

    def __init__(
        self,
        api_key: str,
        *,
        app_name: str | None = None,
        app_uuid: str | None = None,
        config: ClientConfig | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        retry_attempts: int | None = None,
        retry_delay: float | None = None,
        debug: bool | None = None,
        transport: Transport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Your Logelse API key
            app_name: Default application name for entries built by the client
            app_uuid: Default application instance id for entries built by the client
            config: Prebuilt configuration; individual options below override it
            base_url: Ingest API base URL (default: https://ingst.logelse.com)
            timeout: Request timeout in seconds (default: 5.0)
            retry_attempts: Total attempts per entry (default: 3)
            retry_delay: Seconds between attempts (default: 1.0)
            debug: Trace each attempt at INFO instead of DEBUG (default: False)
            transport: Custom transport; bypasses the built-in HTTP transport
            http_client: Prebuilt httpx.AsyncClient for the built-in transport
        """
        if not api_key or not isinstance(api_key, str):
            raise ValueError("API key is required and must be a string")

        base = config or ClientConfig()
        overrides = {
            "base_url": base_url,
            "timeout": timeout,
            "retry_attempts": retry_attempts,
            "retry_delay": retry_delay,
            "debug": debug,
        }
        self.config = ClientConfig(
            **{
                name: value if value is not None else getattr(base, name)
                for name, value in overrides.items()
            }
        )

        self.app_name = app_name
        self.app_uuid = app_uuid
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpTransport(api_key, self.config, client=http_client)

        # Stats
        self._sent_count = 0
        self._failed_count = 0
        self._attempt_count = 0
        self._last_error: str | None = None

        if self.config.debug:
            logger.info(
                f"[Logelse] Client ready: base_url={self.config.base_url}, "
                f"retry_attempts={self.config.retry_attempts}, retry_delay={self.config.retry_delay}s"
            )

    @property
    def transport(self) -> Transport:
        return self._transport

    def create_log_entry(
        self,
        level: LogLevel | str,
        message: str,
        app_name: str | None = None,
        app_uuid: str | None = None,
        timestamp: str | None = None,
    ) -> LogEntry:
        """
        Build an entry, stamping the current time if no timestamp is given.

        The entry is not validated here; sending it does that.
        """
        return LogEntry(
            timestamp=timestamp or _now_iso(),
            level=level.value if isinstance(level, LogLevel) else level,
            message=message,
            app_name=app_name if app_name is not None else self.app_name,
            app_uuid=app_uuid if app_uuid is not None else self.app_uuid,
        )

    async def log(self, entry: LogEntry | Mapping) -> RetryOutcome:
        """
        Validate and send a single entry.

        Raises:
            ValidationError: If the entry is invalid (nothing is sent)
            RetryExhaustedError: If every attempt failed
        """
        return await self._deliver(coerce_entry(entry))

    async def log_message(
        self,
        level: LogLevel | str,
        message: str,
        app_name: str | None = None,
        app_uuid: str | None = None,
        timestamp: str | None = None,
    ) -> RetryOutcome:
        """Build an entry from its parts and send it."""
        return await self.log(self.create_log_entry(level, message, app_name, app_uuid, timestamp))

    async def debug(
        self,
        message: str,
        app_name: str | None = None,
        app_uuid: str | None = None,
        timestamp: str | None = None,
    ) -> RetryOutcome:
        """Send a DEBUG entry."""
        return await self.log_message(LogLevel.DEBUG, message, app_name, app_uuid, timestamp)

    async def info(
        self,
        message: str,
        app_name: str | None = None,
        app_uuid: str | None = None,
        timestamp: str | None = None,
    ) -> RetryOutcome:
        """Send an INFO entry."""
        return await self.log_message(LogLevel.INFO, message, app_name, app_uuid, timestamp)

    async def warn(
        self,
        message: str,
        app_name: str | None = None,
        app_uuid: str | None = None,
        timestamp: str | None = None,
    ) -> RetryOutcome:
        """Send a WARN entry."""
        return await self.log_message(LogLevel.WARN, message, app_name, app_uuid, timestamp)

    async def error(
        self,
        message: str,
        app_name: str | None = None,
        app_uuid: str | None = None,
        timestamp: str | None = None,
    ) -> RetryOutcome:
        """Send an ERROR entry."""
        return await self.log_message(LogLevel.ERROR, message, app_name, app_uuid, timestamp)

    async def fatal(
        self,
        message: str,
        app_name: str | None = None,
        app_uuid: str | None = None,
        timestamp: str | None = None,
    ) -> RetryOutcome:
        """Send a FATAL entry."""
        return await self.log_message(LogLevel.FATAL, message, app_name, app_uuid, timestamp)

    async def log_batch(self, entries: Sequence[LogEntry | Mapping]) -> list[RetryOutcome]:
        """
        Validate every entry, then send them all concurrently.

        Nothing is sent unless the whole batch passes validation. Each entry
        is retried independently; the call returns once every send has
        finished.

        Returns:
            One RetryOutcome per entry, in input order.

        Raises:
            ValidationError: If the batch is empty
            BatchValidationError: For the first invalid entry, with its index
            RetryExhaustedError: From the lowest-indexed entry that failed
        """
        if not entries or isinstance(entries, str | bytes | Mapping) or not isinstance(entries, Sequence):
            raise ValidationError("Batch must contain at least one log entry")

        validated = []
        for index, entry in enumerate(entries):
            try:
                validated.append(coerce_entry(entry))
            except ValidationError as e:
                raise BatchValidationError(index, e) from e

        results = await asyncio.gather(
            *(self._deliver(entry) for entry in validated),
            return_exceptions=True,
        )

        for result in results:
            if isinstance(result, BaseException):
                raise result

        return results

    async def _deliver(self, entry: LogEntry) -> RetryOutcome:
        try:
            outcome = await send_with_retry(self._transport, LOGS_ENDPOINT, entry, self.config)
        except RetryExhaustedError as e:
            self._failed_count += 1
            self._attempt_count += e.attempts
            self._last_error = e.last_error
            raise

        self._sent_count += 1
        self._attempt_count += outcome.attempts
        return outcome

    def get_stats(self) -> dict:
        """Get delivery statistics for this client."""
        return {
            "sent_count": self._sent_count,
            "failed_count": self._failed_count,
            "attempt_count": self._attempt_count,
            "last_error": self._last_error,
        }

    async def aclose(self) -> None:
        """Release the HTTP connection pool if the client created it."""
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> "LogelseClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()


def _env_bool(value: str | None) -> bool | None:
    if value is None:
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


def from_env(**overrides) -> LogelseClient:
    """
    Create a LogelseClient from environment variables.

    Environment variables:
        LOGELSE_API_KEY: API key (required)
        LOGELSE_APP_NAME: Default application name (optional)
        LOGELSE_APP_UUID: Default application instance id (optional)
        LOGELSE_BASE_URL: API base URL (optional)
        LOGELSE_TIMEOUT: Request timeout in seconds (optional)
        LOGELSE_RETRY_ATTEMPTS: Total attempts per entry (optional)
        LOGELSE_RETRY_DELAY: Seconds between attempts (optional)
        LOGELSE_DEBUG: "true" to trace attempts at INFO (optional)

    Args:
        **overrides: Keyword arguments that take precedence over the environment

    Returns:
        Configured LogelseClient instance
    """
    api_key = overrides.pop("api_key", None) or os.environ.get("LOGELSE_API_KEY")
    if not api_key:
        raise ValueError("LOGELSE_API_KEY environment variable required")

    timeout = os.environ.get("LOGELSE_TIMEOUT")
    retry_attempts = os.environ.get("LOGELSE_RETRY_ATTEMPTS")
    retry_delay = os.environ.get("LOGELSE_RETRY_DELAY")

    try:
        settings = {
            "app_name": os.environ.get("LOGELSE_APP_NAME"),
            "app_uuid": os.environ.get("LOGELSE_APP_UUID"),
            "base_url": os.environ.get("LOGELSE_BASE_URL", DEFAULT_BASE_URL),
            "timeout": float(timeout) if timeout else None,
            "retry_attempts": int(retry_attempts) if retry_attempts else None,
            "retry_delay": float(retry_delay) if retry_delay else None,
            "debug": _env_bool(os.environ.get("LOGELSE_DEBUG")),
        }
    except ValueError as e:
        raise ValueError(f"Invalid LOGELSE_* environment value: {e}") from e

    settings.update(overrides)
    return LogelseClient(api_key, **settings)
