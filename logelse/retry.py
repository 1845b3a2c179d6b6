"""
Retry loop for delivering a single log entry.

Each send gets up to ``retry_attempts`` tries with a constant
``retry_delay`` between them. The delay only separates attempts: there is
no wait after a success and none after the final failure.

Every failure is retried the same way, including 4xx responses. A
transport that returns something other than a result variant counts as a
failed attempt.

Usage:
    outcome = await send_with_retry(transport, "/logs", entry, config)
    print(outcome.attempts)
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from .errors import RetryExhaustedError
from .models import ClientConfig, LogEntry
from .transport import HttpFailure, NetworkFailure, OtherFailure, SendSuccess, Transport, TransportFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryOutcome:
    """Result of a successful delivery."""

    attempts: int  # Transport calls made, including the successful one
    result: SendSuccess


def describe_failure(failure: TransportFailure) -> str:
    """Render a classified transport failure as a human-readable message."""
    return failure.describe()


async def send_with_retry(
    transport: Transport,
    endpoint: str,
    entry: LogEntry,
    config: ClientConfig,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> RetryOutcome:
    """
    Deliver ``entry`` through ``transport``, retrying failed attempts.

    Args:
        transport: Transport shared with other concurrent sends
        endpoint: Path to POST to, relative to the transport's base URL
        entry: A validated entry
        config: Supplies ``retry_attempts``, ``retry_delay`` and ``debug``
        sleep: Coroutine used for the inter-attempt delay

    Returns:
        RetryOutcome for the first successful attempt.

    Raises:
        RetryExhaustedError: After ``retry_attempts`` failed attempts.
    """
    trace = logger.info if config.debug else logger.debug
    payload = entry.to_payload()
    last_error = "Unknown error"
    last_exception: Exception | None = None

    attempt = 1
    while True:
        trace(f"[Logelse] Attempt {attempt}/{config.retry_attempts} - Sending log to {endpoint}")

        try:
            result = await transport.post(endpoint, payload)
        except Exception as e:
            last_exception = e
            result = OtherFailure(str(e) or type(e).__name__)
        else:
            last_exception = None

        if isinstance(result, SendSuccess):
            trace(f"[Logelse] Log sent successfully: {result.status_code}")
            return RetryOutcome(attempts=attempt, result=result)

        if not isinstance(result, HttpFailure | NetworkFailure | OtherFailure):
            result = OtherFailure(f"Unexpected transport result: {result!r}")

        last_error = describe_failure(result)

        if attempt >= config.retry_attempts:
            break

        trace(f"[Logelse] Attempt {attempt} failed ({last_error}), retrying in {config.retry_delay}s...")
        await sleep(config.retry_delay)
        attempt += 1

    logger.warning(f"[Logelse] Giving up after {attempt} attempts: {last_error}")
    raise RetryExhaustedError(attempt, last_error) from last_exception
