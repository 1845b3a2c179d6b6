"""
HTTP transport for the Logelse SDK.

The transport performs one POST per call and reports the outcome as a tagged
result instead of raising, so the retry loop never has to inspect exception
shapes:

    SendSuccess     any 2xx response
    HttpFailure     the server answered with a non-2xx status
    NetworkFailure  no response arrived (timeout, refused, reset)
    OtherFailure    anything else, carrying the original message
"""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from .__version__ import __version__
from .models import ClientConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendSuccess:
    """The server accepted the entry."""

    status_code: int


@dataclass(frozen=True)
class HttpFailure:
    """The server responded with a non-2xx status."""

    status_code: int
    detail: str  # Server-supplied message, or the reason phrase

    def describe(self) -> str:
        return f"HTTP {self.status_code}: {self.detail}"


@dataclass(frozen=True)
class NetworkFailure:
    """The request was sent but no response was received."""

    detail: str

    def describe(self) -> str:
        return f"Network error: {self.detail}"


@dataclass(frozen=True)
class OtherFailure:
    """A failure that is neither an HTTP status nor a network error."""

    detail: str

    def describe(self) -> str:
        return self.detail


TransportFailure = HttpFailure | NetworkFailure | OtherFailure
TransportResult = SendSuccess | TransportFailure


class Transport(Protocol):
    """Anything that can POST a JSON payload and classify the outcome."""

    async def post(self, endpoint: str, payload: dict) -> TransportResult: ...

    async def aclose(self) -> None: ...


def _error_detail(response: httpx.Response) -> str:
    """Pull the server's ``message`` field out of an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or f"Request failed with status code {response.status_code}"


class HttpTransport:
    """
    Sends entries with a shared ``httpx.AsyncClient``.

    One instance is created per SDK client and reused by every concurrent
    send; httpx pools connections underneath.
    """

    def __init__(self, api_key: str, config: ClientConfig, client: httpx.AsyncClient | None = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            headers={
                "Content-Type": "application/json",
                "X-API-KEY": api_key,
                "User-Agent": f"logelse-python/{__version__}",
            },
        )

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    async def post(self, endpoint: str, payload: dict) -> TransportResult:
        """POST ``payload`` as JSON to ``endpoint`` and classify the response."""
        try:
            response = await self._client.post(endpoint, json=payload)
        except httpx.RequestError as e:
            return NetworkFailure(str(e) or type(e).__name__)

        if response.is_success:
            return SendSuccess(status_code=response.status_code)

        return HttpFailure(status_code=response.status_code, detail=_error_detail(response))

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
            logger.debug("Closed HTTP client")
