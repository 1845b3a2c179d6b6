"""
Unit tests for HttpTransport.

Uses httpx.MockTransport so requests never leave the process.
"""

import json

import httpx
import pytest

from logelse import (
    ClientConfig,
    HttpFailure,
    HttpTransport,
    NetworkFailure,
    OtherFailure,
    SendSuccess,
    __version__,
)

API_KEY = "test-api-key"
PAYLOAD = {
    "timestamp": "2024-01-01T12:00:00Z",
    "log_level": "INFO",
    "message": "Test message",
    "app_name": "test-app",
    "app_uuid": "test-uuid-123",
}


def build_transport(handler, base_url: str = "https://ingest.test") -> HttpTransport:
    """HttpTransport whose httpx client is backed by ``handler``."""
    http_client = httpx.AsyncClient(
        base_url=base_url,
        transport=httpx.MockTransport(handler),
        headers={"Content-Type": "application/json", "X-API-KEY": API_KEY},
    )
    return HttpTransport(API_KEY, ClientConfig(base_url=base_url), client=http_client)


class TestHttpTransportRequests:
    """Tests for what the transport puts on the wire."""

    @pytest.mark.asyncio
    async def test_default_client_settings(self):
        """The built-in httpx client carries base URL, timeout and headers."""
        config = ClientConfig(base_url="https://custom.api.com", timeout=10.0)
        transport = HttpTransport(API_KEY, config)

        try:
            client = transport.client
            assert str(client.base_url).rstrip("/") == "https://custom.api.com"
            assert client.timeout.read == 10.0
            assert client.headers["Content-Type"] == "application/json"
            assert client.headers["X-API-KEY"] == API_KEY
            assert client.headers["User-Agent"] == f"logelse-python/{__version__}"
        finally:
            await transport.aclose()

    @pytest.mark.asyncio
    async def test_posts_json_to_endpoint(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": True})

        transport = build_transport(handler)
        result = await transport.post("/logs", PAYLOAD)

        assert result == SendSuccess(status_code=200)
        assert len(seen) == 1
        request = seen[0]
        assert request.method == "POST"
        assert request.url == "https://ingest.test/logs"
        assert request.headers["X-API-KEY"] == API_KEY
        assert json.loads(request.content) == PAYLOAD

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [200, 201, 202, 204])
    async def test_any_2xx_is_success(self, status):
        transport = build_transport(lambda request: httpx.Response(status))
        result = await transport.post("/logs", PAYLOAD)
        assert result == SendSuccess(status_code=status)


class TestHttpTransportClassification:
    """Tests for how failures are classified."""

    @pytest.mark.asyncio
    async def test_http_error_uses_server_message(self):
        transport = build_transport(lambda request: httpx.Response(400, json={"message": "Bad Request"}))

        result = await transport.post("/logs", PAYLOAD)

        assert result == HttpFailure(status_code=400, detail="Bad Request")
        assert result.describe() == "HTTP 400: Bad Request"

    @pytest.mark.asyncio
    async def test_http_error_without_message_uses_reason_phrase(self):
        transport = build_transport(lambda request: httpx.Response(503, text="down"))

        result = await transport.post("/logs", PAYLOAD)

        assert result == HttpFailure(status_code=503, detail="Service Unavailable")

    @pytest.mark.asyncio
    async def test_http_error_with_json_lacking_message(self):
        transport = build_transport(lambda request: httpx.Response(500, json={"error": {"code": "x"}}))

        result = await transport.post("/logs", PAYLOAD)

        assert result.describe() == "HTTP 500: Internal Server Error"

    @pytest.mark.asyncio
    async def test_connect_error_is_network_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        result = await build_transport(handler).post("/logs", PAYLOAD)

        assert isinstance(result, NetworkFailure)
        assert result.describe() == "Network error: Connection refused"

    @pytest.mark.asyncio
    async def test_timeout_is_network_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        result = await build_transport(handler).post("/logs", PAYLOAD)

        assert result == NetworkFailure("timed out")

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self):
        """Non-httpx errors are left for the retry loop to wrap."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await build_transport(handler).post("/logs", PAYLOAD)

    def test_other_failure_keeps_original_message(self):
        assert OtherFailure("Generic error").describe() == "Generic error"


class TestHttpTransportClose:
    """Tests for connection pool ownership."""

    @pytest.mark.asyncio
    async def test_closes_own_client(self):
        transport = HttpTransport(API_KEY, ClientConfig())
        await transport.aclose()
        assert transport.client.is_closed

    @pytest.mark.asyncio
    async def test_leaves_injected_client_open(self):
        http_client = httpx.AsyncClient()
        transport = HttpTransport(API_KEY, ClientConfig(), client=http_client)

        await transport.aclose()

        assert not http_client.is_closed
        await http_client.aclose()
