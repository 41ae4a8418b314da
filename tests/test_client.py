"""Tests for the base Client class."""

import io
import threading

import httpx
import pytest

from manga_toolkit.clients import (
    APIError,
    CancelledError,
    Client,
    ConnectionError,
    NotFoundError,
)


class ConcreteClient(Client):
    """Concrete implementation of Client for testing."""

    def fetch(self, path, output):
        return self.stream_to(path, output)


def _mock_client(client: Client, handler) -> None:
    """Install an httpx client backed by a mock transport."""
    client._client = httpx.Client(
        base_url=client.base_url,
        transport=httpx.MockTransport(handler),
    )


class TestClientConfiguration:
    """Tests for Client configuration."""

    def test_requires_base_url(self):
        """Client raises ValueError if base_url is missing."""
        with pytest.raises(ValueError, match="base_url"):
            ConcreteClient({})

    def test_base_url_from_config(self):
        """Client stores base_url from config."""
        client = ConcreteClient({"base_url": "https://example.com/downloads"})

        assert client.base_url == "https://example.com/downloads"

    def test_default_timeout(self):
        """Client has default timeout of 30 seconds."""
        client = ConcreteClient({"base_url": "https://example.com"})

        assert client.timeout == 30

    def test_custom_timeout(self):
        """Client accepts custom timeout."""
        client = ConcreteClient({"base_url": "https://example.com", "timeout": 60})

        assert client.timeout == 60

    def test_default_chunk_size(self):
        """Client streams 64 KiB chunks by default."""
        client = ConcreteClient({"base_url": "https://example.com"})

        assert client.chunk_size == 65536

    def test_custom_chunk_size(self):
        """Client accepts custom chunk_size."""
        client = ConcreteClient({"base_url": "https://example.com", "chunk_size": 1024})

        assert client.chunk_size == 1024

    def test_default_headers(self):
        """Client has empty default headers."""
        client = ConcreteClient({"base_url": "https://example.com"})

        assert client.headers == {}

    def test_custom_headers(self):
        """Client accepts custom headers."""
        headers = {"User-Agent": "manga-toolkit"}
        client = ConcreteClient({"base_url": "https://example.com", "headers": headers})

        assert client.headers == headers


class TestClientLifecycle:
    """Tests for Client lifecycle management."""

    def test_lazy_client_initialization(self):
        """httpx.Client is not created until accessed."""
        client = ConcreteClient({"base_url": "https://example.com"})

        assert client._client is None

    def test_client_initialized_on_access(self):
        """httpx.Client is created when client property is accessed."""
        client = ConcreteClient({"base_url": "https://example.com"})

        _ = client.client

        assert isinstance(client._client, httpx.Client)
        client.close()

    def test_client_is_shared(self):
        """Repeated access returns the same httpx client."""
        client = ConcreteClient({"base_url": "https://example.com"})

        assert client.client is client.client
        client.close()

    def test_context_manager_closes_client(self):
        """Context manager closes the httpx client on exit."""
        with ConcreteClient({"base_url": "https://example.com"}) as client:
            _ = client.client
            assert client._client is not None

        assert client._client is None

    def test_close_when_not_initialized(self):
        """Calling close when client not initialized is safe."""
        client = ConcreteClient({"base_url": "https://example.com"})
        client.close()

        assert client._client is None


class TestHandleResponse:
    """Tests for HTTP status mapping."""

    def _response(self, status_code):
        request = httpx.Request("GET", "https://example.com/Chainsaw_Man_1")
        return httpx.Response(status_code, request=request)

    def test_success_returns_response(self):
        """2xx responses are returned unchanged."""
        client = ConcreteClient({"base_url": "https://example.com"})
        response = self._response(200)

        assert client._handle_response(response) is response

    def test_404_raises_not_found(self):
        """404 responses raise NotFoundError."""
        client = ConcreteClient({"base_url": "https://example.com"})

        with pytest.raises(NotFoundError):
            client._handle_response(self._response(404))

    def test_429_raises_api_error(self):
        """Rate limiting is reported as a plain APIError, not a missing chapter."""
        client = ConcreteClient({"base_url": "https://example.com"})

        with pytest.raises(APIError) as exc_info:
            client._handle_response(self._response(429))

        assert exc_info.value.status_code == 429
        assert not isinstance(exc_info.value, NotFoundError)

    def test_500_raises_api_error(self):
        """Other error responses raise APIError with the status code."""
        client = ConcreteClient({"base_url": "https://example.com"})

        with pytest.raises(APIError) as exc_info:
            client._handle_response(self._response(503))

        assert exc_info.value.status_code == 503


class TestStreamTo:
    """Tests for Client.stream_to()."""

    def test_streams_body_into_output(self):
        """The response body is written to the output stream."""
        client = ConcreteClient({"base_url": "https://example.com", "chunk_size": 4})
        requested = []

        def handler(request):
            requested.append(request.url.path)
            return httpx.Response(200, content=b"PK\x03\x04archive-bytes")

        _mock_client(client, handler)
        output = io.BytesIO()

        written = client.stream_to("/Chainsaw_Man_1", output)

        assert written == len(b"PK\x03\x04archive-bytes")
        assert output.getvalue() == b"PK\x03\x04archive-bytes"
        assert requested == ["/Chainsaw_Man_1"]

    def test_error_status_writes_nothing(self):
        """A 404 raises NotFoundError before any byte is written."""
        client = ConcreteClient({"base_url": "https://example.com"})
        _mock_client(client, lambda request: httpx.Response(404, content=b"missing"))
        output = io.BytesIO()

        with pytest.raises(NotFoundError):
            client.stream_to("/Chainsaw_Man_999", output)

        assert output.getvalue() == b""

    def test_transport_error_raises_connection_error(self):
        """Transport failures are raised as ConnectionError."""
        client = ConcreteClient({"base_url": "https://example.com"})

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        _mock_client(client, handler)

        with pytest.raises(ConnectionError, match="connection refused"):
            client.stream_to("/Chainsaw_Man_1", io.BytesIO())

    def test_cancelled_before_start(self):
        """A set cancel event stops the transfer before any request."""
        client = ConcreteClient({"base_url": "https://example.com"})
        requested = []

        def handler(request):
            requested.append(request)
            return httpx.Response(200, content=b"data")

        _mock_client(client, handler)
        cancel_event = threading.Event()
        cancel_event.set()

        with pytest.raises(CancelledError):
            client.stream_to("/Chainsaw_Man_1", io.BytesIO(), cancel_event=cancel_event)

        assert requested == []

    def test_cancelled_mid_transfer(self):
        """Setting the cancel event stops the transfer at the next chunk."""
        client = ConcreteClient({"base_url": "https://example.com", "chunk_size": 4})
        _mock_client(client, lambda request: httpx.Response(200, content=b"aaaabbbbcccc"))
        cancel_event = threading.Event()

        class CancellingOutput(io.BytesIO):
            def write(self, data):
                cancel_event.set()
                return super().write(data)

        output = CancellingOutput()

        with pytest.raises(CancelledError):
            client.stream_to("/Chainsaw_Man_1", output, cancel_event=cancel_event)

        assert output.getvalue() == b"aaaa"
