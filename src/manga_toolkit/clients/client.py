"""Base client for network transfers."""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, BinaryIO

import httpx

from .exceptions import (
    APIError,
    CancelledError,
    ConnectionError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class Client(ABC):
    """Base class for network clients.

    Provides lazy-initialized httpx.Client with context manager support,
    configurable timeout, headers, and streaming chunk size via dict config.
    Transfers are attempted once; failures are raised to the caller.

    Config keys:
        base_url (required): Base URL for all requests
        timeout: Request timeout in seconds (default: 30)
        headers: Additional headers to include in requests
        chunk_size: Bytes read per streamed chunk (default: 65536)
    """

    def __init__(self, config: dict):
        if "base_url" not in config:
            raise ValueError("config must include 'base_url'")

        self._config = config
        self._client: httpx.Client | None = None
        self._client_lock = threading.Lock()

    @property
    def base_url(self) -> str:
        return str(self._config["base_url"])

    @property
    def timeout(self) -> float:
        return float(self._config.get("timeout", 30))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._config.get("headers", {}))

    @property
    def chunk_size(self) -> int:
        return int(self._config.get("chunk_size", 65536))

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialized httpx client, shared by every thread."""
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(
                    base_url=self.base_url,
                    timeout=self.timeout,
                    headers=self.headers,
                    follow_redirects=True,
                )
            return self._client

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Map HTTP errors to exceptions.

        Args:
            response: The HTTP response to check

        Returns:
            The response if successful

        Raises:
            NotFoundError: For 404 responses
            APIError: For other non-2xx responses
        """
        if response.is_success:
            return response

        status_code = response.status_code

        if status_code == 404:
            raise NotFoundError(f"Chapter archive not found: {response.url}")
        raise APIError(
            f"Download endpoint returned {status_code}: {response.url}",
            status_code=status_code,
        )

    def stream_to(
        self,
        path: str,
        output: BinaryIO,
        cancel_event: threading.Event | None = None,
    ) -> int:
        """Stream a GET response body into a writable binary stream.

        Args:
            path: URL path (appended to base_url)
            output: Destination stream
            cancel_event: Optional event; once set, the transfer stops at the
                next chunk

        Returns:
            Number of bytes written

        Raises:
            CancelledError: If cancel_event is set before the transfer completes
            ConnectionError: If the connection fails or is interrupted
            APIError: If the server returns a non-2xx response
        """
        if cancel_event is not None and cancel_event.is_set():
            raise CancelledError(f"Transfer of {path} cancelled before start")

        written = 0
        try:
            with self.client.stream("GET", path) as response:
                self._handle_response(response)
                for chunk in response.iter_bytes(chunk_size=self.chunk_size):
                    if cancel_event is not None and cancel_event.is_set():
                        raise CancelledError(
                            f"Transfer of {path} cancelled after {written} bytes"
                        )
                    output.write(chunk)
                    written += len(chunk)
        except httpx.TransportError as e:
            raise ConnectionError(f"Transfer of {path} failed: {e}") from e

        logger.debug(f"Streamed {written} bytes from {path}")
        return written

    @abstractmethod
    def fetch(self, *args, **kwargs) -> Any:
        """Fetch data from the server. Must be implemented by subclasses."""
        pass
