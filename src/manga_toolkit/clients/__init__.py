"""Network clients for chapter archive downloads."""

from .client import Client
from .exceptions import (
    APIError,
    CancelledError,
    ClientError,
    ConnectionError,
    NotFoundError,
)
from .manga_freak_client import DEFAULT_ENDPOINT, MangaFreakClient

__all__ = [
    "Client",
    "MangaFreakClient",
    "DEFAULT_ENDPOINT",
    "ClientError",
    "ConnectionError",
    "CancelledError",
    "APIError",
    "NotFoundError",
]
