"""MangaFreak client for downloading chapter archives."""

import threading
from typing import BinaryIO

from .client import Client

DEFAULT_ENDPOINT = "https://images.mangafreak.net/downloads"


class MangaFreakClient(Client):
    """Client for the MangaFreak chapter download endpoint.

    Chapters are served as ZIP archives at <endpoint>/<manga>_<chapter>.

    Example:
        config = {"base_url": "https://images.mangafreak.net/downloads"}
        with MangaFreakClient(config) as client:
            with open("Chainsaw_Man_1.zip", "wb") as output:
                client.fetch("Chainsaw_Man_1", output)
    """

    @staticmethod
    def chapter_name(manga: str, chapter: int) -> str:
        """Build the remote chapter name, e.g. "Chainsaw_Man_1"."""
        return f"{manga}_{chapter}"

    def chapter_url(self, chapter_name: str) -> str:
        """Absolute URL of a chapter archive."""
        return f"{self.base_url.rstrip('/')}/{chapter_name}"

    def fetch(
        self,
        chapter_name: str,
        output: BinaryIO,
        cancel_event: threading.Event | None = None,
    ) -> int:
        """Download a chapter archive into output.

        Args:
            chapter_name: Remote chapter name ("<manga>_<chapter>")
            output: Writable binary stream receiving the archive bytes
            cancel_event: Optional event that stops the transfer once set

        Returns:
            Number of bytes written

        Raises:
            NotFoundError: If the chapter does not exist
            APIError: If the server returns another non-2xx response
            ConnectionError: If the network connection fails
            CancelledError: If cancel_event is set during the transfer
        """
        return self.stream_to(chapter_name, output, cancel_event=cancel_event)
