"""Page domain object."""

import zipfile
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import BinaryIO


@dataclass
class Page:
    """Represents one image page extracted from a chapter archive.

    The content stream is single use: it is read once during orientation
    normalization and then closed.

    Attributes:
        content: Readable stream over the entry's decompressed bytes
        name: Base filename of the archive entry (e.g. "chapter12_7.jpg")
        page_number: Ordering key recovered from the filename
        entry: Original archive entry metadata
    """

    content: BinaryIO
    name: str
    page_number: int
    entry: zipfile.ZipInfo | None = None

    @property
    def extension(self) -> str:
        return PurePosixPath(self.name).suffix.lower()

    @property
    def closed(self) -> bool:
        return bool(getattr(self.content, "closed", False))

    def close(self) -> None:
        if not self.closed:
            self.content.close()
