"""Conversion and download result schemas.

These models describe the outcome of the two pipelines the toolkit runs:
converting a chapter archive into a PDF, and downloading chapter archives
from the remote endpoint.
"""

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
    """Outcome of converting one chapter archive into a PDF.

    Attributes:
        archive: Name of the source archive
        output: Path or description of the written document
        page_count: Number of pages in the document
        page_numbers: Page numbers in document order
        rotated_pages: Page numbers that were landscape and got rotated
    """

    archive: str
    output: str | None = None
    page_count: int = 0
    page_numbers: list[int] = []
    rotated_pages: list[int] = []


class ChapterDownload(BaseModel):
    """A chapter archive downloaded to local storage.

    Attributes:
        manga: Manga identifier used in the download URL
        chapter: Chapter index
        chapter_name: Remote name of the chapter ("<manga>_<chapter>")
        url: URL the archive was fetched from
        local_path: Path of the written archive
        bytes_written: Size of the written archive
        checksum: SHA-256 hash of the written archive
    """

    manga: str
    chapter: int = Field(ge=0)
    chapter_name: str
    url: str
    local_path: str
    bytes_written: int = 0
    checksum: str | None = None
