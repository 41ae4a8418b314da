"""PDF document builder for chapter pages.

Wraps a PyMuPDF document that receives one full-page image per chapter
page. The output only becomes complete when ``finalize`` writes it out.
"""

import logging
from typing import BinaryIO

import fitz  # PyMuPDF

from manga_toolkit.exceptions import DocumentBuildError

logger = logging.getLogger(__name__)

DEFAULT_PAPER_SIZE = "a5"


class PdfDocumentBuilder:
    """Build a PDF with one full-bleed image per page.

    Every page uses the same portrait paper size with zero margins; the image
    is stretched over the whole page rectangle.

    Example:
        with PdfDocumentBuilder() as builder:
            builder.add_page(jpeg_bytes, "JPEG")
            with open("chapter.pdf", "wb") as output:
                builder.finalize(output)

    Attributes:
        paper_size: PyMuPDF paper size name (e.g. "a5")
        width: Page width in points
        height: Page height in points
    """

    def __init__(self, paper_size: str = DEFAULT_PAPER_SIZE):
        width, height = fitz.paper_size(paper_size)
        if width <= 0 or height <= 0:
            raise ValueError(f"Unknown paper size: {paper_size}")

        self.paper_size = paper_size
        # Portrait: the shorter side is the width.
        self.width = min(width, height)
        self.height = max(width, height)
        self._doc: fitz.Document | None = fitz.open()

    def __enter__(self) -> "PdfDocumentBuilder":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._doc is None

    @property
    def page_count(self) -> int:
        return len(self._document())

    def add_page(self, image: bytes, image_format: str) -> None:
        """Append a page covered entirely by an image.

        Args:
            image: Encoded image bytes
            image_format: Format label of the image ("JPEG" or "PNG")

        Raises:
            DocumentBuildError: If the backend rejects the image
        """
        doc = self._document()
        page_number = len(doc) + 1
        try:
            page = doc.new_page(width=self.width, height=self.height)
            page.insert_image(page.rect, stream=image, keep_proportion=False)
        except Exception as e:
            raise DocumentBuildError(
                f"Failed adding {image_format} image as page {page_number}: {e}"
            ) from e

        logger.debug(
            f"Added page {page_number} ({image_format}, {self.width:.2f}x{self.height:.2f}pt)"
        )

    def finalize(self, sink: BinaryIO) -> None:
        """Write the document to the sink and close both.

        Args:
            sink: Writable binary stream receiving the PDF

        Raises:
            DocumentBuildError: If the document is empty or cannot be written
        """
        doc = self._document()
        try:
            if len(doc) == 0:
                raise DocumentBuildError("Cannot finalize a document without pages")
            try:
                data = doc.tobytes(garbage=3, deflate=True)
                sink.write(data)
                sink.flush()
            except Exception as e:
                raise DocumentBuildError(f"Failed writing document: {e}") from e
            logger.debug(f"Wrote document with {len(doc)} pages ({len(data)} bytes)")
        finally:
            sink.close()
            self.close()

    def close(self) -> None:
        """Discard the in-progress document."""
        if self._doc is not None:
            self._doc.close()
            self._doc = None

    def _document(self) -> fitz.Document:
        if self._doc is None:
            raise DocumentBuildError("Document builder is already closed")
        return self._doc
