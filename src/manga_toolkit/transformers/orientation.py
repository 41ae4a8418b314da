"""Orientation normalization for chapter pages.

Pages are decoded with Pillow, rotated from landscape to portrait when
needed, and re-encoded into their original format so they can be placed
on a portrait document page.
"""

import io
import logging
import zipfile
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from manga_toolkit.chapters.extensions import image_format
from manga_toolkit.exceptions import DecodeError, EncodeError
from schemas.page import Page

logger = logging.getLogger(__name__)

JPEG_QUALITY = 100

# JPEG cannot store alpha or palette images.
JPEG_MODES = ("RGB", "L", "CMYK")


@dataclass
class NormalizedPage:
    """An encoded page image ready to be placed in a document.

    Attributes:
        data: Encoded image bytes
        format: Pillow format label ("JPEG" or "PNG")
        page_number: Page number of the source page
        rotated: Whether the page was landscape and got rotated
        size: (width, height) of the encoded image in pixels
    """

    data: bytes
    format: str
    page_number: int
    rotated: bool
    size: tuple[int, int]


class OrientationNormalizer:
    """Decode a page, rotate landscape images to portrait, and re-encode.

    The OrientationNormalizer:
    1. Determines the image format from the page filename
    2. Decodes the image, honoring EXIF orientation
    3. Rotates landscape images (width > height) to portrait
    4. Re-encodes to the original format (JPEG at maximum quality)
    5. Closes the page content stream
    """

    def normalize(self, page: Page) -> NormalizedPage:
        """Normalize the orientation of one page.

        Args:
            page: Page with an unread content stream

        Returns:
            NormalizedPage with the encoded image

        Raises:
            UnsupportedFormatError: If the page filename is not JPEG or PNG
            DecodeError: If the image cannot be decoded
            EncodeError: If the image cannot be re-encoded
        """
        try:
            fmt = image_format(page.name)
            image = self._decode(page)
        finally:
            page.close()

        logger.debug(f"Page {page.page_number} ({page.name}) size: {image.size}")

        rotated = image.width > image.height
        if rotated:
            image = rotate_to_portrait(image)
            logger.debug(f"Rotated page {page.page_number} to size: {image.size}")

        data = self._encode(image, fmt, page)
        return NormalizedPage(
            data=data,
            format=fmt,
            page_number=page.page_number,
            rotated=rotated,
            size=image.size,
        )

    def _decode(self, page: Page) -> Image.Image:
        """Decode the page content, applying any EXIF orientation.

        Archive entries are checked against their CRC-32 while being read, so
        a corrupt entry surfaces here as zipfile.BadZipFile.
        """
        try:
            with Image.open(page.content) as source:
                source.load()
                return ImageOps.exif_transpose(source)
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            zipfile.BadZipFile,
            OSError,
            ValueError,
        ) as e:
            raise DecodeError(f"Failed decoding page [{page.name}]: {e}") from e

    def _encode(self, image: Image.Image, fmt: str, page: Page) -> bytes:
        """Encode an image into the given format in memory."""
        options = {}
        if fmt == "JPEG":
            if image.mode not in JPEG_MODES:
                image = image.convert("RGB")
            options = {"quality": JPEG_QUALITY, "subsampling": 0}

        buffer = io.BytesIO()
        try:
            image.save(buffer, format=fmt, **options)
        except (OSError, ValueError, KeyError) as e:
            raise EncodeError(f"Failed encoding page [{page.name}] as {fmt}: {e}") from e
        return buffer.getvalue()


def rotate_to_portrait(image: Image.Image) -> Image.Image:
    """Turn a landscape image into a portrait one.

    Rotates 270 degrees, then mirrors horizontally and vertically. The net
    result is a 90 degree counter-clockwise rotation.
    """
    image = image.transpose(Image.Transpose.ROTATE_270)
    image = image.transpose(Image.Transpose.FLIP_LEFT_RIGHT)
    return image.transpose(Image.Transpose.FLIP_TOP_BOTTOM)
