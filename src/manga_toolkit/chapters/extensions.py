"""Accepted page image formats."""

from pathlib import PurePosixPath

from manga_toolkit.exceptions import UnsupportedFormatError

# Maps accepted extensions to the Pillow format used to re-encode them.
IMAGE_FORMATS = {
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
}


def is_valid_extension(ext: str) -> bool:
    """Check whether a lowercased extension (e.g. ".jpg") is a page image."""
    return ext in IMAGE_FORMATS


def image_format(filename: str) -> str:
    """Return the Pillow format label for a page filename.

    Args:
        filename: Entry filename, e.g. "chapter12_7.jpg"

    Returns:
        "JPEG" or "PNG"

    Raises:
        UnsupportedFormatError: If the extension is not an accepted format
    """
    ext = PurePosixPath(filename).suffix.lower()
    if not is_valid_extension(ext):
        raise UnsupportedFormatError(
            f"Image [{filename}] has an unexpected image format [{ext}]",
            extension=ext,
        )
    return IMAGE_FORMATS[ext]
