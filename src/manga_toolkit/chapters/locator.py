"""Locate a single page inside a chapter archive."""

import logging
import re
import zipfile
from pathlib import PurePosixPath

from manga_toolkit.exceptions import (
    ExtractionError,
    MalformedPageNameError,
    UnsupportedFormatError,
)
from schemas.page import Page

from .extensions import is_valid_extension

logger = logging.getLogger(__name__)

# ASCII digits only, with an optional plus sign.
PAGE_NUMBER_PATTERN = re.compile(r"\+?[0-9]+")


def parse_page_number(stem: str) -> int:
    """Parse the page number from a filename stem.

    The page number is the integer after the last underscore, or the whole
    stem when it contains none: "chapter12_7" -> 7, "3" -> 3.

    Raises:
        MalformedPageNameError: If the trailing segment is not made of ASCII
            digits (an optional leading plus sign is accepted)
    """
    segment = stem.split("_")[-1]
    if not PAGE_NUMBER_PATTERN.fullmatch(segment):
        raise MalformedPageNameError(
            f"Couldn't extract page number from [{stem}]: "
            f"[{segment}] is not a base-10 integer",
            stem=stem,
        )
    return int(segment)


def locate_page(archive: zipfile.ZipFile, entry: zipfile.ZipInfo) -> Page:
    """Open an archive entry as a chapter page.

    Args:
        archive: Open chapter archive
        entry: Entry to locate

    Returns:
        Page holding an open stream over the entry's decompressed content

    Raises:
        UnsupportedFormatError: If the entry is not a JPEG or PNG image
        ExtractionError: If the entry cannot be opened
        MalformedPageNameError: If the filename carries no page number
    """
    name = PurePosixPath(entry.filename).name
    path = PurePosixPath(name)
    extension = path.suffix.lower()
    if not is_valid_extension(extension):
        raise UnsupportedFormatError(
            f"Image [{name}] has an unexpected image format [{extension}]",
            extension=extension,
        )

    try:
        content = archive.open(entry)
    except (zipfile.BadZipFile, OSError, RuntimeError, NotImplementedError) as e:
        raise ExtractionError(
            f"Failed opening image [{name}] with error: {e}",
            entry_name=name,
        ) from e

    try:
        page_number = parse_page_number(path.stem)
    except MalformedPageNameError:
        content.close()
        raise

    logger.debug(f"Located page {page_number} at {entry.filename}")
    return Page(content=content, name=name, page_number=page_number, entry=entry)
