"""Chapter assembly: locating ordered pages inside chapter archives."""

from .assembler import ChapterAssembler, assemble_chapter
from .chapter import Chapter
from .extensions import IMAGE_FORMATS, image_format, is_valid_extension
from .locator import locate_page, parse_page_number

__all__ = [
    "Chapter",
    "ChapterAssembler",
    "IMAGE_FORMATS",
    "assemble_chapter",
    "image_format",
    "is_valid_extension",
    "locate_page",
    "parse_page_number",
]
