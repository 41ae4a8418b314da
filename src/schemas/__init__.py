"""Schema definitions for the manga toolkit."""

from .conversion import ChapterDownload, ConversionResult
from .page import Page

__all__ = [
    "ChapterDownload",
    "ConversionResult",
    "Page",
]
