"""Transformers for turning chapter pages into documents."""

from .chapter_converter import ChapterConverter
from .orientation import NormalizedPage, OrientationNormalizer, rotate_to_portrait
from .pdf_builder import PdfDocumentBuilder

__all__ = [
    "ChapterConverter",
    "NormalizedPage",
    "OrientationNormalizer",
    "PdfDocumentBuilder",
    "rotate_to_portrait",
]
