"""Aggregators for gathering chapter archives from clients."""

from .chapter_downloader import ChapterDownloader

__all__ = ["ChapterDownloader"]
