"""Chapter assembler for turning an archive into a set of pages.

Every archive entry is located concurrently. Failures are collected per
entry instead of aborting the whole archive, so the caller sees every bad
entry at once and decides whether any of them is fatal.
"""

import logging
import threading
import zipfile
from concurrent.futures import ThreadPoolExecutor

from manga_toolkit.exceptions import ConversionError, EmptyArchiveError

from .chapter import Chapter
from .locator import locate_page

logger = logging.getLogger(__name__)


class ChapterAssembler:
    """Locate every page of a chapter archive concurrently.

    The ChapterAssembler:
    1. Rejects archives without entries
    2. Runs locate_page for each entry on a thread pool
    3. Waits for every entry to finish
    4. Returns a Chapter with the located pages and every per-entry error

    Example:
        with zipfile.ZipFile("Chainsaw_Man_1.zip") as archive:
            with ChapterAssembler().assemble(archive) as chapter:
                chapter.raise_for_errors()
                chapter.sort_pages()

    Attributes:
        max_workers: Thread pool size (None uses the executor default)
    """

    def __init__(self, max_workers: int | None = None):
        self.max_workers = max_workers

    def assemble(self, archive: zipfile.ZipFile) -> Chapter:
        """Locate every page in an archive.

        Args:
            archive: Open chapter archive

        Returns:
            Chapter holding every located page (unordered) and the errors of
            the entries that failed

        Raises:
            EmptyArchiveError: If the archive has no file entries
        """
        entries = [entry for entry in archive.infolist() if not entry.is_dir()]
        if not entries:
            raise EmptyArchiveError()

        chapter = Chapter()
        lock = threading.Lock()

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(self._locate, archive, entry, chapter, lock)
                for entry in entries
            ]

        # Executor shutdown is the barrier: every entry has finished here.
        try:
            for future in futures:
                future.result()
        except Exception:
            chapter.close()
            raise

        summary = f"Located {len(chapter.pages)} of {len(entries)} pages"
        if chapter.errors:
            summary += f" ({len(chapter.errors)} failed)"
        logger.info(summary)
        return chapter

    def _locate(
        self,
        archive: zipfile.ZipFile,
        entry: zipfile.ZipInfo,
        chapter: Chapter,
        lock: threading.Lock,
    ) -> None:
        """Locate one entry and record the page or the failure."""
        try:
            page = locate_page(archive, entry)
        except ConversionError as e:
            logger.warning(f"Failed to locate page {entry.filename}: {e}")
            with lock:
                chapter.errors.append(e)
            return

        with lock:
            chapter.pages.append(page)


def assemble_chapter(
    archive: zipfile.ZipFile, max_workers: int | None = None
) -> Chapter:
    """Convenience wrapper around ChapterAssembler.assemble."""
    return ChapterAssembler(max_workers=max_workers).assemble(archive)
