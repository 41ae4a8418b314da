"""Chapter downloader for fetching a range of chapter archives."""

import hashlib
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from manga_toolkit.clients import CancelledError, MangaFreakClient
from schemas.conversion import ChapterDownload

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 4


class ChapterDownloader:
    """Downloads chapter archives concurrently into a local directory.

    Each chapter in the requested range is fetched by its own job, with at
    most ``max_concurrency`` jobs in flight. The first failing job cancels
    the rest: jobs that have not started are skipped and running transfers
    stop at their next chunk. Every job owns its output file exclusively
    and removes it when the transfer does not complete.

    Example:
        config = {"base_url": "https://images.mangafreak.net/downloads"}
        with MangaFreakClient(config) as client:
            downloader = ChapterDownloader(client)
            downloads = downloader.download_chapters(
                "Chainsaw_Man", Path("./zips"), 1, 10
            )
    """

    def __init__(
        self,
        client: MangaFreakClient,
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    ):
        """Initialize the chapter downloader.

        Args:
            client: Client used to fetch chapter archives
            max_concurrency: Maximum number of downloads in flight (default: 4)
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

        self.client = client
        self.max_concurrency = max_concurrency

    def download_chapters(
        self,
        manga: str,
        output_dir: Path,
        from_chapter: int,
        to_chapter: int,
        cancel_event: threading.Event | None = None,
    ) -> list[ChapterDownload]:
        """Download every chapter in an inclusive range.

        Args:
            manga: Manga identifier used in the download URL
            output_dir: Directory receiving <manga>_<chapter>.zip files
            from_chapter: First chapter to download
            to_chapter: Last chapter to download (inclusive)
            cancel_event: Optional event that cancels the whole run once set

        Returns:
            ChapterDownload for each chapter, ordered by chapter

        Raises:
            ValueError: If the chapter range is invalid
            ClientError: The first failure once every job has finished
        """
        if from_chapter < 0 or to_chapter < 0:
            raise ValueError("Chapter numbers must not be negative")
        if from_chapter > to_chapter:
            raise ValueError(
                f"from_chapter ({from_chapter}) is after to_chapter ({to_chapter})"
            )

        output_dir.mkdir(parents=True, exist_ok=True)
        cancel_event = cancel_event or threading.Event()

        chapters = range(from_chapter, to_chapter + 1)
        logger.info(
            f"Downloading {len(chapters)} chapters of {manga} "
            f"({self.max_concurrency} at a time)"
        )

        downloads: list[ChapterDownload] = []
        errors: list[Exception] = []

        with ThreadPoolExecutor(max_workers=self.max_concurrency) as executor:
            futures = {
                executor.submit(
                    self._download_chapter, manga, chapter, output_dir, cancel_event
                ): chapter
                for chapter in chapters
            }
            for future in as_completed(futures):
                chapter = futures[future]
                try:
                    downloads.append(future.result())
                except Exception as e:
                    if not isinstance(e, CancelledError):
                        logger.error(f"Failed to download chapter {chapter}: {e}")
                    cancel_event.set()
                    errors.append(e)

        if errors:
            failures = [e for e in errors if not isinstance(e, CancelledError)]
            raise (failures or errors)[0]

        return sorted(downloads, key=lambda download: download.chapter)

    def _download_chapter(
        self,
        manga: str,
        chapter: int,
        output_dir: Path,
        cancel_event: threading.Event,
    ) -> ChapterDownload:
        """Download one chapter archive to <output_dir>/<manga>_<chapter>.zip."""
        chapter_name = self.client.chapter_name(manga, chapter)
        if cancel_event.is_set():
            raise CancelledError(f"Download of {chapter_name} cancelled")

        local_path = output_dir / f"{chapter_name}.zip"
        try:
            with local_path.open("wb") as output:
                bytes_written = self.client.fetch(
                    chapter_name, output, cancel_event=cancel_event
                )
        except Exception:
            local_path.unlink(missing_ok=True)
            raise

        logger.info(f"Downloaded [{chapter_name}] on [{local_path}]")
        return ChapterDownload(
            manga=manga,
            chapter=chapter,
            chapter_name=chapter_name,
            url=self.client.chapter_url(chapter_name),
            local_path=str(local_path),
            bytes_written=bytes_written,
            checksum=self._compute_checksum(local_path),
        )

    def _compute_checksum(self, file_path: Path) -> str:
        """Compute SHA-256 checksum of a file.

        Args:
            file_path: Path to the file

        Returns:
            Hex-encoded SHA-256 hash
        """
        sha256 = hashlib.sha256()
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(8192), b""):
                sha256.update(chunk)
        return sha256.hexdigest()
