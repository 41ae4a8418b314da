"""Command-line interface for manga-toolkit."""

import argparse
import logging
import sys
from pathlib import Path

from manga_toolkit.aggregators import ChapterDownloader
from manga_toolkit.aggregators.chapter_downloader import DEFAULT_MAX_CONCURRENCY
from manga_toolkit.clients import DEFAULT_ENDPOINT, MangaFreakClient
from manga_toolkit.transformers import ChapterConverter
from manga_toolkit.transformers.pdf_builder import DEFAULT_PAPER_SIZE

DEFAULT_MANGA_TERM = "Chainsaw_Man"
DEFAULT_ZIP_OUTPUT_DIR = Path("./workspace/zips")
DEFAULT_PDF_OUTPUT_DIR = Path("./workspace/pdfs")
DEFAULT_FROM_CHAPTER = 1
DEFAULT_TO_CHAPTER = 120


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def download_chapters(args: argparse.Namespace) -> int:
    """Execute the download-chapters command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if args.from_chapter > args.to_chapter:
        logger.error("--from-chapter must not be greater than --to-chapter")
        return 1

    output_dir = args.output
    output_dir.mkdir(parents=True, exist_ok=True)

    config = {
        "base_url": args.endpoint,
        "headers": {
            "User-Agent": "manga-toolkit/0.1",
        },
    }

    try:
        with MangaFreakClient(config) as client:
            downloader = ChapterDownloader(client, max_concurrency=args.concurrency)
            downloads = downloader.download_chapters(
                args.manga, output_dir, args.from_chapter, args.to_chapter
            )

        logger.info(f"Downloaded {len(downloads)} chapters of {args.manga}")
        logger.info(f"  Output: {output_dir}")
        return 0

    except Exception as e:
        logger.error(f"Failed to download chapters: {e}")
        return 1


def generate_pdf(args: argparse.Namespace) -> int:
    """Execute the generate-pdf command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    input_dir = args.input.resolve()
    if not input_dir.is_dir():
        logger.error(f"Input directory not found: {input_dir}")
        return 1

    output_dir = args.output
    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        converter = ChapterConverter(paper_size=args.paper_size)
        results = converter.convert_directory(input_dir, output_dir)

        logger.info(f"Generated {len(results)} PDFs")
        for result in results:
            logger.info(f"  {result.archive}: {result.page_count} pages -> {result.output}")
        return 0

    except Exception as e:
        logger.error(f"Failed to generate PDFs: {e}")
        return 1


def convert(args: argparse.Namespace) -> int:
    """Execute the convert command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    archive_path = args.archive.resolve()
    if not archive_path.is_file():
        logger.error(f"Archive not found: {archive_path}")
        return 1

    output_path = args.output or archive_path.with_suffix(".pdf")

    try:
        converter = ChapterConverter(paper_size=args.paper_size)
        result = converter.convert_file(archive_path, output_path)

        logger.info(f"Converted chapter: {result.archive}")
        logger.info(f"  Pages: {result.page_count}")
        if result.rotated_pages:
            logger.info(f"  Rotated pages: {result.rotated_pages}")
        logger.info(f"  Output: {result.output}")
        return 0

    except Exception as e:
        logger.error(f"Failed to convert {archive_path.name}: {e}")
        return 1


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="manga-toolkit",
        description="Download manga chapter archives and convert them to PDF",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    download_parser = subparsers.add_parser(
        "download-chapters",
        help="Download chapter ZIP archives from MangaFreak",
        description="Download a range of chapter ZIP archives from MangaFreak, a few at a time.",
    )
    download_parser.add_argument(
        "--manga",
        type=str,
        default=DEFAULT_MANGA_TERM,
        help=f"Manga term used in the download URL (default: {DEFAULT_MANGA_TERM})",
    )
    download_parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_ZIP_OUTPUT_DIR,
        help=f"Output directory for ZIP archives (default: {DEFAULT_ZIP_OUTPUT_DIR})",
    )
    download_parser.add_argument(
        "--from-chapter",
        type=int,
        default=DEFAULT_FROM_CHAPTER,
        help=f"First chapter to download (default: {DEFAULT_FROM_CHAPTER})",
    )
    download_parser.add_argument(
        "--to-chapter",
        type=int,
        default=DEFAULT_TO_CHAPTER,
        help=f"Last chapter to download, inclusive (default: {DEFAULT_TO_CHAPTER})",
    )
    download_parser.add_argument(
        "--endpoint",
        type=str,
        default=DEFAULT_ENDPOINT,
        help=f"Download endpoint (default: {DEFAULT_ENDPOINT})",
    )
    download_parser.add_argument(
        "--concurrency",
        type=int,
        default=DEFAULT_MAX_CONCURRENCY,
        help=f"Maximum number of simultaneous downloads (default: {DEFAULT_MAX_CONCURRENCY})",
    )
    download_parser.set_defaults(func=download_chapters)

    generate_parser = subparsers.add_parser(
        "generate-pdf",
        help="Convert every chapter ZIP in a directory to PDF",
        description="Generate one PDF per chapter ZIP archive found in the input directory. Archives must contain JPG or PNG pages named <prefix>_<page>.<ext>.",
    )
    generate_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Directory with chapter ZIP archives",
    )
    generate_parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_PDF_OUTPUT_DIR,
        help=f"Output directory for PDFs (default: {DEFAULT_PDF_OUTPUT_DIR})",
    )
    generate_parser.add_argument(
        "--paper-size",
        type=str,
        default=DEFAULT_PAPER_SIZE,
        help=f"Paper size of the generated pages (default: {DEFAULT_PAPER_SIZE})",
    )
    generate_parser.set_defaults(func=generate_pdf)

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a single chapter ZIP to PDF",
        description="Convert one chapter ZIP archive into a PDF.",
    )
    convert_parser.add_argument(
        "--archive",
        type=Path,
        required=True,
        help="Path to the chapter ZIP archive",
    )
    convert_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Path of the PDF to write (default: archive path with .pdf suffix)",
    )
    convert_parser.add_argument(
        "--paper-size",
        type=str,
        default=DEFAULT_PAPER_SIZE,
        help=f"Paper size of the generated pages (default: {DEFAULT_PAPER_SIZE})",
    )
    convert_parser.set_defaults(func=convert)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
