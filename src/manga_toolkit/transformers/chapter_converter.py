"""Chapter converter for turning chapter archives into PDF documents.

Runs the whole conversion for one archive: assemble the chapter, sort the
pages, normalize each page's orientation, and build the document.
"""

import logging
import zipfile
from pathlib import Path
from typing import BinaryIO

from manga_toolkit.chapters.assembler import ChapterAssembler
from manga_toolkit.exceptions import (
    ExtractionError,
    MissingInputError,
    OutputConflictError,
    UnsupportedFormatError,
)
from schemas.conversion import ConversionResult

from .orientation import OrientationNormalizer
from .pdf_builder import DEFAULT_PAPER_SIZE, PdfDocumentBuilder

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSION = ".zip"


class ChapterConverter:
    """Convert chapter archives into paginated PDF documents.

    The ChapterConverter:
    1. Validates that an archive and an output sink were given
    2. Assembles the chapter, failing if any entry could not be located
    3. Sorts pages by page number
    4. Normalizes each page's orientation and appends it to the document
    5. Finalizes the document into the output sink

    Example:
        converter = ChapterConverter()
        result = converter.convert_file(
            Path("Chainsaw_Man_1.zip"), Path("pdfs/Chainsaw_Man_1.pdf")
        )

    Attributes:
        assembler: ChapterAssembler used to locate pages
        normalizer: OrientationNormalizer used to prepare page images
        paper_size: PyMuPDF paper size name for every page
    """

    def __init__(
        self,
        assembler: ChapterAssembler | None = None,
        normalizer: OrientationNormalizer | None = None,
        paper_size: str = DEFAULT_PAPER_SIZE,
    ):
        """Initialize the chapter converter.

        Args:
            assembler: Optional ChapterAssembler (default: one with default workers)
            normalizer: Optional OrientationNormalizer
            paper_size: Paper size of the generated pages (default: a5)
        """
        self.assembler = assembler or ChapterAssembler()
        self.normalizer = normalizer or OrientationNormalizer()
        self.paper_size = paper_size

    def convert(
        self,
        archive: zipfile.ZipFile | None,
        output: BinaryIO | None,
        archive_name: str | None = None,
    ) -> ConversionResult:
        """Convert an open chapter archive into a PDF written to output.

        The output sink is closed once the document is written.

        Args:
            archive: Open chapter archive
            output: Writable binary sink for the PDF
            archive_name: Name reported in logs and the result

        Returns:
            ConversionResult describing the generated document

        Raises:
            MissingInputError: If archive or output is missing
            EmptyArchiveError: If the archive has no entries
            ChapterAssemblyError: If any entry could not be located
            ConversionError: If a page fails to decode, encode, or be placed
        """
        if archive is None:
            raise MissingInputError("Missing archive")
        if output is None:
            raise MissingInputError("Missing output")

        name = archive_name or archive.filename or "<archive>"
        logger.info(f"Converting chapter {name}")

        rotated_pages: list[int] = []

        with self.assembler.assemble(archive) as chapter:
            chapter.raise_for_errors()
            chapter.sort_pages()

            with PdfDocumentBuilder(self.paper_size) as builder:
                for page in chapter:
                    normalized = self.normalizer.normalize(page)
                    if normalized.rotated:
                        rotated_pages.append(page.page_number)
                    builder.add_page(normalized.data, normalized.format)

                builder.finalize(output)

            page_numbers = chapter.page_numbers

        logger.info(
            f"Converted chapter {name}: {len(page_numbers)} pages, "
            f"{len(rotated_pages)} rotated"
        )
        return ConversionResult(
            archive=name,
            page_count=len(page_numbers),
            page_numbers=page_numbers,
            rotated_pages=rotated_pages,
        )

    def convert_file(self, archive_path: Path, output_path: Path) -> ConversionResult:
        """Convert a chapter archive on disk into a PDF file.

        A partially written output file is removed if the conversion fails.

        Args:
            archive_path: Path to the chapter ZIP archive
            output_path: Path of the PDF to write

        Returns:
            ConversionResult with output set to output_path
        """
        try:
            archive = zipfile.ZipFile(archive_path)
        except (zipfile.BadZipFile, OSError) as e:
            raise ExtractionError(
                f"Failed opening archive [{archive_path}]: {e}",
                entry_name=archive_path.name,
            ) from e

        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"Output path: {output_path}")

        with archive:
            try:
                with output_path.open("wb") as output:
                    result = self.convert(archive, output, archive_name=archive_path.name)
            except Exception:
                output_path.unlink(missing_ok=True)
                raise

        result.output = str(output_path)
        return result

    def convert_directory(
        self, input_dir: Path, output_dir: Path
    ) -> list[ConversionResult]:
        """Convert every chapter archive under a directory.

        Walks input_dir recursively in sorted order. Each archive becomes
        <output_dir>/<archive stem>.pdf. Every file is checked before the
        first conversion starts; after that, the first failure aborts the
        batch.

        Args:
            input_dir: Directory containing chapter ZIP archives
            output_dir: Directory receiving the PDFs

        Returns:
            ConversionResult for each converted archive

        Raises:
            MissingInputError: If input_dir does not exist
            UnsupportedFormatError: If a file under input_dir is not a ZIP archive
            OutputConflictError: If two archives share a stem and would write
                the same PDF
        """
        if not input_dir.is_dir():
            raise MissingInputError(f"Input directory not found: {input_dir}")

        archive_paths = sorted(p for p in input_dir.rglob("*") if p.is_file())
        logger.info(f"Found {len(archive_paths)} files in {input_dir}")

        outputs: dict[Path, Path] = {}
        for archive_path in archive_paths:
            extension = archive_path.suffix.lower()
            if extension != ARCHIVE_EXTENSION:
                raise UnsupportedFormatError(
                    f"[{archive_path.name}] is not a zip file",
                    extension=extension,
                )

            output_path = output_dir / f"{archive_path.stem}.pdf"
            if output_path in outputs:
                raise OutputConflictError(
                    f"[{archive_path}] and [{outputs[output_path]}] would both "
                    f"write [{output_path.name}]",
                    output_name=output_path.name,
                )
            outputs[output_path] = archive_path

        results: list[ConversionResult] = []
        for output_path, archive_path in outputs.items():
            results.append(self.convert_file(archive_path, output_path))

        return results
