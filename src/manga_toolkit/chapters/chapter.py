"""Chapter domain object.

A chapter is the in-memory set of pages located in one archive. Pages are
collected concurrently, so they carry no order until ``sort_pages`` runs.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from manga_toolkit.exceptions import ChapterAssemblyError
from schemas.page import Page


@dataclass
class Chapter:
    """Pages located in one chapter archive, plus any per-entry failures.

    Use as a context manager so every page stream is closed on exit, whether
    or not the pages were consumed.

    Attributes:
        pages: Successfully located pages (unordered until sorted)
        errors: Exceptions raised while locating individual entries
    """

    pages: list[Page] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.pages)

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)

    def __enter__(self) -> "Chapter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def page_numbers(self) -> list[int]:
        return [page.page_number for page in self.pages]

    def sort_pages(self) -> None:
        """Order pages by ascending page number.

        The sort is stable, so duplicate page numbers keep discovery order.
        """
        self.pages.sort(key=lambda page: page.page_number)

    def raise_for_errors(self) -> None:
        """Raise ChapterAssemblyError if any entry failed to be located."""
        if self.errors:
            raise ChapterAssemblyError(
                f"{len(self.errors)} archive entries could not be read",
                errors=list(self.errors),
            )

    def close(self) -> None:
        """Close every page content stream still open."""
        for page in self.pages:
            page.close()
