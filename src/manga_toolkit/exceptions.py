"""Custom exceptions for the chapter conversion pipeline."""


class ConversionError(Exception):
    """Base exception for all conversion errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class MissingInputError(ConversionError):
    """Raised when the archive or the output sink is not provided."""

    pass


class EmptyArchiveError(ConversionError):
    """Raised when an archive holds no entries to convert."""

    def __init__(self, message: str = "Archive contains no entries"):
        super().__init__(message)


class UnsupportedFormatError(ConversionError):
    """Raised when a file extension is not an accepted image format."""

    def __init__(self, message: str, extension: str, *args, **kwargs):
        self.extension = extension
        super().__init__(message, *args, **kwargs)


class ExtractionError(ConversionError):
    """Raised when an archive entry cannot be opened for reading."""

    def __init__(self, message: str, entry_name: str, *args, **kwargs):
        self.entry_name = entry_name
        super().__init__(message, *args, **kwargs)


class MalformedPageNameError(ConversionError):
    """Raised when no page number can be parsed from an entry filename."""

    def __init__(self, message: str, stem: str, *args, **kwargs):
        self.stem = stem
        super().__init__(message, *args, **kwargs)


class DecodeError(ConversionError):
    """Raised when a page image cannot be decoded."""

    pass


class EncodeError(ConversionError):
    """Raised when a page image cannot be re-encoded."""

    pass


class DocumentBuildError(ConversionError):
    """Raised when the PDF backend rejects a page or cannot be finalized."""

    pass


class ChapterAssemblyError(ConversionError):
    """Raised when one or more archive entries could not be located as pages.

    Attributes:
        errors: Every per-entry exception collected during assembly
    """

    def __init__(self, message: str, errors: list | None = None, *args, **kwargs):
        self.errors = errors or []
        super().__init__(message, *args, **kwargs)

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        details = "; ".join(str(e) for e in self.errors)
        return f"{self.message}: {details}"


class OutputConflictError(ConversionError):
    """Raised when two archives in a batch would write the same document."""

    def __init__(self, message: str, output_name: str, *args, **kwargs):
        self.output_name = output_name
        super().__init__(message, *args, **kwargs)
