class TextExtractionError(Exception):
    """Base exception for turning an uploaded file into plain text."""


class InvalidFormatError(TextExtractionError):
    """Raised when the buffer does not carry the expected file signature."""


class CorruptInputError(TextExtractionError):
    """Raised when the underlying decoder reports a malformed stream."""


class NoTextContentError(TextExtractionError):
    """Raised when extraction yields no usable text (e.g. scanned PDFs)."""


class NoSheetsError(TextExtractionError):
    """Raised when a workbook contains no sheets."""
