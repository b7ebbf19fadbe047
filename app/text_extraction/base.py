from abc import ABC, abstractmethod
from typing import ClassVar

from app.text_extraction.exceptions import (
    CorruptInputError,
    InvalidFormatError,
    NoTextContentError,
    TextExtractionError,
)
from app.text_extraction.models import ExtractedText, SourceFormat


class BaseTextExtractor(ABC):
    """Contract for all format-specific text extraction adapters."""

    SOURCE_FORMAT: ClassVar[SourceFormat]

    @abstractmethod
    def extract(self, content: bytes) -> ExtractedText:
        """Extract plain text from a raw file buffer.

        Args:
            content: Raw file content as uploaded.

        Returns:
            ExtractedText with a non-empty, stripped text blob.

        Raises:
            TextExtractionError: if the buffer cannot be turned into text.
        """


class BasePdfExtractor(BaseTextExtractor):
    """Shared PDF handling: signature check, page cap and empty-text check.

    Adapters only implement ``_read_pages`` for their backing library.
    """

    SOURCE_FORMAT = SourceFormat.PDF
    PDF_MAGIC = b"%PDF-"
    ENGINE_NAME: ClassVar[str] = "pdf"

    def __init__(self, max_pages: int = 2) -> None:
        if max_pages < 1:
            raise ValueError("max_pages must be at least 1")
        self._max_pages = max_pages

    def extract(self, content: bytes) -> ExtractedText:
        if not content or not content.startswith(self.PDF_MAGIC):
            raise InvalidFormatError("File is not a PDF: missing %PDF- header")
        try:
            pages = self._read_pages(content)
        except TextExtractionError:
            raise
        except Exception as exc:
            raise CorruptInputError(
                f"{self.ENGINE_NAME} extraction failed: {exc}"
            ) from exc
        text = "\n".join(pages).strip()
        if not text:
            raise NoTextContentError(
                "PDF has no extractable text layer; it may be a scanned image"
            )
        return ExtractedText(text=text, source_format=self.SOURCE_FORMAT)

    @abstractmethod
    def _read_pages(self, content: bytes) -> list[str]:
        """Return the text of the first ``max_pages`` pages, in order."""
