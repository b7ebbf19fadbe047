import io

import pdfplumber

from app.text_extraction.base import BasePdfExtractor


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from the first pages of a PDF using pdfplumber."""

    ENGINE_NAME = "pdfplumber"

    def _read_pages(self, content: bytes) -> list[str]:
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            return [page.extract_text() or "" for page in pdf.pages[: self._max_pages]]
