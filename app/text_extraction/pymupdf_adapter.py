import pymupdf

from app.text_extraction.base import BasePdfExtractor


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from the first pages of a PDF using PyMuPDF."""

    ENGINE_NAME = "pymupdf"

    def _read_pages(self, content: bytes) -> list[str]:
        with pymupdf.open(stream=content, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            page_count = min(self._max_pages, doc.page_count)
            return [doc[index].get_text() for index in range(page_count)]
