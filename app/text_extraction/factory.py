from typing import ClassVar

from app.config.settings import Settings
from app.text_extraction.base import BasePdfExtractor, BaseTextExtractor
from app.text_extraction.pdfplumber_adapter import PdfPlumberAdapter
from app.text_extraction.pymupdf_adapter import PyMuPdfAdapter
from app.text_extraction.spreadsheet_adapter import SpreadsheetAdapter

PDF_MIME_TYPE = "application/pdf"
XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
XLS_MIME_TYPE = "application/vnd.ms-excel"


class TextExtractorFactory:
    """Creates the text extractors keyed by the MIME types they accept."""

    PDF_ADAPTERS: ClassVar[dict[str, type[BasePdfExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create_pdf_extractor(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return adapter_cls(max_pages=settings.pdf_max_pages)

    @classmethod
    def create(cls, settings: Settings) -> dict[str, BaseTextExtractor]:
        """Return a MIME type -> extractor mapping for every accepted upload type."""
        spreadsheet = SpreadsheetAdapter()
        return {
            PDF_MIME_TYPE: cls.create_pdf_extractor(settings),
            XLSX_MIME_TYPE: spreadsheet,
            XLS_MIME_TYPE: spreadsheet,
        }
