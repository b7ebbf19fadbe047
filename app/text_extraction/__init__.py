from app.text_extraction.base import BasePdfExtractor, BaseTextExtractor
from app.text_extraction.factory import TextExtractorFactory
from app.text_extraction.models import ExtractedText, SourceFormat

__all__ = [
    "BasePdfExtractor",
    "BaseTextExtractor",
    "ExtractedText",
    "SourceFormat",
    "TextExtractorFactory",
]
