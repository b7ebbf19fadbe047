from collections.abc import Mapping

from app.extraction.base import BaseESGExtractor
from app.extraction.exceptions import AIRetriesExhaustedError
from app.extraction.health_check import HealthCheck
from app.logging.logger import Log
from app.processor.exceptions import (
    EmptyUploadError,
    FallbackUnavailableError,
    UnsupportedTypeError,
    UploadTooLargeError,
)
from app.processor.field_mapper import FieldMapper
from app.processor.pipeline import PipelineContext, PipelineState, PipelineStep
from app.text_extraction.base import BaseTextExtractor


def normalize_mime_type(mime_type: str) -> str:
    """Lowercase and drop parameters such as ``; charset=binary``."""
    return mime_type.split(";", 1)[0].strip().lower()


class ValidateUploadStep(PipelineStep):
    def __init__(self, accepted_mime_types: frozenset[str], max_upload_bytes: int) -> None:
        self._accepted_mime_types = accepted_mime_types
        self._max_upload_bytes = max_upload_bytes

    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.document
        mime_type = normalize_mime_type(document.mime_type)
        if mime_type not in self._accepted_mime_types:
            raise UnsupportedTypeError(document.mime_type, self._accepted_mime_types)
        if document.size_bytes == 0:
            raise EmptyUploadError("Uploaded file is empty")
        if document.size_bytes > self._max_upload_bytes:
            raise UploadTooLargeError(document.size_bytes, self._max_upload_bytes)
        Log.info(f"Received {document.size_bytes} bytes ({mime_type})")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, extractors: Mapping[str, BaseTextExtractor]) -> None:
        self._extractors = extractors

    def run(self, context: PipelineContext) -> PipelineContext:
        mime_type = normalize_mime_type(context.document.mime_type)
        extractor = self._extractors.get(mime_type)
        if extractor is None:
            raise UnsupportedTypeError(context.document.mime_type, self._extractors)
        context.extracted_text = extractor.extract(context.document.content)
        context.state = PipelineState.TEXT_EXTRACTED
        Log.info(
            f"Extracted {len(context.extracted_text.text)} chars of "
            f"{context.extracted_text.source_format.value} text"
        )
        return context


class ExtractMetricsStep(PipelineStep):
    """Runs the primary strategy and degrades to the fallback when it is exhausted.

    A failed health check skips the primary strategy entirely.
    """

    def __init__(
        self,
        primary: BaseESGExtractor,
        fallback: BaseESGExtractor | None = None,
        health_check: HealthCheck | None = None,
    ) -> None:
        self._primary = primary
        self._fallback = fallback
        self._health_check = health_check

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extracted_text is None:
            raise ValueError("PipelineContext.extracted_text must be set before extraction")
        text = context.extracted_text.text

        if self._health_check is not None and not self._health_check.is_available():
            Log.warning("AI service reported down; skipping to fallback extraction")
            return self._run_fallback(context, text, reason="health check failed")

        context.state = PipelineState.AI_ATTEMPTED
        try:
            context.extraction = self._primary.extract(text)
        except AIRetriesExhaustedError as exc:
            return self._run_fallback(context, text, reason=str(exc))
        context.strategy = self._primary.strategy
        context.state = PipelineState.SUCCESS
        return context

    def _run_fallback(self, context: PipelineContext, text: str, reason: str) -> PipelineContext:
        if self._fallback is None:
            raise FallbackUnavailableError(f"AI extraction unavailable ({reason})")
        context.extraction = self._fallback.extract(text)
        context.strategy = self._fallback.strategy
        context.state = PipelineState.FALLBACK_USED
        Log.warning(
            f"Fallback {self._fallback.strategy.value} extraction used ({reason}): "
            f"{context.extraction.found_count()} metrics found"
        )
        return context


class MapFieldsStep(PipelineStep):
    def __init__(self, field_mapper: FieldMapper) -> None:
        self._field_mapper = field_mapper

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before field mapping")
        context.record = self._field_mapper.map(
            context.extraction,
            user_id=context.user_id,
            year=context.year,
            prior_total_employees=context.prior_total_employees,
        )
        return context
