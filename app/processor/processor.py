from collections.abc import Sequence

from app.config.settings import Settings
from app.extraction.exceptions import AIServiceError, ExtractionError
from app.extraction.factory import ExtractorFactory
from app.logging.logger import Log
from app.processor.exceptions import (
    EmptyUploadError,
    FallbackUnavailableError,
    ProcessorError,
    UnsupportedTypeError,
    UploadTooLargeError,
)
from app.processor.field_mapper import FieldMapper
from app.processor.models import (
    ExtractionFailure,
    ExtractionOutcome,
    ExtractionStatus,
    Suggestion,
    UploadedDocument,
)
from app.processor.pipeline import PipelineContext, PipelineState, PipelineStep
from app.processor.steps import (
    ExtractMetricsStep,
    ExtractTextStep,
    MapFieldsStep,
    ValidateUploadStep,
)
from app.text_extraction.exceptions import (
    CorruptInputError,
    InvalidFormatError,
    NoSheetsError,
    NoTextContentError,
    TextExtractionError,
)
from app.text_extraction.factory import TextExtractorFactory

# Checked in order; the first matching class decides the failure payload.
_FAILURE_CODES: tuple[tuple[type[Exception], str, Suggestion], ...] = (
    (UnsupportedTypeError, "UnsupportedType", Suggestion.TRY_DIFFERENT_DOCUMENT),
    (EmptyUploadError, "EmptyUpload", Suggestion.TRY_DIFFERENT_DOCUMENT),
    (UploadTooLargeError, "UploadTooLarge", Suggestion.TRY_DIFFERENT_DOCUMENT),
    (InvalidFormatError, "InvalidFormat", Suggestion.TRY_DIFFERENT_DOCUMENT),
    (CorruptInputError, "CorruptInput", Suggestion.TRY_DIFFERENT_DOCUMENT),
    (NoSheetsError, "NoSheets", Suggestion.TRY_DIFFERENT_DOCUMENT),
    (NoTextContentError, "NoTextContent", Suggestion.TRY_DIFFERENT_DOCUMENT),
    (AIServiceError, "AIServiceError", Suggestion.MANUAL_ENTRY),
    (FallbackUnavailableError, "ExtractionFailed", Suggestion.MANUAL_ENTRY),
    (ExtractionError, "ExtractionFailed", Suggestion.MANUAL_ENTRY),
)

_HANDLED_ERRORS = (ProcessorError, TextExtractionError, ExtractionError)


class Processor:
    """Orchestrates one upload: validate -> extract text -> extract metrics -> map.

    Known failure kinds become an ``ExtractionFailure`` payload; anything
    else propagates.
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = list(steps)

    def process(
        self,
        document: UploadedDocument,
        *,
        user_id: str,
        year: int,
        prior_total_employees: int | None = None,
    ) -> ExtractionOutcome:
        context = PipelineContext(
            document=document,
            user_id=user_id,
            year=year,
            prior_total_employees=prior_total_employees,
        )
        with Log.upload_context(user_id, year):
            try:
                for step in self._steps:
                    context = step.run(context)
            except _HANDLED_ERRORS as exc:
                context.state = PipelineState.FAILED
                failure = build_failure(exc)
                Log.error(f"Extraction failed: {failure.code}: {failure.message}")
                return ExtractionOutcome(status=ExtractionStatus.FAILED, failure=failure)

            status = (
                ExtractionStatus.FALLBACK_USED
                if context.state is PipelineState.FALLBACK_USED
                else ExtractionStatus.SUCCESS
            )
            Log.info(f"Extraction finished: {status.value}")
        return ExtractionOutcome(
            status=status,
            record=context.record,
            extraction=context.extraction,
            strategy=context.strategy,
        )


def build_failure(exc: Exception) -> ExtractionFailure:
    code, suggestion = "ExtractionFailed", Suggestion.MANUAL_ENTRY
    for exc_type, exc_code, exc_suggestion in _FAILURE_CODES:
        if isinstance(exc, exc_type):
            code, suggestion = exc_code, exc_suggestion
            break
    details: dict[str, object] = {}
    if isinstance(exc, UnsupportedTypeError):
        details["accepted_types"] = exc.accepted_types
    elif isinstance(exc, UploadTooLargeError):
        details["max_bytes"] = exc.max_bytes
    return ExtractionFailure(code=code, message=str(exc), suggestion=suggestion, details=details)


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required adapters."""
    text_extractors = TextExtractorFactory.create(settings)
    client = ExtractorFactory.create_client(settings)
    steps: list[PipelineStep] = [
        ValidateUploadStep(
            accepted_mime_types=frozenset(text_extractors),
            max_upload_bytes=settings.max_upload_bytes,
        ),
        ExtractTextStep(extractors=text_extractors),
        ExtractMetricsStep(
            primary=ExtractorFactory.create_ai_extractor(settings, client),
            fallback=ExtractorFactory.create_fallback(settings),
            health_check=ExtractorFactory.create_health_check(settings, client),
        ),
        MapFieldsStep(field_mapper=FieldMapper()),
    ]
    return Processor(steps=steps)
