from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from app.extraction.models import ESGExtractionResult, ExtractionStrategy
from app.processor.models import MappedESGRecord, UploadedDocument
from app.text_extraction.models import ExtractedText


class PipelineState(str, Enum):
    RECEIVED = "received"
    TEXT_EXTRACTED = "text_extracted"
    AI_ATTEMPTED = "ai_attempted"
    SUCCESS = "success"
    FALLBACK_USED = "fallback_used"
    FAILED = "failed"


@dataclass(slots=True)
class PipelineContext:
    document: UploadedDocument
    user_id: str
    year: int
    prior_total_employees: int | None = None
    state: PipelineState = PipelineState.RECEIVED
    extracted_text: ExtractedText | None = None
    extraction: ESGExtractionResult | None = None
    strategy: ExtractionStrategy | None = None
    record: MappedESGRecord | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
