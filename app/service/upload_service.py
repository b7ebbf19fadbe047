from app.database.repositories.esg_responses_repository import EsgResponsesRepository
from app.logging.logger import Log
from app.processor.models import ExtractionOutcome, UploadedDocument
from app.processor.processor import Processor


class UploadService:
    """Upload boundary: prior record -> processor -> persist the mapped record."""

    def __init__(self, processor: Processor, responses_repo: EsgResponsesRepository) -> None:
        self._processor = processor
        self._responses_repo = responses_repo

    def handle_upload(
        self,
        *,
        user_id: str,
        year: int,
        content: bytes,
        mime_type: str,
        filename: str = "",
    ) -> ExtractionOutcome:
        """Extract metrics from one upload and store them for (user_id, year).

        Nothing is stored when the outcome is ``failed``.
        """
        prior = self._responses_repo.find_by_user_and_year(user_id, year)
        outcome = self._processor.process(
            UploadedDocument(content=content, mime_type=mime_type, filename=filename),
            user_id=user_id,
            year=year,
            prior_total_employees=prior.total_employees if prior is not None else None,
        )
        if outcome.record is not None:
            record_id = self._responses_repo.upsert_extracted(outcome.record)
            Log.info(
                f"Stored {outcome.status.value} extraction for user {user_id}, "
                f"year {year} as response {record_id}"
            )
        return outcome
