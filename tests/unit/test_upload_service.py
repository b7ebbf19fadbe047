from unittest.mock import MagicMock

from app.database.models import EsgResponseRecord
from app.processor.models import (
    ExtractionFailure,
    ExtractionOutcome,
    ExtractionStatus,
    MappedESGRecord,
    Suggestion,
)
from app.service.upload_service import UploadService


def _service(
    outcome: ExtractionOutcome, prior: EsgResponseRecord | None = None
) -> tuple[UploadService, MagicMock, MagicMock]:
    processor = MagicMock()
    processor.process.return_value = outcome
    repo = MagicMock()
    repo.find_by_user_and_year.return_value = prior
    repo.upsert_extracted.return_value = 11
    return UploadService(processor, repo), processor, repo


def _upload(service: UploadService) -> ExtractionOutcome:
    return service.handle_upload(
        user_id="user-1",
        year=2024,
        content=b"%PDF-1.4",
        mime_type="application/pdf",
        filename="report.pdf",
    )


class TestHandleUpload:
    def test_stores_successful_record(self) -> None:
        record = MappedESGRecord(user_id="user-1", year=2024, carbon_emissions=1.0)
        outcome = ExtractionOutcome(status=ExtractionStatus.SUCCESS, record=record)
        service, _processor, repo = _service(outcome)

        assert _upload(service) is outcome
        repo.upsert_extracted.assert_called_once_with(record)

    def test_stores_fallback_record(self) -> None:
        record = MappedESGRecord(user_id="user-1", year=2024)
        outcome = ExtractionOutcome(status=ExtractionStatus.FALLBACK_USED, record=record)
        service, _processor, repo = _service(outcome)

        _upload(service)
        repo.upsert_extracted.assert_called_once_with(record)

    def test_failed_outcome_is_not_stored(self) -> None:
        failure = ExtractionFailure(
            code="EmptyUpload", message="empty", suggestion=Suggestion.TRY_DIFFERENT_DOCUMENT
        )
        outcome = ExtractionOutcome(status=ExtractionStatus.FAILED, failure=failure)
        service, _processor, repo = _service(outcome)

        _upload(service)
        repo.upsert_extracted.assert_not_called()

    def test_passes_prior_total_employees(self) -> None:
        prior = EsgResponseRecord(id=3, user_id="user-1", year=2024, total_employees=200)
        outcome = ExtractionOutcome(status=ExtractionStatus.FAILED)
        service, processor, repo = _service(outcome, prior=prior)

        _upload(service)

        repo.find_by_user_and_year.assert_called_once_with("user-1", 2024)
        kwargs = processor.process.call_args.kwargs
        assert kwargs["prior_total_employees"] == 200
        document = processor.process.call_args.args[0]
        assert document.mime_type == "application/pdf"
        assert document.filename == "report.pdf"

    def test_no_prior_record(self) -> None:
        service, processor, _repo = _service(ExtractionOutcome(status=ExtractionStatus.FAILED))
        _upload(service)
        assert processor.process.call_args.kwargs["prior_total_employees"] is None
