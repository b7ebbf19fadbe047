import argparse
import json
import mimetypes
import sys
from pathlib import Path
from typing import Any

from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.esg_responses_repository import EsgResponsesRepository
from app.logging.logger import Log
from app.processor.models import ExtractionOutcome, UploadedDocument
from app.processor.processor import build_processor
from app.service.upload_service import UploadService


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Extract ESG metrics from a PDF or spreadsheet report."
    )
    parser.add_argument("file", type=Path, help="PDF, .xlsx or .xls report")
    parser.add_argument("--user-id", required=True, help="Owner of the yearly record")
    parser.add_argument("--year", type=int, required=True, help="Fiscal year")
    parser.add_argument(
        "--mime-type",
        help="Declared MIME type (guessed from the file name when omitted)",
    )
    parser.add_argument(
        "--no-store",
        action="store_true",
        help="Print the mapped record without writing it to the database",
    )
    return parser.parse_args(argv)


def outcome_to_dict(outcome: ExtractionOutcome) -> dict[str, Any]:
    return {
        "status": outcome.status.value,
        "strategy": outcome.strategy.value if outcome.strategy else None,
        "record": outcome.record.to_storage_dict() if outcome.record else None,
        "extraction": outcome.extraction.to_dict() if outcome.extraction else None,
        "error": outcome.failure.to_dict() if outcome.failure else None,
    }


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> logging -> processor -> (pool) -> one upload."""
    args = parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    mime_type = args.mime_type or mimetypes.guess_type(args.file.name)[0] or ""
    content = args.file.read_bytes()
    processor = build_processor(settings)

    if args.no_store:
        outcome = processor.process(
            UploadedDocument(content=content, mime_type=mime_type, filename=args.file.name),
            user_id=args.user_id,
            year=args.year,
        )
    else:
        init_pool(settings)
        try:
            service = UploadService(processor, EsgResponsesRepository())
            outcome = service.handle_upload(
                user_id=args.user_id,
                year=args.year,
                content=content,
                mime_type=mime_type,
                filename=args.file.name,
            )
        finally:
            close_pool()

    json.dump(outcome_to_dict(outcome), sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0 if outcome.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
