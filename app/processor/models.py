from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from app.extraction.models import ESGExtractionResult, ExtractionStrategy


@dataclass(frozen=True)
class UploadedDocument:
    """Transient upload: the raw buffer plus what the client declared about it."""

    content: bytes = field(repr=False)
    mime_type: str
    filename: str = ""

    @property
    def size_bytes(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class MappedESGRecord:
    """Extraction values translated into the flat yearly response record.

    Fields the extraction cannot produce stay None for manual entry.
    """

    user_id: str
    year: int
    total_electricity_consumption: float | None = None
    renewable_electricity_consumption: float | None = None
    total_fuel_consumption: float | None = None
    carbon_emissions: float | None = None
    total_employees: int | None = None
    female_employees: int | None = None
    avg_training_hours: float | None = None
    community_investment_spend: float | None = None
    independent_board_members_percent: float | None = None
    has_data_privacy_policy: bool | None = None
    total_revenue: float | None = None

    STORAGE_FIELD_NAMES: ClassVar[dict[str, str]] = {
        "user_id": "userId",
        "year": "year",
        "total_electricity_consumption": "totalElectricityConsumption",
        "renewable_electricity_consumption": "renewableElectricityConsumption",
        "total_fuel_consumption": "totalFuelConsumption",
        "carbon_emissions": "carbonEmissions",
        "total_employees": "totalEmployees",
        "female_employees": "femaleEmployees",
        "avg_training_hours": "avgTrainingHours",
        "community_investment_spend": "communityInvestmentSpend",
        "independent_board_members_percent": "independentBoardMembersPercent",
        "has_data_privacy_policy": "hasDataPrivacyPolicy",
        "total_revenue": "totalRevenue",
    }

    def to_storage_dict(self) -> dict[str, Any]:
        """Flat dict using the response record's field names."""
        return {
            storage_name: getattr(self, attr)
            for attr, storage_name in self.STORAGE_FIELD_NAMES.items()
        }


class ExtractionStatus(str, Enum):
    SUCCESS = "success"
    FALLBACK_USED = "fallback_used"
    FAILED = "failed"


class Suggestion(str, Enum):
    TRY_DIFFERENT_DOCUMENT = "try_different_document"
    MANUAL_ENTRY = "manual_entry"


@dataclass(frozen=True)
class ExtractionFailure:
    """Caller-facing error payload."""

    code: str
    message: str
    suggestion: Suggestion
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion.value,
            "details": self.details,
        }


@dataclass(frozen=True)
class ExtractionOutcome:
    """Terminal result of one upload."""

    status: ExtractionStatus
    record: MappedESGRecord | None = None
    extraction: ESGExtractionResult | None = None
    strategy: ExtractionStrategy | None = None
    failure: ExtractionFailure | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is not ExtractionStatus.FAILED
