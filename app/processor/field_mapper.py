import math

from app.extraction import schema
from app.extraction.models import ESGExtractionResult
from app.processor.models import MappedESGRecord


class FieldMapper:
    """Translates the nested extraction result into the flat response record.

    Only energy usage, carbon emissions and board independence map directly.
    Female headcount is derived when the prior record already knows the
    total number of employees.
    """

    def map(
        self,
        result: ESGExtractionResult,
        *,
        user_id: str,
        year: int,
        prior_total_employees: int | None = None,
    ) -> MappedESGRecord:
        return MappedESGRecord(
            user_id=user_id,
            year=year,
            total_electricity_consumption=result.value(schema.ENERGY_USAGE),
            carbon_emissions=result.value(schema.CARBON_EMISSIONS),
            independent_board_members_percent=result.value(schema.BOARD_INDEPENDENCE),
            female_employees=female_headcount(
                result.value(schema.FEMALE_REPRESENTATION),
                prior_total_employees,
            ),
        )


def female_headcount(percent: float | None, total_employees: int | None) -> int | None:
    """Half-up rounding of percent/100 * total_employees, or None if either is unknown."""
    if percent is None or total_employees is None:
        return None
    return math.floor(percent / 100 * total_employees + 0.5)
