import pytest

from app.extraction import schema
from app.extraction.models import ESGExtractionResult
from app.processor.field_mapper import FieldMapper, female_headcount


def _result(**values: float | None) -> ESGExtractionResult:
    paths = {
        "energy": schema.ENERGY_USAGE,
        "carbon": schema.CARBON_EMISSIONS,
        "board": schema.BOARD_INDEPENDENCE,
        "female": schema.FEMALE_REPRESENTATION,
        "water": schema.WATER_CONSUMPTION,
    }
    return ESGExtractionResult.from_values({paths[k]: v for k, v in values.items()})


class TestFieldMapper:
    def test_maps_direct_fields(self) -> None:
        record = FieldMapper().map(
            _result(energy=1500.0, carbon=125.3, board=60.0),
            user_id="u-1",
            year=2024,
        )
        assert record.user_id == "u-1"
        assert record.year == 2024
        assert record.total_electricity_consumption == 1500.0
        assert record.carbon_emissions == 125.3
        assert record.independent_board_members_percent == 60.0

    def test_unmapped_metrics_do_not_leak(self) -> None:
        record = FieldMapper().map(_result(water=45670.0), user_id="u-1", year=2024)
        storage = record.to_storage_dict()
        assert storage["userId"] == "u-1"
        assert all(v is None for k, v in storage.items() if k not in ("userId", "year"))

    def test_female_headcount_from_prior_total(self) -> None:
        record = FieldMapper().map(
            _result(female=45.0), user_id="u-1", year=2024, prior_total_employees=200
        )
        assert record.female_employees == 90
        # Total employees is never written by extraction.
        assert record.total_employees is None

    def test_female_headcount_without_prior_total(self) -> None:
        record = FieldMapper().map(_result(female=45.0), user_id="u-1", year=2024)
        assert record.female_employees is None


class TestFemaleHeadcount:
    @pytest.mark.parametrize(
        ("percent", "total", "expected"),
        [
            (45.0, 200, 90),
            (50.0, 3, 2),
            (33.3, 10, 3),
            (0.0, 120, 0),
            (100.0, 7, 7),
        ],
    )
    def test_rounds_half_up(self, percent: float, total: int, expected: int) -> None:
        assert female_headcount(percent, total) == expected

    def test_unknown_percent(self) -> None:
        assert female_headcount(None, 200) is None

    def test_unknown_total(self) -> None:
        assert female_headcount(45.0, None) is None
