"""Fixed key shape of the ESG extraction result.

Each leaf metric is addressed by its path from the root object.
"""

from typing import Final

LeafPath = tuple[str, ...]

CARBON_EMISSIONS: Final[LeafPath] = ("environmental", "carbon_emissions")
WATER_CONSUMPTION: Final[LeafPath] = ("environmental", "water_consumption")
ENERGY_USAGE: Final[LeafPath] = ("environmental", "energy_usage")
WASTE_GENERATED: Final[LeafPath] = ("environmental", "waste_generated")
EMPLOYEE_TURNOVER_RATE: Final[LeafPath] = ("social", "employee_turnover_rate")
WORKPLACE_ACCIDENTS: Final[LeafPath] = ("social", "workplace_accidents")
FEMALE_REPRESENTATION: Final[LeafPath] = (
    "social",
    "diversity_and_inclusion",
    "female_representation",
)
MINORITY_REPRESENTATION: Final[LeafPath] = (
    "social",
    "diversity_and_inclusion",
    "minority_representation",
)
BOARD_INDEPENDENCE: Final[LeafPath] = ("governance", "board_independence")
EXECUTIVE_COMPENSATION_RATIO: Final[LeafPath] = (
    "governance",
    "executive_compensation_ratio",
)

LEAF_UNITS: Final[dict[LeafPath, str]] = {
    CARBON_EMISSIONS: "tonnes CO2e",
    WATER_CONSUMPTION: "cubic meters",
    ENERGY_USAGE: "kWh",
    WASTE_GENERATED: "tonnes",
    EMPLOYEE_TURNOVER_RATE: "%",
    WORKPLACE_ACCIDENTS: "count",
    FEMALE_REPRESENTATION: "%",
    MINORITY_REPRESENTATION: "%",
    BOARD_INDEPENDENCE: "%",
    EXECUTIVE_COMPENSATION_RATIO: "ratio",
}

LEAF_PATHS: Final[tuple[LeafPath, ...]] = tuple(LEAF_UNITS)


def dotted(path: LeafPath) -> str:
    return ".".join(path)
