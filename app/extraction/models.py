from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.extraction import schema
from app.extraction.schema import LeafPath


@dataclass(frozen=True)
class Metric:
    """A single leaf metric: a value (or null) and its fixed unit."""

    value: float | None = None
    unit: str = ""


def _metric(path: LeafPath) -> Any:
    return field(default_factory=lambda: Metric(unit=schema.LEAF_UNITS[path]))


@dataclass(frozen=True)
class EnvironmentalMetrics:
    carbon_emissions: Metric = _metric(schema.CARBON_EMISSIONS)
    water_consumption: Metric = _metric(schema.WATER_CONSUMPTION)
    energy_usage: Metric = _metric(schema.ENERGY_USAGE)
    waste_generated: Metric = _metric(schema.WASTE_GENERATED)


@dataclass(frozen=True)
class DiversityMetrics:
    female_representation: Metric = _metric(schema.FEMALE_REPRESENTATION)
    minority_representation: Metric = _metric(schema.MINORITY_REPRESENTATION)


@dataclass(frozen=True)
class SocialMetrics:
    employee_turnover_rate: Metric = _metric(schema.EMPLOYEE_TURNOVER_RATE)
    workplace_accidents: Metric = _metric(schema.WORKPLACE_ACCIDENTS)
    diversity_and_inclusion: DiversityMetrics = field(default_factory=DiversityMetrics)


@dataclass(frozen=True)
class GovernanceMetrics:
    board_independence: Metric = _metric(schema.BOARD_INDEPENDENCE)
    executive_compensation_ratio: Metric = _metric(schema.EXECUTIVE_COMPENSATION_RATIO)


@dataclass(frozen=True)
class ESGExtractionResult:
    """Canonical structured output of every extraction strategy.

    The full key shape is always present; a metric that was not found has
    ``value=None``.
    """

    environmental: EnvironmentalMetrics = field(default_factory=EnvironmentalMetrics)
    social: SocialMetrics = field(default_factory=SocialMetrics)
    governance: GovernanceMetrics = field(default_factory=GovernanceMetrics)

    @classmethod
    def from_values(cls, values: dict[LeafPath, float | None]) -> "ESGExtractionResult":
        """Build a result from leaf values; paths not given stay null."""
        unknown = set(values) - set(schema.LEAF_PATHS)
        if unknown:
            raise KeyError(f"Unknown metric paths: {sorted(map(schema.dotted, unknown))}")

        def metric(path: LeafPath) -> Metric:
            return Metric(value=values.get(path), unit=schema.LEAF_UNITS[path])

        return cls(
            environmental=EnvironmentalMetrics(
                carbon_emissions=metric(schema.CARBON_EMISSIONS),
                water_consumption=metric(schema.WATER_CONSUMPTION),
                energy_usage=metric(schema.ENERGY_USAGE),
                waste_generated=metric(schema.WASTE_GENERATED),
            ),
            social=SocialMetrics(
                employee_turnover_rate=metric(schema.EMPLOYEE_TURNOVER_RATE),
                workplace_accidents=metric(schema.WORKPLACE_ACCIDENTS),
                diversity_and_inclusion=DiversityMetrics(
                    female_representation=metric(schema.FEMALE_REPRESENTATION),
                    minority_representation=metric(schema.MINORITY_REPRESENTATION),
                ),
            ),
            governance=GovernanceMetrics(
                board_independence=metric(schema.BOARD_INDEPENDENCE),
                executive_compensation_ratio=metric(schema.EXECUTIVE_COMPENSATION_RATIO),
            ),
        )

    def metric(self, path: LeafPath) -> Metric:
        node: Any = self
        for key in path:
            node = getattr(node, key)
        return node

    def value(self, path: LeafPath) -> float | None:
        return self.metric(path).value

    def values(self) -> dict[LeafPath, float | None]:
        return {path: self.value(path) for path in schema.LEAF_PATHS}

    def found_count(self) -> int:
        return sum(1 for value in self.values().values() if value is not None)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the nested JSON shape shared with the AI prompt."""
        root: dict[str, Any] = {}
        for path in schema.LEAF_PATHS:
            node = root
            for key in path[:-1]:
                node = node.setdefault(key, {})
            metric = self.metric(path)
            node[path[-1]] = {"value": metric.value, "unit": metric.unit}
        return root


@dataclass(frozen=True)
class ParsedOK:
    """Model reply parsed and coerced into the full schema."""

    result: ESGExtractionResult


@dataclass(frozen=True)
class ParseFailed:
    """Model reply could not be trusted; ``reason`` says why."""

    reason: str


ParseOutcome = ParsedOK | ParseFailed


class ExtractionStrategy(str, Enum):
    AI = "ai"
    HEURISTIC = "heuristic"
