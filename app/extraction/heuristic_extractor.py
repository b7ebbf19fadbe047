"""Regex-based ESG extractor used when the AI path is unavailable.

Each metric is found as ``<keyword> ... <number> <unit>``; the first match in
the text wins. Minority representation and executive compensation ratio
cannot be found this way and are always null.
"""

import re
from dataclasses import dataclass, field

from app.extraction import schema
from app.extraction.base import BaseESGExtractor
from app.extraction.models import ESGExtractionResult, ExtractionStrategy
from app.extraction.schema import LeafPath

_NUMBER = r"(?<![\d.,])(?P<number>\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"
# Up to 80 characters between keyword and number; the lazy gap lets the
# first number followed by the right unit win, so years and counts are skipped.
_GAP = r"[\s\S]{0,80}?"
_NOT_A_YEAR = r"(?!(?:19|20)\d{2}(?!\d))"
_END = r"(?![a-z0-9])"
_PERCENT = r"\s*(?P<unit>%|percent\b|per\s+cent\b)"


@dataclass(frozen=True)
class _MetricPattern:
    path: LeafPath
    regex: re.Pattern[str]
    multipliers: dict[str, float] = field(default_factory=dict)

    def find(self, text: str) -> float | None:
        match = self.regex.search(text)
        if match is None:
            return None
        number = float(match.group("number").replace(",", ""))
        unit = (match.groupdict().get("unit") or "").lower()
        return number * self.multipliers.get(unit, 1.0)


def _pattern(keyword: str, unit: str, *, skip_years: bool = False) -> re.Pattern[str]:
    number = _NOT_A_YEAR + _NUMBER if skip_years else _NUMBER
    return re.compile(keyword + _GAP + number + unit, re.IGNORECASE)


_PATTERNS: tuple[_MetricPattern, ...] = (
    _MetricPattern(
        schema.CARBON_EMISSIONS,
        _pattern(
            r"\b(?:carbon|ghg|greenhouse\s+gas)",
            r"\s*(?P<unit>(?:metric\s+)?(?:tonnes|tons|tco2e?|t))" + _END,
        ),
    ),
    _MetricPattern(
        schema.WATER_CONSUMPTION,
        _pattern(
            r"\bwater",
            r"\s*(?P<unit>cubic\s+met(?:er|re)s?|m3|m³|megalit(?:er|re)s?)" + _END,
        ),
        multipliers=dict.fromkeys(
            ("megaliter", "megaliters", "megalitre", "megalitres"), 1_000.0
        ),
    ),
    _MetricPattern(
        schema.ENERGY_USAGE,
        _pattern(r"\b(?:energy|electricity)", r"\s*(?P<unit>kwh|mwh|gwh)" + _END),
        multipliers={"mwh": 1_000.0, "gwh": 1_000_000.0},
    ),
    _MetricPattern(
        schema.WASTE_GENERATED,
        _pattern(
            r"\bwaste",
            r"\s*(?P<unit>(?:metric\s+)?(?:tonnes|tons|t))" + _END,
        ),
    ),
    _MetricPattern(
        schema.EMPLOYEE_TURNOVER_RATE,
        _pattern(r"\b(?:turnover|attrition)", _PERCENT),
    ),
    _MetricPattern(
        schema.WORKPLACE_ACCIDENTS,
        _pattern(
            r"\b(?:accidents?|injuries|incidents)",
            r"(?!\d|[.,]\d|\s*%|\s*per\s*cent|\s*percent)",
            skip_years=True,
        ),
    ),
    _MetricPattern(
        schema.FEMALE_REPRESENTATION,
        _pattern(r"\b(?:female|women)", _PERCENT),
    ),
    _MetricPattern(
        schema.BOARD_INDEPENDENCE,
        _pattern(
            r"\b(?:board\s+independence|independent\s+(?:board\s+members|directors))",
            _PERCENT,
        ),
    ),
)


class HeuristicExtractor(BaseESGExtractor):
    """Deterministic pattern matcher. Never raises for missing values."""

    strategy = ExtractionStrategy.HEURISTIC

    def extract(self, text: str) -> ESGExtractionResult:
        return ESGExtractionResult.from_values(
            {pattern.path: pattern.find(text) for pattern in _PATTERNS}
        )
