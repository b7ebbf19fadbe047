"""Single trust boundary between raw model text and ESGExtractionResult."""

import json
import math
import re
from typing import Any

from app.extraction import schema
from app.extraction.exceptions import ExtractionValidationError
from app.extraction.models import ESGExtractionResult, ParsedOK, ParseFailed, ParseOutcome
from app.extraction.schema import LeafPath

_NUMERIC_STRING = re.compile(r"^[+-]?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d+)?$")


def parse_response(raw: str) -> ParseOutcome:
    """Parse a model reply into the fixed schema, never raising."""
    try:
        data = extract_json_object(raw)
        return ParsedOK(validate_and_build(data))
    except ExtractionValidationError as exc:
        return ParseFailed(str(exc))


def extract_json_object(raw: str) -> dict[str, Any]:
    """Strip code fences and surrounding commentary, then parse the object.

    Raises:
        ExtractionValidationError: if no JSON object can be decoded.
    """
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end < start:
        raise ExtractionValidationError("Response contains no JSON object")

    try:
        parsed = json.loads(cleaned[start : end + 1])
    except ValueError as exc:
        # JSONDecodeError, or an integer literal past the int digit limit.
        raise ExtractionValidationError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ExtractionValidationError("JSON response must be an object")
    return parsed


def validate_and_build(data: dict[str, Any]) -> ESGExtractionResult:
    """Assert the full key shape and coerce every leaf value to float or None.

    Units in the payload are ignored; the result always carries the
    canonical unit for each metric.

    Raises:
        ExtractionValidationError: on a missing key or a non-numeric value.
    """
    values: dict[LeafPath, float | None] = {}
    for path in schema.LEAF_PATHS:
        leaf = _lookup(data, path)
        if "value" not in leaf:
            raise ExtractionValidationError(
                f"Missing 'value' in metric: {schema.dotted(path)}"
            )
        values[path] = _coerce_value(leaf["value"], path)
    return ESGExtractionResult.from_values(values)


def _lookup(data: dict[str, Any], path: LeafPath) -> dict[str, Any]:
    node: Any = data
    for depth, key in enumerate(path):
        if not isinstance(node, dict) or key not in node:
            raise ExtractionValidationError(
                f"Missing required field: {schema.dotted(path[: depth + 1])}"
            )
        node = node[key]
    if not isinstance(node, dict):
        raise ExtractionValidationError(f"'{schema.dotted(path)}' must be an object")
    return node


def _coerce_value(raw: Any, path: LeafPath) -> float | None:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ExtractionValidationError(f"'{schema.dotted(path)}.value' must be a number")
    if isinstance(raw, (int, float)):
        try:
            number = float(raw)
        except OverflowError as exc:
            raise ExtractionValidationError(
                f"'{schema.dotted(path)}.value' must be finite"
            ) from exc
    elif isinstance(raw, str) and _NUMERIC_STRING.match(raw.strip()):
        number = float(raw.strip().replace(",", ""))
    else:
        raise ExtractionValidationError(
            f"'{schema.dotted(path)}.value' must be a number or null, got {raw!r}"
        )
    if not math.isfinite(number):
        raise ExtractionValidationError(f"'{schema.dotted(path)}.value' must be finite")
    return number
