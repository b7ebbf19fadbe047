"""Tests for the model-reply parsing and schema coercion boundary."""

import json
from typing import Any

import pytest

from app.extraction import schema
from app.extraction.exceptions import ExtractionValidationError
from app.extraction.models import ESGExtractionResult, ParsedOK, ParseFailed
from app.extraction.validator import extract_json_object, parse_response, validate_and_build


def _payload(**overrides: Any) -> dict[str, Any]:
    data = ESGExtractionResult().to_dict()
    data["environmental"]["carbon_emissions"]["value"] = overrides.get("carbon", 125.3)
    return data


class TestExtractJsonObject:
    def test_plain_json(self) -> None:
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_strips_markdown_code_fences(self) -> None:
        assert extract_json_object('```json\n{"a": 1}\n```') == {"a": 1}

    def test_strips_plain_code_fences(self) -> None:
        assert extract_json_object('```\n{"a": 1}\n```') == {"a": 1}

    def test_slices_surrounding_commentary(self) -> None:
        raw = 'Here is the data you asked for: {"a": {"b": 2}} Let me know!'
        assert extract_json_object(raw) == {"a": {"b": 2}}

    def test_no_object_raises(self) -> None:
        with pytest.raises(ExtractionValidationError, match="no JSON object"):
            extract_json_object("sorry, I cannot help")

    def test_invalid_json_raises(self) -> None:
        with pytest.raises(ExtractionValidationError, match="Invalid JSON"):
            extract_json_object("{not: valid}")


class TestValidateAndBuild:
    def test_builds_result(self) -> None:
        result = validate_and_build(_payload())
        assert result.value(schema.CARBON_EMISSIONS) == 125.3
        assert result.value(schema.WATER_CONSUMPTION) is None

    def test_integers_become_floats(self) -> None:
        result = validate_and_build(_payload(carbon=100))
        value = result.value(schema.CARBON_EMISSIONS)
        assert value == 100.0
        assert isinstance(value, float)

    def test_numeric_strings_are_coerced(self) -> None:
        result = validate_and_build(_payload(carbon="45,670.5"))
        assert result.value(schema.CARBON_EMISSIONS) == 45670.5

    def test_non_numeric_string_rejected(self) -> None:
        with pytest.raises(ExtractionValidationError, match="carbon_emissions.value"):
            validate_and_build(_payload(carbon="about 12 tonnes"))

    def test_boolean_rejected(self) -> None:
        with pytest.raises(ExtractionValidationError, match="must be a number"):
            validate_and_build(_payload(carbon=True))

    def test_non_finite_rejected(self) -> None:
        with pytest.raises(ExtractionValidationError, match="finite"):
            validate_and_build(_payload(carbon=float("inf")))

    def test_missing_group_rejected(self) -> None:
        data = _payload()
        del data["governance"]
        with pytest.raises(ExtractionValidationError, match="governance"):
            validate_and_build(data)

    def test_missing_nested_leaf_rejected(self) -> None:
        data = _payload()
        del data["social"]["diversity_and_inclusion"]["female_representation"]
        with pytest.raises(
            ExtractionValidationError,
            match="social.diversity_and_inclusion.female_representation",
        ):
            validate_and_build(data)

    def test_missing_value_key_rejected(self) -> None:
        data = _payload()
        data["governance"]["board_independence"] = {"unit": "%"}
        with pytest.raises(ExtractionValidationError, match="Missing 'value'"):
            validate_and_build(data)

    def test_leaf_must_be_object(self) -> None:
        data = _payload()
        data["environmental"]["energy_usage"] = 1200
        with pytest.raises(ExtractionValidationError, match="must be an object"):
            validate_and_build(data)

    def test_model_units_are_replaced_with_canonical_units(self) -> None:
        data = _payload()
        data["environmental"]["carbon_emissions"]["unit"] = "kg"
        result = validate_and_build(data)
        assert result.metric(schema.CARBON_EMISSIONS).unit == "tonnes CO2e"


class TestParseResponse:
    def test_returns_parsed_ok(self) -> None:
        outcome = parse_response("```json\n" + json.dumps(_payload()) + "\n```")
        assert isinstance(outcome, ParsedOK)
        assert outcome.result.value(schema.CARBON_EMISSIONS) == 125.3

    def test_returns_parse_failed_for_garbage(self) -> None:
        outcome = parse_response("The service is busy")
        assert isinstance(outcome, ParseFailed)
        assert "no JSON object" in outcome.reason

    def test_returns_parse_failed_for_partial_shape(self) -> None:
        outcome = parse_response('{"environmental": {}}')
        assert isinstance(outcome, ParseFailed)

    def test_integer_too_large_for_float_is_parse_failed(self) -> None:
        body = json.dumps(_payload()).replace("125.3", "1" + "0" * 400, 1)
        outcome = parse_response(body)
        assert isinstance(outcome, ParseFailed)
        assert "must be finite" in outcome.reason

    def test_integer_past_digit_limit_is_parse_failed(self) -> None:
        body = json.dumps(_payload()).replace("125.3", "9" * 5000, 1)
        outcome = parse_response(body)
        assert isinstance(outcome, ParseFailed)

    def test_infinity_literal_is_parse_failed(self) -> None:
        body = json.dumps(_payload()).replace("125.3", "Infinity", 1)
        outcome = parse_response(body)
        assert isinstance(outcome, ParseFailed)
        assert "finite" in outcome.reason
