import json
from pathlib import Path

import pytest

from app.extraction.exceptions import ExtractionError
from app.extraction.prompt_loader import load_json_schema, load_prompt_template


class TestLoadPromptTemplate:
    def test_loads_bundled_template(self) -> None:
        template = load_prompt_template()
        assert "{result_template}" in template
        assert "{source_text}" in template

    def test_loads_custom_path(self, tmp_path: Path) -> None:
        path = tmp_path / "prompt.txt"
        path.write_text("Extract from {source_text}", encoding="utf-8")
        assert load_prompt_template(path) == "Extract from {source_text}"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ExtractionError, match="Failed to load prompt template"):
            load_prompt_template(tmp_path / "missing.txt")


class TestLoadJsonSchema:
    def test_bundled_schema_is_strict_object(self) -> None:
        data = json.loads(load_json_schema())
        assert data["type"] == "object"
        assert data["additionalProperties"] is False
        assert set(data["required"]) == {"environmental", "social", "governance"}

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ExtractionError, match="Failed to load JSON schema"):
            load_json_schema(tmp_path / "missing.json")
