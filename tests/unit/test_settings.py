import pytest
from pydantic import ValidationError

from app.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_pdf_engine_and_page_cap(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"
        assert s.pdf_max_pages == 2

    def test_default_ai_provider(self) -> None:
        s = Settings()
        assert s.ai_provider == "gemini"
        assert s.ai_timeout_seconds == 30

    def test_default_retry_budget(self) -> None:
        s = Settings()
        assert s.ai_max_attempts == 5
        assert s.ai_backoff_base_seconds == 1.0

    def test_default_input_limit(self) -> None:
        s = Settings()
        assert s.ai_max_input_chars == 30_000

    def test_fallback_and_health_check_enabled_by_default(self) -> None:
        s = Settings()
        assert s.heuristic_fallback_enabled is True
        assert s.health_check_enabled is True


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_ai_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_PROVIDER", "example")
        s = Settings()
        assert s.ai_provider == "example"

    def test_loads_max_attempts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_MAX_ATTEMPTS", "3")
        s = Settings()
        assert s.ai_max_attempts == 3

    def test_loads_fallback_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HEURISTIC_FALLBACK_ENABLED", "false")
        s = Settings()
        assert s.heuristic_fallback_enabled is False


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_zero_attempts_raises(self) -> None:
        with pytest.raises(ValidationError, match="ai_max_attempts"):
            Settings(ai_max_attempts=0)

    def test_ceiling_above_request_timeout_raises(self) -> None:
        with pytest.raises(ValidationError, match="request_timeout_seconds"):
            Settings(ai_max_attempts=10, ai_timeout_seconds=60, request_timeout_seconds=120)

    def test_ceiling_within_request_timeout_is_accepted(self) -> None:
        s = Settings(ai_max_attempts=2, ai_timeout_seconds=10, request_timeout_seconds=30)
        assert s.request_timeout_seconds == 30
