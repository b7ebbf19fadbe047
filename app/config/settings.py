from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "esg"
    db_username: str = "esg"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 4
    db_connect_timeout_seconds: int = 10

    max_upload_bytes: int = 10 * 1024 * 1024

    pdf_engine: str = "pdfplumber"
    pdf_max_pages: int = 2

    ai_provider: str = "gemini"
    ai_api_key: str = ""
    ai_model_name: str = "gemini-1.5-flash"
    ai_base_url: str | None = None
    ai_timeout_seconds: int = 30
    ai_temperature: float = 0.0
    ai_max_output_tokens: int = 1024
    ai_structured_output: bool = True
    ai_max_input_chars: int = 30_000

    ai_max_attempts: int = 5
    ai_backoff_base_seconds: float = 1.0
    ai_backoff_max_seconds: float = 30.0

    health_check_enabled: bool = True
    health_check_timeout_seconds: int = 5

    heuristic_fallback_enabled: bool = True

    request_timeout_seconds: int = 300

    @model_validator(mode="after")
    def _check_pipeline_ceiling(self) -> "Settings":
        if self.ai_max_attempts < 1:
            raise ValueError("ai_max_attempts must be at least 1")
        backoff = sum(
            min(self.ai_backoff_base_seconds * 2**attempt, self.ai_backoff_max_seconds)
            for attempt in range(1, self.ai_max_attempts)
        )
        ceiling = self.ai_max_attempts * self.ai_timeout_seconds + backoff
        if self.health_check_enabled:
            ceiling += self.health_check_timeout_seconds
        if ceiling > self.request_timeout_seconds:
            raise ValueError(
                f"Worst-case extraction time {ceiling:.0f}s exceeds "
                f"request_timeout_seconds={self.request_timeout_seconds}"
            )
        return self
