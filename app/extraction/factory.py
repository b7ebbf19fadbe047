from typing import ClassVar

from app.config.settings import Settings
from app.extraction.ai_extractor import AIExtractor
from app.extraction.client_base import BaseAIClient
from app.extraction.example_client_adapter import ExampleClientAdapter
from app.extraction.health_check import HealthCheck
from app.extraction.heuristic_extractor import HeuristicExtractor
from app.extraction.openai_client_adapter import OpenAIClientAdapter
from app.extraction.retry import RetryPolicy


class ExtractorFactory:
    """Creates the configured AI client, extractors and health check."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create_client(cls, settings: Settings) -> BaseAIClient:
        provider = settings.ai_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=settings.ai_api_key,
            timeout_seconds=settings.ai_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
            structured_output=settings.ai_structured_output,
        )

    @classmethod
    def create_ai_extractor(cls, settings: Settings, client: BaseAIClient) -> AIExtractor:
        return AIExtractor(
            client=client,
            model=settings.ai_model_name,
            temperature=settings.ai_temperature,
            max_output_tokens=settings.ai_max_output_tokens,
            max_input_chars=settings.ai_max_input_chars,
            retry_policy=RetryPolicy(
                max_attempts=settings.ai_max_attempts,
                base_delay_seconds=settings.ai_backoff_base_seconds,
                max_delay_seconds=settings.ai_backoff_max_seconds,
            ),
        )

    @classmethod
    def create_health_check(
        cls, settings: Settings, client: BaseAIClient
    ) -> HealthCheck | None:
        if not settings.health_check_enabled:
            return None
        return HealthCheck(
            client=client,
            model=settings.ai_model_name,
            timeout_seconds=settings.health_check_timeout_seconds,
        )

    @classmethod
    def create_fallback(cls, settings: Settings) -> HeuristicExtractor | None:
        if not settings.heuristic_fallback_enabled:
            return None
        return HeuristicExtractor()

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = (settings.ai_base_url or "").strip()
            if not url:
                raise ValueError(
                    "ai_base_url is required for ai_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return (settings.ai_base_url or "").strip() or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown AI provider '{provider}'. Choose from: {supported}")
