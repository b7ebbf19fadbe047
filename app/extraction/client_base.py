from abc import ABC, abstractmethod


class BaseAIClient(ABC):
    """Contract for provider-specific generative model clients."""

    @abstractmethod
    def generate(
        self,
        *,
        model: str,
        temperature: float,
        max_output_tokens: int,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object] | None = None,
        timeout_seconds: float | None = None,
    ) -> str:
        """Return the provider reply as plain text.

        Raises:
            AIServiceError: subclass chosen by whether a retry may help.
        """
