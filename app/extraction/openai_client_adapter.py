from typing import Any

import httpx
import openai

from app.extraction.client_base import BaseAIClient
from app.extraction.exceptions import (
    AIServiceError,
    AIServicePermanentError,
    AIServiceUnavailableError,
    MalformedResponseError,
)

_TRANSIENT_MARKERS = ("overloaded", "rate limit", "unavailable", "try again later")


class OpenAIClientAdapter(BaseAIClient):
    """AI client adapter built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        structured_output: bool = True,
    ) -> None:
        self._structured_output = structured_output
        # Retries are owned by AIExtractor so every attempt is counted once.
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

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
        messages = [{"role": "user", "content": user_prompt}]
        if system_prompt:
            messages.insert(0, {"role": "system", "content": system_prompt})
        options: dict[str, Any] = {}
        if json_schema is not None and self._structured_output:
            options["response_format"] = {
                "type": "json_schema",
                "json_schema": {
                    "name": "esg_extraction_result",
                    "strict": True,
                    "schema": json_schema,
                },
            }
        if timeout_seconds is not None:
            options["timeout"] = timeout_seconds

        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_output_tokens,
                messages=messages,  # type: ignore[arg-type]
                **options,
            )
        except openai.APITimeoutError as exc:
            raise AIServiceUnavailableError(f"AI provider timed out: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise AIServiceUnavailableError(f"AI provider network error: {exc}") from exc
        except (openai.RateLimitError, openai.InternalServerError) as exc:
            raise AIServiceUnavailableError(
                f"AI provider unavailable ({exc.status_code}): {exc}"
            ) from exc
        except openai.APIError as exc:
            raise _classify_api_error(exc) from exc

        if not response.choices:
            raise MalformedResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise MalformedResponseError("AI returned empty response")
        return content


def _classify_api_error(exc: openai.APIError) -> AIServiceError:
    """Map remaining SDK errors by status code and message."""
    status = getattr(exc, "status_code", None)
    message = str(exc)
    if status == 503 or any(marker in message.lower() for marker in _TRANSIENT_MARKERS):
        return AIServiceUnavailableError(f"AI provider unavailable: {message}")
    return AIServicePermanentError(f"AI provider API error: {message}")
