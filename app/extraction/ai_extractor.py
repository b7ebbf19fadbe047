"""Generative-model ESG extractor with retry and backoff."""

import json
import time
from collections.abc import Callable
from pathlib import Path

from tenacity import RetryCallState, RetryError

from app.extraction.base import BaseESGExtractor
from app.extraction.client_base import BaseAIClient
from app.extraction.exceptions import (
    AIRetriesExhaustedError,
    AIServiceError,
    MalformedResponseError,
)
from app.extraction.models import (
    ESGExtractionResult,
    ExtractionStrategy,
    ParsedOK,
)
from app.extraction.prompt_loader import load_json_schema, load_prompt_template
from app.extraction.retry import RetryPolicy
from app.extraction.validator import parse_response
from app.logging.logger import Log

DEFAULT_MAX_INPUT_CHARS = 30_000


class AIExtractor(BaseESGExtractor):
    """Extracts ESG metrics by prompting a generative model.

    Retryable failures (service unavailable, overloaded, rate limited, timed
    out, malformed reply) are retried with exponential backoff until the
    policy's budget is spent, then ``AIRetriesExhaustedError`` is raised.
    Non-retryable failures propagate on the attempt that produced them.
    """

    strategy = ExtractionStrategy.AI

    def __init__(
        self,
        *,
        client: BaseAIClient,
        model: str,
        temperature: float = 0.0,
        max_output_tokens: int = 1024,
        max_input_chars: int = DEFAULT_MAX_INPUT_CHARS,
        retry_policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] = time.sleep,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._max_output_tokens = max_output_tokens
        self._max_input_chars = max_input_chars
        self._retry_policy = retry_policy or RetryPolicy()
        self._sleep = sleep
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema = json.loads(load_json_schema(json_schema_path))
        self._result_template = json.dumps(ESGExtractionResult().to_dict(), indent=2)

    @property
    def retry_policy(self) -> RetryPolicy:
        return self._retry_policy

    def extract(self, text: str) -> ESGExtractionResult:
        prompt = self._build_prompt(self._truncate(text))
        Log.debug(f"Extraction prompt:\n{prompt}")

        retrying = self._retry_policy.retrying(
            sleep=self._sleep, before_sleep=self._log_retry
        )
        try:
            for attempt in retrying:
                with attempt:
                    result = self._attempt(prompt)
        except RetryError as exc:
            last_attempt = exc.last_attempt
            last_error = last_attempt.exception()
            Log.error(
                f"AI extraction exhausted {last_attempt.attempt_number} attempts; "
                f"last error: {last_error}"
            )
            raise AIRetriesExhaustedError(
                last_attempt.attempt_number, last_error  # type: ignore[arg-type]
            ) from last_error
        except AIServiceError as exc:
            Log.error(
                f"AI attempt {retrying.statistics['attempt_number']} "
                f"failed permanently: {exc}"
            )
            raise

        Log.info(
            f"AI extraction succeeded on attempt {retrying.statistics['attempt_number']}: "
            f"{result.found_count()} metrics found"
        )
        return result

    def _log_retry(self, retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        Log.warning(
            f"AI attempt {retry_state.attempt_number}/{self._retry_policy.max_attempts} "
            f"failed: {exc}. Retrying in {delay:g}s"
        )

    def _truncate(self, text: str) -> str:
        if len(text) <= self._max_input_chars:
            return text
        Log.warning(
            f"Input text truncated from {len(text)} to {self._max_input_chars} chars; "
            "metrics near the end of the document may be missed"
        )
        return text[: self._max_input_chars]

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(
            result_template=self._result_template,
            source_text=text,
        )

    def _attempt(self, prompt: str) -> ESGExtractionResult:
        raw_response = self._client.generate(
            model=self._model,
            temperature=self._temperature,
            max_output_tokens=self._max_output_tokens,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        outcome = parse_response(raw_response)
        if isinstance(outcome, ParsedOK):
            return outcome.result
        raise MalformedResponseError(f"Malformed AI response: {outcome.reason}")
