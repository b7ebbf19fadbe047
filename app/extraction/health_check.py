import re

from app.extraction.client_base import BaseAIClient
from app.logging.logger import Log

_OK_WORD = re.compile(r"\bOK\b", re.IGNORECASE)
_NEGATION = re.compile(r"\bnot\b", re.IGNORECASE)


class HealthCheck:
    """Single-shot availability check that asks the model to reply "OK"."""

    PROMPT = "Reply with OK"

    def __init__(
        self,
        *,
        client: BaseAIClient,
        model: str,
        timeout_seconds: float = 5,
    ) -> None:
        self._client = client
        self._model = model
        self._timeout_seconds = timeout_seconds

    def is_available(self) -> bool:
        """Return True only if the reply says OK as a whole word, unnegated.

        "OK." and "ok" count as up; "BROKEN", "TOKEN" and "not ok" do not.
        Any error counts as down; the check never retries.
        """
        try:
            reply = self._client.generate(
                model=self._model,
                temperature=0.0,
                max_output_tokens=10,
                system_prompt="",
                user_prompt=self.PROMPT,
                timeout_seconds=self._timeout_seconds,
            )
        except Exception as exc:
            Log.warning(f"AI health check failed: {exc}")
            return False

        if not _OK_WORD.search(reply) or _NEGATION.search(reply):
            Log.warning(f"AI health check got unexpected reply: {reply[:50]!r}")
            return False
        return True
