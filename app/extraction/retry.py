"""Retry policy for AI extraction, executed by tenacity.

Each extraction call builds its own ``Retrying`` object; tenacity's
``RetryCallState`` carries the attempt number, the last outcome and the next
delay for that call only.
"""

from collections.abc import Callable
from dataclasses import dataclass

from tenacity import (
    RetryCallState,
    Retrying,
    before_sleep_nothing,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from app.extraction.exceptions import AIServiceError


def is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, AIServiceError) and exc.retryable


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff: the delay after failed attempt n is base * 2**n."""

    max_attempts: int = 5
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 30.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_seconds < 0:
            raise ValueError("base_delay_seconds must not be negative")

    def delay_after(self, attempt: int) -> float:
        return min(self.base_delay_seconds * 2**attempt, self.max_delay_seconds)

    def schedule(self) -> list[float]:
        """Every delay the policy can wait, one per retry."""
        return [self.delay_after(attempt) for attempt in range(1, self.max_attempts)]

    def retrying(
        self,
        *,
        sleep: Callable[[float], None],
        before_sleep: Callable[[RetryCallState], None] | None = None,
    ) -> Retrying:
        """Build a fresh ``Retrying`` for one call sequence.

        Non-retryable errors propagate from the attempt that raised them;
        exhausting the budget raises ``tenacity.RetryError``.
        """
        # wait_exponential yields multiplier * 2**(n-1) after attempt n.
        return Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=2 * self.base_delay_seconds,
                max=self.max_delay_seconds,
            ),
            retry=retry_if_exception(is_retryable),
            sleep=sleep,
            before_sleep=before_sleep or before_sleep_nothing,
        )
