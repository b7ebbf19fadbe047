class ExtractionError(Exception):
    """Base exception for structured ESG extraction."""


class ExtractionValidationError(ExtractionError):
    """Raised when a parsed payload does not match the fixed result schema."""


class AIServiceError(ExtractionError):
    """Raised when the AI provider call does not yield a usable result."""

    retryable: bool = False


class AIServiceUnavailableError(AIServiceError):
    """Service unavailable, overloaded, rate limited, unreachable or timed out."""

    retryable = True


class MalformedResponseError(AIServiceError):
    """The provider answered, but the reply is empty or not the expected JSON."""

    retryable = True


class AIServicePermanentError(AIServiceError):
    """Authentication, configuration or request errors that a retry cannot fix."""

    retryable = False


class AIRetriesExhaustedError(ExtractionError):
    """Raised when every attempt in the retry budget failed with a retryable error."""

    def __init__(self, attempts: int, last_error: AIServiceError) -> None:
        super().__init__(
            f"AI extraction failed after {attempts} attempts: {last_error}"
        )
        self.attempts = attempts
        self.last_error = last_error
