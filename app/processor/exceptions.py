from collections.abc import Iterable


class ProcessorError(Exception):
    """Base exception for upload orchestration errors."""


class UnsupportedTypeError(ProcessorError):
    """Raised when the declared MIME type has no text extractor."""

    def __init__(self, mime_type: str, accepted_types: Iterable[str]) -> None:
        self.mime_type = mime_type
        self.accepted_types = sorted(accepted_types)
        super().__init__(
            f"Unsupported file type '{mime_type}'. "
            f"Accepted types: {', '.join(self.accepted_types)}"
        )


class EmptyUploadError(ProcessorError):
    """Raised when the uploaded buffer has no bytes."""


class UploadTooLargeError(ProcessorError):
    """Raised when the uploaded buffer exceeds the configured size limit."""

    def __init__(self, size_bytes: int, max_bytes: int) -> None:
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
        super().__init__(f"Upload of {size_bytes} bytes exceeds limit of {max_bytes} bytes")


class FallbackUnavailableError(ProcessorError):
    """Raised when the AI path is exhausted and no fallback strategy is configured."""
