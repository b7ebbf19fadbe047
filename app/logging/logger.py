import logging
import sys
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar

_upload: ContextVar[str] = ContextVar("upload", default="-")


class _UploadContextFilter(logging.Filter):
    """Stamps every record with the upload currently being processed."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.upload = _upload.get()
        return True


class Log:
    """Process-wide logging facade for the extraction worker.

    Records carry an ``upload`` field (``user/year``) set by
    ``upload_context`` so interleaved requests stay distinguishable.
    """

    _logger: logging.Logger = logging.getLogger("esgreport")
    _logger.addFilter(_UploadContextFilter())

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stderr handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] [%(upload)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    @contextmanager
    def upload_context(cls, user_id: str, year: int) -> Generator[None, None, None]:
        token = _upload.set(f"{user_id}/{year}")
        try:
            yield
        finally:
            _upload.reset(token)

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(message, extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(message, extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        cls._logger.warning(message, extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        """Used for prompts and raw model replies."""
        cls._logger.debug(message, extra=kwargs)
