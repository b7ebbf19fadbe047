"""PostgreSQL access for the ``esg_responses`` table.

The CLI opens one pool per run (``init_pool`` before ``UploadService`` handles
the upload, ``close_pool`` after). ``EsgResponsesRepository`` borrows a
connection for each read or upsert through ``get_connection``.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from app.config.settings import Settings
from app.logging.logger import Log

APPLICATION_NAME = "esg-extraction"

_pool: ConnectionPool | None = None


def build_conninfo(settings: Settings) -> str:
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
        connect_timeout=settings.db_connect_timeout_seconds,
        application_name=APPLICATION_NAME,
    )


def init_pool(settings: Settings) -> None:
    """Open the responses pool, replacing any pool left open by a previous run."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        close_pool()
    _pool = ConnectionPool(
        build_conninfo(settings),
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        timeout=settings.db_connect_timeout_seconds,
        name="esg-responses",
        open=True,
    )
    Log.debug(
        f"Opened esg-responses pool on {settings.db_host}:{settings.db_port}/"
        f"{settings.db_database} (size {settings.db_pool_min_size}-{settings.db_pool_max_size})"
    )


def close_pool() -> None:
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Borrow a connection for one repository call.

    ``upsert_extracted`` commits explicitly before the connection goes back.
    """
    if _pool is None:
        raise RuntimeError("esg-responses pool is not open; call init_pool() first")
    with _pool.connection() as conn:
        yield conn
