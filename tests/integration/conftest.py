import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from app.config.settings import Settings
from app.database.connection import close_pool, get_connection, init_pool

_CREATE_TABLE = """
CREATE TABLE IF NOT EXISTS esg_responses (
    id SERIAL PRIMARY KEY,
    user_id TEXT NOT NULL,
    year INTEGER NOT NULL,
    total_electricity_consumption DOUBLE PRECISION,
    renewable_electricity_consumption DOUBLE PRECISION,
    total_fuel_consumption DOUBLE PRECISION,
    carbon_emissions DOUBLE PRECISION,
    total_employees INTEGER,
    female_employees INTEGER,
    avg_training_hours DOUBLE PRECISION,
    community_investment_spend DOUBLE PRECISION,
    independent_board_members_percent DOUBLE PRECISION,
    has_data_privacy_policy BOOLEAN,
    total_revenue DOUBLE PRECISION,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    UNIQUE (user_id, year)
)
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "esg_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(_CREATE_TABLE)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def test_user_id(db_conn: psycopg.Connection[Any]) -> Generator[str, None, None]:
    """Unique user id whose esg_responses rows are removed afterwards."""
    user_id = f"it-{uuid.uuid4()}"
    yield user_id
    with db_conn.cursor() as cur:
        cur.execute("DELETE FROM esg_responses WHERE user_id = %s", (user_id,))
    db_conn.commit()
