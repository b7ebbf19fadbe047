from typing import Any

from psycopg import sql
from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import EsgResponseRecord
from app.processor.models import MappedESGRecord

METRIC_COLUMNS: tuple[str, ...] = (
    "total_electricity_consumption",
    "renewable_electricity_consumption",
    "total_fuel_consumption",
    "carbon_emissions",
    "total_employees",
    "female_employees",
    "avg_training_hours",
    "community_investment_spend",
    "independent_board_members_percent",
    "has_data_privacy_policy",
    "total_revenue",
)


class EsgResponsesRepository:
    """Database operations for the esg_responses table, keyed by (user_id, year)."""

    def find_by_user_and_year(self, user_id: str, year: int) -> EsgResponseRecord | None:
        """Fetch the stored yearly record, or None if the user has none for that year."""
        query = sql.SQL(
            """
            SELECT id, user_id, year, {columns}, created_at, updated_at
            FROM esg_responses
            WHERE user_id = %s AND year = %s
            """
        ).format(columns=sql.SQL(", ").join(map(sql.Identifier, METRIC_COLUMNS)))
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, (user_id, year))
                row = cur.fetchone()

        if row is None:
            return None
        return _row_to_record(row)

    def upsert_extracted(self, record: MappedESGRecord) -> int:
        """Insert or update the yearly record with extracted values.

        A NULL extracted value never overwrites a stored one, so manual
        entries survive an upload that could not find them.

        Returns:
            The id of the inserted or updated row.
        """
        columns = sql.SQL(", ").join(map(sql.Identifier, METRIC_COLUMNS))
        placeholders = sql.SQL(", ").join(sql.Placeholder() * len(METRIC_COLUMNS))
        updates = sql.SQL(", ").join(
            sql.SQL("{col} = COALESCE(EXCLUDED.{col}, esg_responses.{col})").format(
                col=sql.Identifier(column)
            )
            for column in METRIC_COLUMNS
        )
        query = sql.SQL(
            """
            INSERT INTO esg_responses (user_id, year, {columns}, created_at, updated_at)
            VALUES (%s, %s, {placeholders}, NOW(), NOW())
            ON CONFLICT (user_id, year) DO UPDATE
            SET {updates}, updated_at = NOW()
            RETURNING id
            """
        ).format(columns=columns, placeholders=placeholders, updates=updates)
        params = (
            record.user_id,
            record.year,
            *(getattr(record, column) for column in METRIC_COLUMNS),
        )
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("Upsert returned no id")
        return int(row[0])


def _row_to_record(row: dict[str, Any]) -> EsgResponseRecord:
    return EsgResponseRecord(
        id=row["id"],
        user_id=str(row["user_id"]),
        year=row["year"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        **{column: row[column] for column in METRIC_COLUMNS},
    )
