from typing import Any

import psycopg
from psycopg import sql
from psycopg.types.json import Jsonb

from app.database.connection import get_connection
from app.storage.base import BaseKeyValueStore
from app.storage.exceptions import StorageError


class PostgresKeyValueStore(BaseKeyValueStore):
    """Key-value store backed by a single JSONB table.

    Every put is committed on its own; there is no transaction spanning keys.
    """

    def __init__(self, table: str = "kv_store") -> None:
        self._table = sql.Identifier(table)

    def ensure_schema(self) -> None:
        """Create the backing table if it does not exist."""
        query = sql.SQL(
            """
            CREATE TABLE IF NOT EXISTS {table} (
                key TEXT PRIMARY KEY,
                value JSONB NOT NULL,
                updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
            )
            """
        ).format(table=self._table)
        try:
            with get_connection() as conn:
                conn.execute(query)
                conn.commit()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to create key-value table: {exc}") from exc

    def get(self, key: str) -> Any | None:
        query = sql.SQL("SELECT value FROM {table} WHERE key = %s").format(
            table=self._table
        )
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, (key,))
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to read key {key}: {exc}") from exc

        if row is None:
            return None
        return row[0]

    def put(self, key: str, value: Any) -> None:
        query = sql.SQL(
            """
            INSERT INTO {table} (key, value, updated_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (key)
            DO UPDATE SET value = EXCLUDED.value, updated_at = NOW()
            """
        ).format(table=self._table)
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, (key, Jsonb(value)))
                conn.commit()
        except psycopg.Error as exc:
            raise StorageError(f"Failed to write key {key}: {exc}") from exc
