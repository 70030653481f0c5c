import os
from collections.abc import Generator

import pytest
from psycopg import sql

from app.config.settings import Settings
from app.database.connection import close_pool, get_connection, init_pool
from app.registry.registry import DocumentRegistry
from app.storage.postgres_store import PostgresKeyValueStore

TEST_TABLE = "kv_store_test"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docregistry_test")
    return Settings(kv_table=TEST_TABLE)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env vars.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def pg_store(
    integration_pool: None, test_settings: Settings
) -> Generator[PostgresKeyValueStore, None, None]:
    store = PostgresKeyValueStore(table=test_settings.kv_table)
    store.ensure_schema()
    yield store
    with get_connection() as conn:
        conn.execute(
            sql.SQL("TRUNCATE {table}").format(table=sql.Identifier(TEST_TABLE))
        )
        conn.commit()


@pytest.fixture
def pg_registry(pg_store: PostgresKeyValueStore) -> DocumentRegistry:
    return DocumentRegistry(pg_store)
