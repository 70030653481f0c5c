from app.config.settings import Settings
from app.storage.base import BaseKeyValueStore
from app.storage.memory_store import InMemoryKeyValueStore
from app.storage.postgres_store import PostgresKeyValueStore


class KeyValueStoreFactory:
    """Creates the key-value store selected by settings."""

    BACKENDS: tuple[str, ...] = ("postgres", "memory")

    @classmethod
    def create(cls, settings: Settings) -> BaseKeyValueStore:
        backend = settings.storage_backend.lower()
        if backend == "postgres":
            return PostgresKeyValueStore(table=settings.kv_table)
        if backend == "memory":
            return InMemoryKeyValueStore()
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
