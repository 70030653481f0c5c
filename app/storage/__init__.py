from app.storage.base import BaseKeyValueStore
from app.storage.exceptions import StorageError
from app.storage.factory import KeyValueStoreFactory
from app.storage.memory_store import InMemoryKeyValueStore
from app.storage.postgres_store import PostgresKeyValueStore

__all__ = [
    "BaseKeyValueStore",
    "InMemoryKeyValueStore",
    "KeyValueStoreFactory",
    "PostgresKeyValueStore",
    "StorageError",
]
