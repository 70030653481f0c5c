from abc import ABC, abstractmethod
from typing import Any


class BaseKeyValueStore(ABC):
    """Contract for key-value storage adapters.

    Values are JSON-compatible structures (dicts, lists, strings, numbers).
    Each call is independent: no adapter offers atomicity across keys.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the value stored under key, or None if absent.

        Raises:
            StorageError: if the read fails.
        """

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value.

        Raises:
            StorageError: if the write fails.
        """
