import itertools
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from app.registry.id_generator import DocumentIdGenerator
from app.registry.registry import DocumentRegistry
from app.storage.memory_store import InMemoryKeyValueStore


def _stepping_clock() -> Callable[[], float]:
    """Clock advancing one second per call, starting at 2024-01-01."""
    counter = itertools.count()
    return lambda: 1704067200.0 + next(counter)


def _stepping_now() -> Callable[[], datetime]:
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    counter = itertools.count()
    return lambda: start + timedelta(seconds=next(counter))


@pytest.fixture()
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def registry(memory_store: InMemoryKeyValueStore) -> DocumentRegistry:
    """Registry over an in-memory store with deterministic ids and timestamps."""
    return DocumentRegistry(
        memory_store,
        id_generator=DocumentIdGenerator(clock=_stepping_clock()),
        now=_stepping_now(),
    )
