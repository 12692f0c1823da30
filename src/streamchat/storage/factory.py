"""Construction of history stores by backend name."""

from typing import Any

from .base import HistoryStore

SUPPORTED_BACKENDS = ("memory", "sqlite")


def create_history_store(backend: str = "sqlite", **kwargs: Any) -> HistoryStore:
    """Build an unconnected store for `backend`.

    `sqlite` accepts `path`; `memory` accepts `initial`. The store still
    has to be connected, directly or with `async with`.

    Raises:
        ValueError: For a backend name outside SUPPORTED_BACKENDS
    """
    name = backend.lower()
    if name == "sqlite":
        from .sqlite import SQLiteHistoryStore
        return SQLiteHistoryStore(**kwargs)
    if name == "memory":
        from .in_memory import InMemoryHistoryStore
        return InMemoryHistoryStore(**kwargs)

    raise ValueError(
        f"Unsupported history store backend: {backend}. "
        f"Supported backends: {', '.join(SUPPORTED_BACKENDS)}"
    )
