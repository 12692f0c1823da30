"""Dict-backed history store.

Nothing survives the process, which makes it the backend for tests and
for `--store memory` sessions that should leave no trace on disk.
"""

from .base import HistoryStore


class InMemoryHistoryStore(HistoryStore):
    """Keeps both slots in a plain dict.

    `initial` seeds the slots, e.g. to start a session from a saved blob.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    async def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    @property
    def backend_type(self) -> str:
        return "memory"
