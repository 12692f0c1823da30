"""Abstract base class for chat history stores.

This module defines the interface for the local history store.
The abstraction hides:
- Storage format (SQLite, in-memory, etc.)
- Persistence mechanism (file, database, in-memory)
- Connection management

The store behaves like a browser's local key-value storage: two fixed
string slots, last write wins, no merging, versioning or size checks.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..chat.models import PersistedState, Theme, Transcript

TRANSCRIPT_KEY = "all-chats"
THEME_KEY = "themeColor"


class HistoryStore(ABC):
    """Abstract history store backend.

    Subclasses implement the raw slot access; transcript and theme
    (de)serialization is shared here.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the store backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the store backend gracefully."""

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        """Read a slot, or None when it was never written."""

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Overwrite a slot."""

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Delete a slot if present."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def load(self) -> PersistedState:
        """Read the saved transcript and theme.

        Missing slots fall back to an empty transcript (shown as the
        placeholder) and the dark theme. Corrupt data is not repaired:
        the validation error propagates.
        """
        blob = await self.get_item(TRANSCRIPT_KEY)
        theme = await self.get_item(THEME_KEY)
        return PersistedState(
            transcript=Transcript.from_blob(blob) if blob else Transcript(),
            theme=Theme(theme) if theme else Theme.DARK,
        )

    async def save(self, transcript: Transcript) -> None:
        """Overwrite the saved transcript."""
        await self.set_item(TRANSCRIPT_KEY, transcript.to_blob())

    async def save_theme(self, theme: Theme) -> None:
        await self.set_item(THEME_KEY, theme.value)

    async def clear(self) -> None:
        """Remove the saved transcript. The theme preference is kept."""
        await self.remove_item(TRANSCRIPT_KEY)

    async def __aenter__(self) -> "HistoryStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.disconnect()
