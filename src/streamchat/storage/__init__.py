"""Local history store for streamchat.

Persists the chat transcript and theme preference between runs.
"""

from .base import THEME_KEY, TRANSCRIPT_KEY, HistoryStore
from .factory import create_history_store

__all__ = [
    "HistoryStore",
    "THEME_KEY",
    "TRANSCRIPT_KEY",
    "create_history_store",
]
