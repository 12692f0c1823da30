"""
StreamChat: a terminal chat client for a streamed model endpoint.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .chat import ChatController, ChatMessage, Role, Theme, Transcript
from .endpoint import ChatEndpoint, create_chat_endpoint
from .exceptions import EndpointError, StreamChatError
from .formatting import parse_markdown
from .storage import HistoryStore, create_history_store

__all__ = [
    "ChatController",
    "ChatEndpoint",
    "ChatMessage",
    "EndpointError",
    "HistoryStore",
    "Role",
    "StreamChatError",
    "Theme",
    "Transcript",
    "create_chat_endpoint",
    "create_history_store",
    "parse_markdown",
]
