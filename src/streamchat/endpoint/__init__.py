from .base import ChatEndpoint
from .factory import create_chat_endpoint
from .models import PromptRequest, StreamingResponse, WireMessage
from .providers import HttpChatEndpoint

__all__ = [
    "ChatEndpoint",
    "create_chat_endpoint",
    "HttpChatEndpoint",
    "PromptRequest",
    "StreamingResponse",
    "WireMessage",
]
