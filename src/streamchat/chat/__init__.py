"""Chat core for streamchat.

Provides the transcript model, the stream consumer and the exchange
controller, independent of any display technology.
"""

from .controller import (
    GENERIC_ERROR_MESSAGE,
    ChatController,
    ChatView,
    should_submit_on_enter,
)
from .markup import render_transcript_markup
from .models import ChatMessage, ExchangeState, PersistedState, Role, Theme, Transcript
from .stream import ResponseTarget, StreamOutcome, StreamSession, consume_stream

__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "ChatController",
    "ChatMessage",
    "ChatView",
    "ExchangeState",
    "PersistedState",
    "ResponseTarget",
    "Role",
    "StreamOutcome",
    "StreamSession",
    "Theme",
    "Transcript",
    "consume_stream",
    "render_transcript_markup",
    "should_submit_on_enter",
]
