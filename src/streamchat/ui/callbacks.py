"""Controller integration for the TUI.

Hides the details of how the chat controller drives Textual widgets:
the controller talks to a ChatView, and this module adapts the view
calls onto the app's widgets.
"""

from typing import TYPE_CHECKING

from ..chat.controller import ChatView
from ..chat.models import ChatMessage, Theme, Transcript
from ..chat.stream import ResponseTarget
from .config import LogLevel
from .themes import textual_theme_name

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, MessageBubble


class BubbleTarget(ResponseTarget):
    """Streams reply updates into a MessageBubble."""

    def __init__(self, bubble: "MessageBubble", chat: "ChatHistoryWidget") -> None:
        self._bubble = bubble
        self._chat = chat

    def update(self, html: str) -> None:
        self._bubble.set_html(html)

    def scroll_into_view(self) -> None:
        self._chat.scroll_end(animate=False)


class TUIChatView(ChatView):
    """ChatView backed by the Textual widget tree."""

    def __init__(
        self,
        app: "App",
        chat: "ChatHistoryWidget",
        input_bar: "ChatInputBar",
    ) -> None:
        self.app = app
        self.chat = chat
        self.input_bar = input_bar

    def apply_theme(self, theme: Theme) -> None:
        self.app.theme = textual_theme_name(theme)
        self.app.screen.set_class(theme is Theme.LIGHT, "light-mode")

    def show_transcript(self, transcript: Transcript) -> None:
        self.chat.show_transcript(transcript)

    def append_message(self, message: ChatMessage) -> None:
        self.chat.add_message(message)

    def show_typing(self) -> None:
        self.chat.show_typing()

    def begin_response(self) -> ResponseTarget:
        return BubbleTarget(self.chat.begin_response(), self.chat)

    def show_error(self, message: ChatMessage) -> None:
        self.chat.show_error(message)

    def set_busy(self, busy: bool) -> None:
        self.input_bar.set_busy(busy)
        if not busy:
            self.chat.end_response()

    def scroll_to_end(self) -> None:
        self.chat.scroll_end(animate=False)


def make_log_callback(panel: "DebugPanel"):
    """Route controller log lines ("debug"/"info"/"warning"/"error") to the log panel."""

    def log_callback(level: str, component: str, message: str) -> None:
        panel.add_entry(component, message, LogLevel.from_string(level))

    return log_callback
