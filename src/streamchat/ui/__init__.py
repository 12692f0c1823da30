"""Terminal UI module for streamchat.

Provides a Textual-based TUI for chatting with a streamed endpoint.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (messages, typing indicator, input bar, log panel)
- formatting.py: Terminal rendering of formatted HTML fragments
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes for the dark and light preferences
- screens.py: Modal dialogs (confirmation screens)
- callbacks.py: Controller integration (how the controller drives widgets)
- app.py: Application orchestration (user interaction flow)
"""

from .app import StreamChatApp, run_textual_tui
from .callbacks import TUIChatView
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, MessageBubble

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "MessageBubble",
    "StreamChatApp",
    "TUIChatView",
    "run_textual_tui",
]
