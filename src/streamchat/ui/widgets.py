"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Chat message rendering and the typing indicator
- Enter-to-send handling and input history
- Send/Stop visibility
- Log rendering and level filtering
"""

from collections import deque
from datetime import datetime

import pyperclip
from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click, Key
from textual.message import Message
from textual.widgets import Button, RichLog, Static, TextArea

from ..chat.controller import should_submit_on_enter
from ..chat.markup import PLACEHOLDER_BODY, PLACEHOLDER_TITLE
from ..chat.models import ChatMessage, Role, Transcript
from ..formatting import parse_markdown
from .config import (
    COPY_FEEDBACK_TIMEOUT,
    INPUT_HISTORY_MAX_SIZE,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    LogLevel,
)
from .formatting import html_to_text


def copy_text(widget, text: str, label: str = "Copied") -> None:
    """Copy text to the system clipboard, falling back to the terminal (OSC 52)."""
    try:
        pyperclip.copy(text)
        widget.app.notify(label, timeout=COPY_FEEDBACK_TIMEOUT)
    except pyperclip.PyperclipException:
        widget.app.copy_to_clipboard(text)
        widget.app.notify(f"{label} (terminal)", timeout=COPY_FEEDBACK_TIMEOUT)


class TypingIndicator(Static):
    """Animated dots shown while waiting for the first chunk of a reply."""

    FRAMES = ("●  ", "●● ", "●●●", " ●●", "  ●", "   ")

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(self.FRAMES[0], *args, **kwargs)
        self._frame = 0

    def on_mount(self) -> None:
        self.set_interval(0.2, self._advance)

    def _advance(self) -> None:
        self._frame = (self._frame + 1) % len(self.FRAMES)
        self.update(self.FRAMES[self._frame])


class MessageBubble(Vertical):
    """A chat message container that copies its text when clicked.

    Assistant bubbles start as a typing indicator and are filled in chunk by
    chunk through set_html().
    """

    def __init__(
        self,
        role: Role,
        content: str = "",
        *,
        pending: bool = False,
        is_error: bool = False,
        **kwargs,
    ) -> None:
        direction = "outgoing" if role is Role.USER else "incoming"
        classes = direction
        if is_error:
            classes += " error"
        super().__init__(classes=classes, **kwargs)
        self.role = role
        self._copy_text = content

        header = "> You" if role is Role.USER else "< Assistant"
        self._typing = TypingIndicator()
        self._body = Static("", classes="message-content")
        self.compose_add_child(Static(header, classes="message-header", markup=False))
        self.compose_add_child(self._typing)
        self.compose_add_child(self._body)

        self._typing.display = pending
        self._body.display = not pending
        if is_error:
            self._body.update(Text(content))
        elif content:
            self.set_html(parse_markdown(content))

    @classmethod
    def for_message(cls, message: ChatMessage) -> "MessageBubble":
        return cls(message.role, message.content, is_error=message.is_error)

    def start_reply(self) -> None:
        """Swap the typing indicator for an empty reply body."""
        self._typing.display = False
        self._body.display = True

    def set_html(self, html: str) -> None:
        """Show a formatted fragment as the message body."""
        rendered = html_to_text(html)
        self._copy_text = rendered.plain
        self._body.update(rendered)

    def show_error(self, text: str) -> None:
        """Replace the body (or typing indicator) with an error message."""
        self.add_class("error")
        self.start_reply()
        self._copy_text = text
        self._body.update(Text(text))

    def on_click(self, event: Click) -> None:
        """Copy message content to clipboard when clicked."""
        event.stop()
        copy_text(self, self._copy_text)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat transcript, rendered from the controller's messages."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._message_count = 0
        self._pending: MessageBubble | None = None
        self._pending_counted = False

    def show_transcript(self, transcript: Transcript) -> None:
        """Replace all content with the transcript, or the placeholder."""
        self.remove_children()
        self._message_count = 0
        self._pending = None
        if transcript.is_empty:
            placeholder = Text.assemble((PLACEHOLDER_TITLE, "bold"), "\n\n", PLACEHOLDER_BODY)
            self.mount(Static(placeholder, classes="default-text"))
            self.border_subtitle = "Conversation history"
            return
        for message in transcript.messages:
            self.add_message(message)

    def _remove_placeholder(self) -> None:
        self.query(".default-text").remove()

    def _count(self) -> None:
        self._message_count += 1
        self.border_subtitle = f"{self._message_count} messages"

    def add_message(self, message: ChatMessage) -> None:
        """Add a finished message to the end of the view."""
        self._remove_placeholder()
        self.mount(MessageBubble.for_message(message))
        self._count()

    def show_typing(self) -> None:
        """Add an assistant bubble showing the typing indicator."""
        self._remove_placeholder()
        self._pending = MessageBubble(Role.ASSISTANT, pending=True)
        self._pending_counted = False
        self.mount(self._pending)
        self.scroll_end(animate=False)

    def begin_response(self) -> MessageBubble:
        """Turn the pending bubble into the node the reply streams into."""
        if self._pending is None:
            self.show_typing()
        bubble = self._pending
        bubble.start_reply()
        self._count()
        self._pending_counted = True
        return bubble

    def show_error(self, message: ChatMessage) -> None:
        """Show the error entry in the pending bubble, replacing any partial reply."""
        if self._pending is None:
            self.show_typing()
        self._pending.show_error(message.content)
        if not self._pending_counted:
            self._count()
        self._pending = None

    def end_response(self) -> None:
        self._pending = None


class ChatTextArea(TextArea):
    """TextArea where Enter sends the message.

    Shift+Enter, and Enter on a narrow terminal, insert a newline instead.
    Ctrl+J always sends (most terminals cannot report Shift+Enter).
    """

    class SendRequested(Message):
        """Posted when a key press asks to send the current text."""

    async def _on_key(self, event: Key) -> None:
        if event.key == "ctrl+j" or (
            event.key == "enter"
            and should_submit_on_enter(shift=False, width=self.app.size.width)
        ):
            event.stop()
            event.prevent_default()
            self.post_message(self.SendRequested())
            return
        if event.key == "shift+enter":
            event.stop()
            event.prevent_default()
            self.insert("\n")
            return
        await super()._on_key(event)


class InputHistory:
    """Previously sent prompts, recalled newest first with Up/Down."""

    def __init__(self, max_size: int = INPUT_HISTORY_MAX_SIZE) -> None:
        self._entries: deque[str] = deque(maxlen=max_size)
        self._cursor: int | None = None

    def record(self, text: str) -> None:
        if not self._entries or self._entries[-1] != text:
            self._entries.append(text)
        self._cursor = None

    def older(self) -> str | None:
        """Step back one entry; stays on the oldest once reached."""
        if not self._entries:
            return None
        if self._cursor is None:
            self._cursor = len(self._entries) - 1
        else:
            self._cursor = max(self._cursor - 1, 0)
        return self._entries[self._cursor]

    def newer(self) -> str | None:
        """Step forward one entry; past the newest returns an empty draft."""
        if self._cursor is None:
            return None
        if self._cursor >= len(self._entries) - 1:
            self._cursor = None
            return ""
        self._cursor += 1
        return self._entries[self._cursor]


class ChatInputBar(Horizontal):
    """Text area plus a Send button that turns into Stop while a reply streams."""

    class Submitted(Message):
        """Posted with the stripped text when the user sends a prompt."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class StopRequested(Message):
        """Posted when the Stop button is pressed."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history = InputHistory()
        self._busy = False

    def compose(self):
        text_area = ChatTextArea(id="chat-input", show_line_numbers=False)
        text_area.highlight_cursor_line = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Enter / Ctrl+J)"
        )
        yield Button("Stop", id="stop-btn", variant="warning").with_tooltip(
            "Stop the reply (Esc)"
        )

    def on_mount(self) -> None:
        self.set_busy(False)

    @property
    def text_area(self) -> ChatTextArea:
        return self.query_one("#chat-input", ChatTextArea)

    @property
    def busy(self) -> bool:
        return self._busy

    def set_busy(self, busy: bool) -> None:
        """Busy hides Send and shows Stop; idle does the reverse."""
        self._busy = busy
        self.query_one("#send-btn", Button).display = not busy
        self.query_one("#stop-btn", Button).display = busy

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "stop-btn":
            self.post_message(self.StopRequested())
        else:
            self._submit()

    def on_chat_text_area_send_requested(self, event: ChatTextArea.SendRequested) -> None:
        event.stop()
        self._submit()

    def on_key(self, event: Key) -> None:
        # Recall only from the first or last position so normal cursor
        # movement inside a multi-line draft still works
        text_area = self.text_area
        if event.key == "up" and text_area.cursor_location == (0, 0):
            recalled = self._history.older()
        elif event.key == "down" and text_area.cursor_location == text_area.document.end:
            recalled = self._history.newer()
        else:
            return
        event.stop()
        event.prevent_default()
        if recalled is not None:
            text_area.text = recalled
            text_area.move_cursor(text_area.document.end)

    def _submit(self) -> None:
        text_area = self.text_area
        value = text_area.text.strip()
        if self._busy or not value:
            return
        self._history.record(value)
        text_area.clear()
        self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        self.text_area.focus()


_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}

_COMPONENT_STYLES = {
    "TUI": "cyan",
    "Chat": "green",
}


class DebugPanel(RichLog):
    """Hidden-by-default trace log with a level threshold.

    Shown with --log-level or toggled with Ctrl+D. Entries below the
    threshold are dropped, not just hidden.
    """

    BORDER_TITLE = "Log"

    def __init__(self, *args, log_level: LogLevel = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=False, highlight=False, auto_scroll=True, wrap=True, **kwargs)
        self._log_level = log_level

    @property
    def log_level(self) -> LogLevel:
        return self._log_level

    @log_level.setter
    def log_level(self, level: LogLevel) -> None:
        self._log_level = level
        self._refresh_subtitle()

    def _refresh_subtitle(self) -> None:
        self.border_subtitle = f"≥ {self._log_level.name}" if self.display else "Hidden"

    def on_mount(self) -> None:
        self.display = False
        self._refresh_subtitle()

    def add_entry(self, component: str, message: str, level: LogLevel = LogLevel.DEBUG) -> None:
        """Append a timestamped line if level passes the threshold."""
        if level < self._log_level:
            return
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        self.write(
            Text.assemble(
                (datetime.now().strftime(LOG_TIMESTAMP_FORMAT), "dim"),
                " ",
                (f"{level.name:<7}", _LEVEL_STYLES[level]),
                " ",
                (f"[{component}]", _COMPONENT_STYLES.get(component, "white")),
                " ",
                message,
            )
        )

    def info(self, component: str, message: str) -> None:
        self.add_entry(component, message, LogLevel.INFO)

    def show(self) -> None:
        self.display = True
        self._refresh_subtitle()

    def hide(self) -> None:
        self.display = False
        self._refresh_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return whether the panel is now shown."""
        if self.display:
            self.hide()
        else:
            self.show()
        return self.display
