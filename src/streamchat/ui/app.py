"""Main Textual TUI application.

Orchestrates the UI components and hands user interaction to the
ChatController.
"""

import asyncio
import contextlib

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..chat.controller import TYPING_DELAY_SECONDS, ChatController
from ..endpoint.base import ChatEndpoint
from ..storage.base import HistoryStore
from .callbacks import TUIChatView, make_log_callback
from .config import DELETE_CONFIRMATION_PROMPT, STATUS_TOAST_TIMEOUT, LogLevel
from .screens import ConfirmationScreen
from .styles import APP_CSS
from .themes import THEMES
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, copy_text


class StreamChatApp(App):
    """Textual TUI for a streamed chat endpoint."""

    CSS = APP_CSS
    TITLE = "StreamChat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("escape", "stop", "Stop"),
        Binding("ctrl+t", "toggle_theme", "Theme"),
        Binding("ctrl+x", "delete_all", "Delete Chats", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        endpoint: ChatEndpoint,
        store: HistoryStore,
        log_level: str | None = None,
        typing_delay: float = TYPING_DELAY_SECONDS,
    ) -> None:
        super().__init__()
        self._endpoint = endpoint
        self._store = store
        self._log_level = log_level
        self._typing_delay = typing_delay
        self._controller: ChatController | None = None

    @property
    def controller(self) -> ChatController:
        if self._controller is None:
            raise RuntimeError("StreamChatApp is not mounted")
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        for theme in THEMES.values():
            self.register_theme(theme)

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled at {log_panel.log_level.name}")

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        view = TUIChatView(self, self.query_one("#chat-history", ChatHistoryWidget), input_bar)
        self._controller = ChatController(
            view,
            self._endpoint,
            self._store,
            typing_delay=self._typing_delay,
            log=make_log_callback(log_panel),
        )
        self.sub_title = f"{getattr(self._endpoint, 'url', 'endpoint')} | {self._store.backend_type}"

        await self._controller.start()
        input_bar.focus_input()

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._controller is None or not self._controller.is_idle:
            return
        self._run_exchange(event.value)

    @work(exclusive=True, group="exchange")
    async def _run_exchange(self, user_input: str) -> None:
        """Run one exchange as a background async worker.

        Storage failures are not caught here: they end the app like any
        other unhandled worker error.
        """
        await self.controller.submit(user_input)

    def on_chat_input_bar_stop_requested(self, event: ChatInputBar.StopRequested) -> None:
        self.action_stop()

    def action_stop(self) -> None:
        """Stop the streaming reply at its next chunk."""
        if self._controller is not None and self._controller.stop():
            self.notify("Stopping...", severity="warning", timeout=STATUS_TOAST_TIMEOUT)

    async def action_toggle_theme(self) -> None:
        """Flip between the dark and light themes and remember the choice."""
        theme = await self.controller.toggle_theme()
        self.notify(f"Theme: {theme.value}", timeout=STATUS_TOAST_TIMEOUT)

    @work(group="dialogs")
    async def action_delete_all(self) -> None:
        """Delete every saved chat after confirmation."""
        async def confirm() -> bool:
            return bool(await self.push_screen_wait(ConfirmationScreen(DELETE_CONFIRMATION_PROMPT)))

        if await self.controller.delete_all(confirm):
            self.notify("Chats deleted", timeout=STATUS_TOAST_TIMEOUT)
        elif not self.controller.is_idle:
            self.notify("Stop the reply before deleting chats", severity="warning", timeout=3)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        response = self.controller.transcript.last_response()
        if response:
            copy_text(self.query_one("#chat-history", ChatHistoryWidget), response, "Response copied")
        else:
            self.notify("No response to copy", severity="warning")

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=STATUS_TOAST_TIMEOUT)


async def run_textual_tui(
    endpoint: ChatEndpoint,
    store: HistoryStore,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        endpoint: Chat endpoint that streams replies
        store: History store for transcript and theme
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = StreamChatApp(endpoint=endpoint, store=store, log_level=log_level)
    await store.connect()
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await store.disconnect()
        with contextlib.suppress(RuntimeError):
            await endpoint.close()
