"""Exchange orchestration for the chat client.

Hides the user interaction flow from the display technology:
- Which state an exchange is in and which controls are enabled
- When the transcript is persisted
- How transport failures are reported

The Textual app implements ChatView; tests implement it with plain objects.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from ..endpoint.models import PromptRequest, WireMessage
from ..exceptions import EndpointError
from .models import ChatMessage, ExchangeState, Role, Theme, Transcript
from .stream import ResponseTarget, StreamOutcome, StreamSession, consume_stream

if TYPE_CHECKING:
    from ..endpoint.base import ChatEndpoint
    from ..storage.base import HistoryStore

GENERIC_ERROR_MESSAGE = (
    "Oops! Something went wrong while fetching the response. Please try again."
)

TYPING_DELAY_SECONDS = 0.5  # Pause between the user message and the typing indicator

# Viewports at or below this width are treated as a narrow (mobile) layout
NARROW_VIEWPORT_COLUMNS = 80

LogCallback = Callable[[str, str, str], None]


def should_submit_on_enter(shift: bool, width: int) -> bool:
    """Enter submits unless Shift is held or the viewport is narrow."""
    return not shift and width > NARROW_VIEWPORT_COLUMNS


class ChatView(ABC):
    """Display surface driven by ChatController."""

    @abstractmethod
    def apply_theme(self, theme: Theme) -> None:
        """Switch the display theme."""

    @abstractmethod
    def show_transcript(self, transcript: Transcript) -> None:
        """Replace the view with the transcript, or the placeholder if it is empty."""

    @abstractmethod
    def append_message(self, message: ChatMessage) -> None:
        """Render one finished message at the end of the view."""

    @abstractmethod
    def show_typing(self) -> None:
        """Show the pending-reply indicator."""

    @abstractmethod
    def begin_response(self) -> ResponseTarget:
        """Replace the typing indicator with an empty reply node."""

    @abstractmethod
    def show_error(self, message: ChatMessage) -> None:
        """Show the error entry in place of the typing indicator or partial reply."""

    @abstractmethod
    def set_busy(self, busy: bool) -> None:
        """Busy hides Send and shows Stop; idle does the reverse."""

    @abstractmethod
    def scroll_to_end(self) -> None:
        """Scroll the conversation to its last message."""


class ChatController:
    """Runs prompt/response exchanges against an endpoint.

    One exchange at a time: Idle -> Sending -> Streaming ->
    {Completed | Cancelled | Errored} -> Idle.
    """

    def __init__(
        self,
        view: ChatView,
        endpoint: "ChatEndpoint",
        store: "HistoryStore",
        typing_delay: float = TYPING_DELAY_SECONDS,
        log: LogCallback | None = None,
    ) -> None:
        self._view = view
        self._endpoint = endpoint
        self._store = store
        self._typing_delay = typing_delay
        self._log_callback = log
        self._transcript = Transcript()
        self._theme = Theme.DARK
        self._state = ExchangeState.IDLE
        self._last_outcome: ExchangeState | None = None
        self._session: StreamSession | None = None

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def state(self) -> ExchangeState:
        return self._state

    @property
    def last_outcome(self) -> ExchangeState | None:
        """COMPLETED, CANCELLED or ERRORED for the most recent exchange."""
        return self._last_outcome

    @property
    def is_idle(self) -> bool:
        return self._state is ExchangeState.IDLE

    def _log(self, level: str, message: str) -> None:
        if self._log_callback is not None:
            self._log_callback(level, "Chat", message)

    async def start(self) -> None:
        """Restore the saved transcript and theme into the view."""
        persisted = await self._store.load()
        self._transcript = persisted.transcript
        self._theme = persisted.theme
        self._view.apply_theme(self._theme)
        self._view.show_transcript(self._transcript)
        self._view.set_busy(False)
        self._view.scroll_to_end()
        self._log(
            "info",
            f"Loaded {len(self._transcript)} message(s) from {self._store.backend_type} store",
        )

    async def submit(self, text: str) -> bool:
        """Send a prompt and stream the reply into the view.

        Returns False without doing anything when the text is blank or an
        exchange is already running.
        """
        prompt = text.strip()
        if not prompt:
            return False
        if not self.is_idle:
            self._log("warning", f"Ignoring submit while {self._state.value}")
            return False

        history = [WireMessage(**pair) for pair in self._transcript.history()]
        user_message = ChatMessage(role=Role.USER, content=prompt)
        self._transcript.append(user_message)
        self._view.append_message(user_message)
        self._view.scroll_to_end()

        session = StreamSession()
        self._session = session
        self._state = ExchangeState.SENDING
        self._view.set_busy(True)
        self._log("info", f"Sending prompt ({len(prompt)} chars, {len(history)} history)")

        try:
            await asyncio.sleep(self._typing_delay)
            self._view.show_typing()
            outcome = await self._exchange(PromptRequest(prompt=prompt, history=history), session)
        finally:
            self._session = None
            self._state = ExchangeState.IDLE
            self._view.set_busy(False)

        self._last_outcome = outcome
        await self._store.save(self._transcript)
        self._view.scroll_to_end()
        return True

    async def _exchange(self, request: PromptRequest, session: StreamSession) -> ExchangeState:
        try:
            async with self._endpoint.stream_reply(request) as stream:
                target = self._view.begin_response()
                self._state = ExchangeState.STREAMING
                result = await consume_stream(stream, session, target)
        except EndpointError as e:
            self._log("error", str(e))
            error_message = ChatMessage(
                role=Role.ASSISTANT, content=GENERIC_ERROR_MESSAGE, is_error=True
            )
            self._transcript.append(error_message)
            self._view.show_error(error_message)
            return ExchangeState.ERRORED

        self._transcript.append(ChatMessage(role=Role.ASSISTANT, content=session.text))
        if result is StreamOutcome.CANCELLED:
            self._log("warning", f"Stopped after {session.chunks_received} chunk(s)")
            return ExchangeState.CANCELLED
        self._log("info", f"Reply complete: {session.chunks_received} chunk(s)")
        return ExchangeState.COMPLETED

    def stop(self) -> bool:
        """Ask the running exchange to stop at its next chunk.

        Returns False when nothing is running.
        """
        if self._session is None:
            return False
        self._session.cancel()
        self._log("info", "Stop requested")
        return True

    async def delete_all(self, confirm: Callable[[], Awaitable[bool]]) -> bool:
        """Clear the saved conversation after the user confirms.

        Not available while an exchange is running.
        """
        if not self.is_idle:
            self._log("warning", "Cannot delete chats while a reply is streaming")
            return False
        if not await confirm():
            return False
        await self._store.clear()
        self._transcript = Transcript()
        self._view.show_transcript(self._transcript)
        self._view.scroll_to_end()
        self._log("info", "All chats deleted")
        return True

    async def toggle_theme(self) -> Theme:
        """Flip between dark and light and persist the choice."""
        self._theme = self._theme.toggled()
        self._view.apply_theme(self._theme)
        await self._store.save_theme(self._theme)
        return self._theme
