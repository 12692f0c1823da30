"""Console rendering for one-shot commands.

Implements ChatView on a Rich console so `streamchat ask` runs through the
same controller as the TUI.
"""

from rich.console import Console
from rich.live import Live
from rich.text import Text

from ..chat.controller import ChatView
from ..chat.models import ChatMessage, Theme, Transcript
from ..chat.stream import ResponseTarget
from ..formatting import parse_markdown
from ..ui.formatting import html_to_text


class LiveTarget(ResponseTarget):
    """Re-renders the streamed reply in place with rich.live."""

    def __init__(self, live: Live) -> None:
        self._live = live

    def update(self, html: str) -> None:
        self._live.update(html_to_text(html))

    def scroll_into_view(self) -> None:
        self._live.refresh()


class ConsoleChatView(ChatView):
    """ChatView that prints the new exchange only; history is not replayed."""

    def __init__(self, console: Console) -> None:
        self.console = console
        self._live: Live | None = None
        self._status = None

    def apply_theme(self, theme: Theme) -> None:
        pass

    def show_transcript(self, transcript: Transcript) -> None:
        pass

    def append_message(self, message: ChatMessage) -> None:
        self.console.print(Text("You: ", style="bold yellow") + html_to_text(parse_markdown(message.content)))

    def show_typing(self) -> None:
        self._status = self.console.status("[dim]Waiting for reply...[/dim]")
        self._status.start()

    def _stop_typing(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def begin_response(self) -> ResponseTarget:
        self._stop_typing()
        self.console.print("[bold green]Assistant:[/bold green]")
        self._live = Live(Text(""), console=self.console, auto_refresh=False)
        self._live.start()
        return LiveTarget(self._live)

    def show_error(self, message: ChatMessage) -> None:
        self._stop_typing()
        if self._live is not None:
            self._live.update(Text(message.content, style="bold red"))
            self._live.refresh()
        else:
            self.console.print(Text(message.content, style="bold red"))

    def set_busy(self, busy: bool) -> None:
        if busy:
            return
        self._stop_typing()
        if self._live is not None:
            self._live.stop()
            self._live = None

    def scroll_to_end(self) -> None:
        pass
