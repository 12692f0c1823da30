"""Modal screens for the TUI.

Only one dialog exists: the blocking confirmation asked before every saved
chat is deleted. Its look and keys are kept here so the app only sees a
ModalScreen that resolves to a bool.
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Grid
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ConfirmationScreen(ModalScreen[bool]):
    """Yes/No dialog that dismisses with True only on an explicit yes.

    Escape, "n" and the No button all count as a refusal.
    """

    DEFAULT_CSS = """
    ConfirmationScreen {
        align: center middle;
        background: $background 60%;
    }

    ConfirmationScreen > Grid {
        grid-size: 2;
        grid-gutter: 1 2;
        grid-rows: auto 3;
        width: 56;
        height: auto;
        padding: 1 2;
        border: thick $error 70%;
        background: $surface;
    }

    ConfirmationScreen .dialog-question {
        column-span: 2;
        width: 100%;
        content-align: center middle;
        text-style: bold;
    }

    ConfirmationScreen Button {
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("y", "answer(True)", "Yes", show=False),
        Binding("n,escape", "answer(False)", "No", show=False),
    ]

    def __init__(self, question: str) -> None:
        super().__init__()
        self._question = question

    def compose(self) -> ComposeResult:
        with Grid():
            with Center(classes="dialog-question"):
                yield Label(self._question)
            yield Button("Yes, delete", id="confirm-yes", variant="error")
            yield Button("Cancel", id="confirm-no", variant="primary")

    def on_mount(self) -> None:
        self.query_one("#confirm-no", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "confirm-yes")

    def action_answer(self, confirmed: bool) -> None:
        self.dismiss(confirmed)
