"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console

from ..chat.controller import ChatController
from ..chat.markup import render_transcript_markup
from ..chat.models import ExchangeState
from .console import ConsoleChatView
from .providers import get_endpoint, get_store

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="streamchat",
    help="Terminal chat client for a streamed model endpoint",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

StoreOption = typer.Option(
    None,
    "--store",
    help="History store: 'sqlite' (persistent) or 'memory' (session-only)"
)
HistoryPathOption = typer.Option(
    None,
    "--history-path",
    help="Path for the SQLite history file (only with --store sqlite)"
)


@app.command("tui")
def tui_command(
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Streaming endpoint URL (default: $STREAMCHAT_ENDPOINT_URL)"
    ),
    store: str | None = StoreOption,
    history_path: str | None = HistoryPathOption,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch interactive TUI chat interface."""
    async def _tui():
        from ..ui import run_textual_tui

        await run_textual_tui(
            endpoint=get_endpoint(url),
            store=get_store(store, history_path),
            log_level=log_level,
        )

    asyncio.run(_tui())


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Message to send"),
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Streaming endpoint URL (default: $STREAMCHAT_ENDPOINT_URL)"
    ),
    store: str | None = StoreOption,
    history_path: str | None = HistoryPathOption,
):
    """Send one message, stream the reply, and add both to the saved history."""
    async def _ask() -> ExchangeState | None:
        endpoint = get_endpoint(url)
        history_store = get_store(store, history_path)
        try:
            async with history_store, endpoint:
                controller = ChatController(
                    ConsoleChatView(console), endpoint, history_store, typing_delay=0
                )
                await controller.start()
                if not await controller.submit(prompt):
                    console.print("[yellow]Nothing to send.[/yellow]")
                    return None
                return controller.last_outcome
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)

    outcome = asyncio.run(_ask())
    if outcome is ExchangeState.ERRORED:
        raise typer.Exit(code=1)


@app.command()
def export(
    output: Path = typer.Argument(
        ...,
        dir_okay=False,
        writable=True,
        help="HTML file to write"
    ),
    store: str | None = StoreOption,
    history_path: str | None = HistoryPathOption,
):
    """Write the saved conversation as an HTML fragment."""
    async def _export() -> int:
        async with get_store(store, history_path) as history_store:
            persisted = await history_store.load()
        output.write_text(render_transcript_markup(persisted.transcript), encoding="utf-8")
        return len(persisted.transcript)

    count = asyncio.run(_export())
    console.print(f"[green]Exported {count} message(s) to {output}[/green]")


@app.command()
def clear(
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Delete without asking for confirmation"
    ),
    store: str | None = StoreOption,
    history_path: str | None = HistoryPathOption,
):
    """Delete the saved conversation (the theme preference is kept)."""
    if not yes and not typer.confirm("Are you sure you want to delete all chats?"):
        console.print("[dim]Aborted.[/dim]")
        return

    async def _clear():
        async with get_store(store, history_path) as history_store:
            await history_store.clear()

    asyncio.run(_clear())
    console.print("[green]All chats deleted.[/green]")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
