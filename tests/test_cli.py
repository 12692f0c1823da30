"""Tests for the Typer CLI commands."""
import asyncio

import pytest
from typer.testing import CliRunner

from conftest import FakeServer, make_endpoint

from streamchat.chat.models import ChatMessage, Role, Theme, Transcript
from streamchat.cli import app as cli_app
from streamchat.cli.providers import DEFAULT_ENDPOINT_URL, get_endpoint, get_store
from streamchat.storage.in_memory import InMemoryHistoryStore
from streamchat.storage.sqlite import SQLiteHistoryStore

runner = CliRunner()


def seed_history(path, theme: Theme = Theme.DARK) -> None:
    async def _seed():
        transcript = Transcript()
        transcript.append(ChatMessage(role=Role.USER, content="Hi"))
        transcript.append(ChatMessage(role=Role.ASSISTANT, content="**Hello**"))
        async with SQLiteHistoryStore(path) as store:
            await store.save(transcript)
            await store.save_theme(theme)

    asyncio.run(_seed())


def read_history(path):
    async def _read():
        async with SQLiteHistoryStore(path) as store:
            return await store.load()

    return asyncio.run(_read())


@pytest.fixture
def history_path(tmp_path):
    return tmp_path / "history.db"


class TestProviders:
    """Tests for environment-driven construction."""

    def test_endpoint_defaults(self, monkeypatch):
        monkeypatch.delenv("STREAMCHAT_ENDPOINT_URL", raising=False)
        assert get_endpoint().url == DEFAULT_ENDPOINT_URL

    def test_endpoint_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("STREAMCHAT_ENDPOINT_URL", "http://example.test/chat")
        assert get_endpoint().url == "http://example.test/chat"
        assert get_endpoint("http://override.test").url == "http://override.test"

    def test_store_from_environment(self, monkeypatch, history_path):
        monkeypatch.setenv("STREAMCHAT_STORE", "sqlite")
        monkeypatch.setenv("STREAMCHAT_HISTORY_PATH", str(history_path))
        store = get_store()
        assert isinstance(store, SQLiteHistoryStore)
        assert store.path == history_path

    def test_memory_store_override(self, monkeypatch):
        monkeypatch.setenv("STREAMCHAT_STORE", "sqlite")
        assert isinstance(get_store("memory"), InMemoryHistoryStore)


class TestExportCommand:
    """Tests for `streamchat export`."""

    def test_writes_transcript_markup(self, tmp_path, history_path):
        seed_history(history_path)
        output = tmp_path / "chat.html"

        result = runner.invoke(
            cli_app.app,
            ["export", str(output), "--store", "sqlite", "--history-path", str(history_path)],
        )

        assert result.exit_code == 0, result.output
        assert "Exported 2 message(s)" in result.output
        html = output.read_text(encoding="utf-8")
        assert '<div class="chat outgoing">' in html
        assert "<strong>Hello</strong>" in html

    def test_empty_history_exports_placeholder(self, tmp_path, history_path):
        output = tmp_path / "chat.html"

        result = runner.invoke(
            cli_app.app,
            ["export", str(output), "--store", "sqlite", "--history-path", str(history_path)],
        )

        assert result.exit_code == 0, result.output
        assert 'class="default-text"' in output.read_text(encoding="utf-8")


class TestClearCommand:
    """Tests for `streamchat clear`."""

    def test_yes_clears_and_keeps_theme(self, history_path):
        seed_history(history_path, theme=Theme.LIGHT)

        result = runner.invoke(
            cli_app.app,
            ["clear", "--yes", "--store", "sqlite", "--history-path", str(history_path)],
        )

        assert result.exit_code == 0, result.output
        persisted = read_history(history_path)
        assert persisted.transcript.is_empty
        assert persisted.theme is Theme.LIGHT

    def test_declined_prompt_keeps_history(self, history_path):
        seed_history(history_path)

        result = runner.invoke(
            cli_app.app,
            ["clear", "--store", "sqlite", "--history-path", str(history_path)],
            input="n\n",
        )

        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert len(read_history(history_path).transcript) == 2


class TestAskCommand:
    """Tests for `streamchat ask`."""

    def test_streams_reply_and_saves_history(self, monkeypatch, history_path):
        server = FakeServer([b"Hello", b" there"])
        monkeypatch.setattr(cli_app, "get_endpoint", lambda url=None: make_endpoint(server))
        seed_history(history_path)

        result = runner.invoke(
            cli_app.app,
            ["ask", "How are you?", "--store", "sqlite", "--history-path", str(history_path)],
        )

        assert result.exit_code == 0, result.output
        assert server.requests[0]["prompt"] == "How are you?"
        assert len(server.requests[0]["history"]) == 2
        messages = read_history(history_path).transcript.messages
        assert [m.content for m in messages[-2:]] == ["How are you?", "Hello there"]

    def test_endpoint_error_exits_nonzero(self, monkeypatch):
        server = FakeServer(status_code=500)
        monkeypatch.setattr(cli_app, "get_endpoint", lambda url=None: make_endpoint(server))

        result = runner.invoke(cli_app.app, ["ask", "Hi", "--store", "memory"])

        assert result.exit_code == 1
        assert "Something went wrong" in result.output
