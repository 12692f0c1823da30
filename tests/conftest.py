"""Pytest configuration and shared fixtures."""
import json

import httpx
import pytest

from streamchat.chat.controller import ChatView
from streamchat.chat.models import ChatMessage, Theme, Transcript
from streamchat.chat.stream import ResponseTarget
from streamchat.endpoint import HttpChatEndpoint
from streamchat.storage.in_memory import InMemoryHistoryStore

ENDPOINT_URL = "http://chat.test/run-model"


class RecordingTarget(ResponseTarget):
    """Response node that keeps every HTML update it receives."""

    def __init__(self, on_update=None):
        self.updates: list[str] = []
        self.scrolls = 0
        self._on_update = on_update

    @property
    def html(self) -> str:
        return self.updates[-1] if self.updates else ""

    def update(self, html: str) -> None:
        self.updates.append(html)
        if self._on_update is not None:
            self._on_update(self)

    def scroll_into_view(self) -> None:
        self.scrolls += 1


class FakeView(ChatView):
    """ChatView that records what the controller asked it to show."""

    def __init__(self, on_update=None):
        self.theme: Theme | None = None
        self.shown_transcripts: list[list[ChatMessage]] = []
        self.messages: list[ChatMessage] = []
        self.errors: list[ChatMessage] = []
        self.targets: list[RecordingTarget] = []
        self.busy_calls: list[bool] = []
        self.typing_shown = 0
        self._on_update = on_update

    @property
    def busy(self) -> bool:
        return self.busy_calls[-1] if self.busy_calls else False

    def apply_theme(self, theme: Theme) -> None:
        self.theme = theme

    def show_transcript(self, transcript: Transcript) -> None:
        self.shown_transcripts.append(list(transcript.messages))

    def append_message(self, message: ChatMessage) -> None:
        self.messages.append(message)

    def show_typing(self) -> None:
        self.typing_shown += 1

    def begin_response(self) -> ResponseTarget:
        target = RecordingTarget(self._on_update)
        self.targets.append(target)
        return target

    def show_error(self, message: ChatMessage) -> None:
        self.errors.append(message)

    def set_busy(self, busy: bool) -> None:
        self.busy_calls.append(busy)

    def scroll_to_end(self) -> None:
        pass


class FakeServer:
    """MockTransport handler that streams canned chunks and records requests."""

    def __init__(self, chunks: list[bytes] | None = None, status_code: int = 200, fail_after: int | None = None):
        self.chunks = chunks or []
        self.status_code = status_code
        self.fail_after = fail_after
        self.requests: list[dict] = []

    async def _body(self):
        for index, chunk in enumerate(self.chunks):
            if self.fail_after is not None and index == self.fail_after:
                raise httpx.ReadError("connection dropped")
            yield chunk

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        if self.status_code >= 400:
            return httpx.Response(self.status_code, text="Bad vibes")
        return httpx.Response(
            self.status_code,
            headers={"Content-Type": "text/plain"},
            content=self._body(),
        )


def make_endpoint(server: FakeServer) -> HttpChatEndpoint:
    client = httpx.AsyncClient(transport=httpx.MockTransport(server))
    return HttpChatEndpoint(ENDPOINT_URL, client=client)


@pytest.fixture
def view():
    return FakeView()


@pytest.fixture
def store():
    return InMemoryHistoryStore()


@pytest.fixture
def server():
    return FakeServer([b"Hello", b" **world**"])


@pytest.fixture
def endpoint(server):
    return make_endpoint(server)
