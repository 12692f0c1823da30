"""Unit tests for incremental stream consumption."""
import pytest

from conftest import RecordingTarget

from streamchat.chat.stream import StreamOutcome, StreamSession, consume_stream
from streamchat.formatting import parse_markdown


async def chunks_of(*parts: bytes):
    for part in parts:
        yield part


class CountingFormatter:
    """Formatter wrapper that records every call."""

    def __init__(self):
        self.calls: list[str] = []

    def __call__(self, text: str) -> str:
        self.calls.append(text)
        return parse_markdown(text)


class TestStreamSession:
    """Tests for per-request decoding state."""

    def test_multibyte_character_split_across_chunks(self):
        session = StreamSession()
        assert session.feed(b"caf\xc3") == "caf"
        assert session.feed(b"\xa9") == "é"
        assert session.text == "café"
        assert session.chunks_received == 2

    def test_flush_replaces_truncated_character(self):
        session = StreamSession()
        session.feed(b"ok\xe2\x82")
        session.flush()
        assert session.text == "ok�"

    def test_cancel_sets_flag(self):
        session = StreamSession()
        assert not session.cancelled
        session.cancel()
        assert session.cancelled


class TestConsumeStream:
    """Tests for the stream loop."""

    @pytest.mark.asyncio
    async def test_completed_stream_renders_accumulated_text(self):
        session = StreamSession()
        target = RecordingTarget()

        outcome = await consume_stream(chunks_of(b"Hello", b" **world**"), session, target)

        assert outcome is StreamOutcome.COMPLETED
        assert session.text == "Hello **world**"
        assert target.updates[0] == "Hello"
        assert target.html == "Hello <strong>world</strong>"

    @pytest.mark.asyncio
    async def test_formatter_runs_once_per_chunk_plus_final(self):
        """Three chunks mean three incremental renders and one final render."""
        formatter = CountingFormatter()
        target = RecordingTarget()

        await consume_stream(chunks_of(b"a", b"b", b"c"), StreamSession(), target, formatter)

        assert formatter.calls == ["a", "ab", "abc", "abc"]
        assert len(target.updates) == 4
        assert target.scrolls == 4

    @pytest.mark.asyncio
    async def test_split_multibyte_character_never_rendered_broken(self):
        target = RecordingTarget()

        await consume_stream(chunks_of(b"\xc3", b"\xa9"), StreamSession(), target)

        assert target.updates == ["", "é", "é"]
        assert all("�" not in update for update in target.updates)

    @pytest.mark.asyncio
    async def test_empty_body_renders_empty_reply(self):
        target = RecordingTarget()

        outcome = await consume_stream(chunks_of(), StreamSession(), target)

        assert outcome is StreamOutcome.COMPLETED
        assert target.updates == [""]

    @pytest.mark.asyncio
    async def test_cancel_discards_next_chunk(self):
        """A chunk read after cancellation is never rendered."""
        session = StreamSession()

        def cancel_after_first(target: RecordingTarget) -> None:
            session.cancel()

        target = RecordingTarget(on_update=cancel_after_first)

        outcome = await consume_stream(chunks_of(b"first", b"second", b"third"), session, target)

        assert outcome is StreamOutcome.CANCELLED
        assert session.text == "first"
        assert session.chunks_received == 1
        assert target.html == "first"

    @pytest.mark.asyncio
    async def test_cancel_before_first_chunk(self):
        session = StreamSession()
        session.cancel()
        target = RecordingTarget()

        outcome = await consume_stream(chunks_of(b"ignored"), session, target)

        assert outcome is StreamOutcome.CANCELLED
        assert session.text == ""
        assert target.updates == [""]

    @pytest.mark.asyncio
    async def test_iterator_errors_propagate(self):
        async def broken():
            yield b"partial"
            raise ConnectionError("dropped")

        target = RecordingTarget()

        with pytest.raises(ConnectionError):
            await consume_stream(broken(), StreamSession(), target)

        assert target.updates == ["partial"]
