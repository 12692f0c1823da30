"""Incremental consumption of a streamed reply.

Hides how byte chunks become display updates: stream-aware UTF-8
decoding, the accumulating text buffer and cooperative cancellation.
"""

import codecs
from abc import ABC, abstractmethod
from collections.abc import AsyncIterable, Callable
from enum import Enum

from ..formatting import parse_markdown


class StreamOutcome(str, Enum):
    """How a stream loop ended."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ResponseTarget(ABC):
    """Display node that a streamed reply is written into."""

    @abstractmethod
    def update(self, html: str) -> None:
        """Replace the node's content with an HTML fragment."""

    @abstractmethod
    def scroll_into_view(self) -> None:
        """Bring the node into view after an update."""


class StreamSession:
    """Per-request state for one streamed reply.

    Created when a request starts and discarded when its stream ends.
    The cancellation flag is only read between chunks.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._parts: list[str] = []
        self._cancelled = False
        self.chunks_received = 0

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Request that the stream loop stop at its next chunk boundary."""
        self._cancelled = True

    @property
    def text(self) -> str:
        """Raw text received so far."""
        return "".join(self._parts)

    def feed(self, chunk: bytes) -> str:
        """Decode a chunk, buffering any incomplete trailing character."""
        self.chunks_received += 1
        decoded = self._decoder.decode(chunk)
        self._parts.append(decoded)
        return decoded

    def flush(self) -> str:
        """Decode whatever bytes are still pending at end of stream."""
        decoded = self._decoder.decode(b"", final=True)
        self._parts.append(decoded)
        return decoded


async def consume_stream(
    chunks: AsyncIterable[bytes],
    session: StreamSession,
    target: ResponseTarget,
    formatter: Callable[[str], str] = parse_markdown,
) -> StreamOutcome:
    """Read a reply chunk by chunk and render it into target.

    Only one read is in flight at a time and chunks are rendered in
    delivery order. Each chunk formats the accumulated buffer exactly once.
    A chunk that arrives after cancellation is discarded. Transport errors
    raised by the iterator propagate unchanged.

    Args:
        chunks: Response body as byte chunks
        session: State for this request; cancel() on it stops the loop
        target: Display node receiving the formatted text
        formatter: Markdown-to-HTML function

    Returns:
        COMPLETED when the body ended, CANCELLED when the session was cancelled
    """
    iterator = chunks.__aiter__()
    while True:
        try:
            chunk = await iterator.__anext__()
        except StopAsyncIteration:
            session.flush()
            outcome = StreamOutcome.COMPLETED
            break

        if session.cancelled:
            outcome = StreamOutcome.CANCELLED
            break

        session.feed(chunk)
        target.update(formatter(session.text))
        target.scroll_into_view()

    # Finalize: the whole buffer rendered once more as a single fragment
    target.update(formatter(session.text))
    target.scroll_into_view()
    return outcome
