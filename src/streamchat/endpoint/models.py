from collections.abc import AsyncIterator

from pydantic import BaseModel, ConfigDict, Field


class StreamingResponse:
    """Wrapper for a streamed endpoint response body.

    Acts as an async iterator of raw byte chunks, in the order the transport
    delivers them. Decoding is left to the consumer because a multi-byte
    character may be split across two chunks.

    Usage:
        async with endpoint.stream_reply(request) as stream:
            async for chunk in stream:
                ...
    """

    def __init__(self, async_iter: AsyncIterator[bytes], status_code: int = 200):
        """Initialize with an async iterator of byte chunks.

        Args:
            async_iter: Async iterator yielding byte chunks
            status_code: HTTP status of the response
        """
        self._iter = async_iter
        self.status_code = status_code
        self.bytes_received = 0

    def __aiter__(self) -> "StreamingResponse":
        """Return self as async iterator."""
        return self

    async def __anext__(self) -> bytes:
        """Get next chunk from the underlying iterator."""
        chunk = await self._iter.__anext__()
        self.bytes_received += len(chunk)
        return chunk


class WireMessage(BaseModel):
    """A {role, content} pair as sent in the request history."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user' or 'assistant'")
    content: str = Field(description="Content of the message")


class PromptRequest(BaseModel):
    """Body of the POST sent to the chat endpoint."""

    model_config = ConfigDict(frozen=True)

    prompt: str = Field(description="The new user message")
    history: list[WireMessage] = Field(
        default_factory=list,
        description="Earlier messages of the conversation, oldest first"
    )
