from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Any

from .models import PromptRequest, StreamingResponse


class ChatEndpoint(ABC):
    """Abstract base class for chat endpoints.

    This module hides the design decision of how a reply is fetched.
    Implementations must handle transport-specific details like:
    - Client setup and connection reuse
    - Request encoding
    - Mapping transport failures and non-2xx statuses to EndpointError

    Supports async context manager protocol for proper resource cleanup:
        async with endpoint:
            async with endpoint.stream_reply(request) as stream:
                ...
        # Automatically cleaned up
    """

    @abstractmethod
    def stream_reply(
        self,
        request: PromptRequest,
    ) -> AbstractAsyncContextManager[StreamingResponse]:
        """Open a streamed reply for one prompt.

        Args:
            request: Prompt and conversation history

        Returns:
            Async context manager yielding a StreamingResponse of byte chunks.
            Leaving the context releases the underlying connection.

        Raises:
            EndpointError: Request rejected, connection failed or dropped,
                or non-2xx status
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "ChatEndpoint":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            # Suppress harmless cleanup errors from httpx/anyio
            if "Event loop is closed" not in str(e):
                raise
