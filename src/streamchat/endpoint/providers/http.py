from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx

from ...exceptions import EndpointError
from ..base import ChatEndpoint
from ..models import PromptRequest, StreamingResponse


class HttpChatEndpoint(ChatEndpoint):
    """Chat endpoint reached with a plain HTTP POST.

    Hidden design decisions:
    - One shared httpx.AsyncClient per endpoint instance
    - JSON request body, unauthenticated
    - Response body is opaque streamed text, read as raw byte chunks
    - Every transport failure surfaces as EndpointError, no retries
    """

    def __init__(
        self,
        url: str,
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the endpoint.

        Args:
            url: Full URL of the streaming endpoint
            timeout: Seconds allowed for connect and for each read
            client: Preconfigured client (tests pass one with a MockTransport)
        """
        self._url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def url(self) -> str:
        return self._url

    @asynccontextmanager
    async def stream_reply(
        self,
        request: PromptRequest,
    ) -> AsyncIterator[StreamingResponse]:
        """Stream the endpoint's reply to one prompt."""
        try:
            async with self._client.stream(
                "POST",
                self._url,
                json=request.model_dump(),
                headers={"Content-Type": "application/json"},
            ) as response:
                if not response.is_success:
                    raise EndpointError(
                        "Chat endpoint returned an error", status_code=response.status_code
                    )
                yield StreamingResponse(
                    self._iter_chunks(response), status_code=response.status_code
                )
        except httpx.HTTPError as e:
            raise EndpointError(f"Chat endpoint request failed: {e}") from e

    async def _iter_chunks(self, response: httpx.Response) -> AsyncIterator[bytes]:
        try:
            async for chunk in response.aiter_bytes():
                yield chunk
        except httpx.HTTPError as e:
            raise EndpointError(f"Chat endpoint stream interrupted: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client if this endpoint created it."""
        if self._owns_client:
            await self._client.aclose()
