from typing import Any

from .base import ChatEndpoint
from .providers import HttpChatEndpoint


def create_chat_endpoint(kind: str = "http", **config: Any) -> ChatEndpoint:
    """Create a chat endpoint instance.

    This factory function hides the instantiation logic for endpoint kinds.

    Args:
        kind: Endpoint type ('http')
        **config: Endpoint-specific configuration
            For HTTP:
                - url: str (required)
                - timeout: float (default: 120.0)
                - client: httpx.AsyncClient | None

    Returns:
        Initialized chat endpoint instance

    Raises:
        ValueError: If endpoint type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> endpoint = create_chat_endpoint(
        ...     "http",
        ...     url="http://127.0.0.1:3000/run-model"
        ... )
    """
    kind_lower = kind.lower()

    if kind_lower == "http":
        if "url" not in config:
            raise TypeError("HTTP endpoint requires 'url' in config")
        return HttpChatEndpoint(**config)

    raise ValueError(
        f"Unsupported endpoint: {kind}. "
        f"Supported endpoints: 'http'"
    )
