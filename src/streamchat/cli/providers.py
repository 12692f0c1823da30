"""Provider factory functions for CLI.

Centralizes creation of the chat endpoint and history store from
environment variables. Hides configuration details from command
implementations.
"""

import os
from typing import Any

from ..endpoint import create_chat_endpoint
from ..storage import create_history_store

DEFAULT_ENDPOINT_URL = "http://127.0.0.1:3000/run-model"
DEFAULT_TIMEOUT = 120.0


def get_endpoint(url: str | None = None, timeout: float | None = None) -> Any:
    """Create the chat endpoint from environment variables.

    Args:
        url: Overrides STREAMCHAT_ENDPOINT_URL
        timeout: Overrides STREAMCHAT_TIMEOUT

    Returns:
        HTTP chat endpoint instance

    Environment variables:
        STREAMCHAT_ENDPOINT_URL: Streaming endpoint (default: http://127.0.0.1:3000/run-model)
        STREAMCHAT_TIMEOUT: Request timeout in seconds (default: 120)
    """
    return create_chat_endpoint(
        "http",
        url=url or os.getenv("STREAMCHAT_ENDPOINT_URL", DEFAULT_ENDPOINT_URL),
        timeout=timeout if timeout is not None else float(
            os.getenv("STREAMCHAT_TIMEOUT", str(DEFAULT_TIMEOUT))
        ),
    )


def get_store(backend: str | None = None, path: str | None = None) -> Any:
    """Create the history store from environment variables.

    Args:
        backend: Overrides STREAMCHAT_STORE
        path: Overrides STREAMCHAT_HISTORY_PATH (sqlite only)

    Returns:
        History store instance (not yet connected)

    Environment variables:
        STREAMCHAT_STORE: Store backend, sqlite or memory (default: sqlite)
        STREAMCHAT_HISTORY_PATH: SQLite file (default: ~/.streamchat/history.db)
    """
    backend = (backend or os.getenv("STREAMCHAT_STORE", "sqlite")).lower()
    config: dict[str, Any] = {}
    history_path = path or os.getenv("STREAMCHAT_HISTORY_PATH")
    if backend == "sqlite" and history_path:
        config["path"] = history_path
    return create_history_store(backend, **config)
