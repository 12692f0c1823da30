"""Error types shared across streamchat modules.

Every failure is terminal for the exchange it belongs to; nothing here is
retried.
"""


class StreamChatError(Exception):
    """Base class for streamchat errors."""


class EndpointError(StreamChatError):
    """The chat endpoint could not be reached or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(message)
        self.status_code = status_code


class StoreNotConnectedError(StreamChatError):
    """A history store was used before connect() or after disconnect()."""

    def __init__(self, backend: str):
        super().__init__(f"History store '{backend}' is not connected")
        self.backend = backend
