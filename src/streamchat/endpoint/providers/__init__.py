from .http import HttpChatEndpoint

__all__ = ["HttpChatEndpoint"]
