"""UI configuration constants.

Centralizes the tunables of the TUI: log levels, input history and the
delays used for toasts.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of a log panel entry.

    Ordered like the stdlib logging levels so a threshold comparison
    filters out everything more verbose than the chosen level.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """Parse a --log-level value; unknown names fall back to DEBUG."""
        return cls.__members__.get(level_str.strip().upper(), cls.DEBUG)


# Recalled with Up/Down in the input bar
INPUT_HISTORY_MAX_SIZE = 100

LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Longer log lines are cut and end in "..."

# Toast durations (seconds)
COPY_FEEDBACK_TIMEOUT = 1
STATUS_TOAST_TIMEOUT = 2

DELETE_CONFIRMATION_PROMPT = "Are you sure you want to delete all chats?"
