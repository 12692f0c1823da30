"""Data models for the chat transcript.

The transcript is the source of truth for the conversation; the chat view
only renders it.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Sender of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class Theme(str, Enum):
    """Display theme preference."""

    DARK = "dark_mode"
    LIGHT = "light_mode"

    def toggled(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


class ExchangeState(str, Enum):
    """Lifecycle of one prompt/response exchange."""

    IDLE = "idle"
    SENDING = "sending"
    STREAMING = "streaming"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ERRORED = "errored"


class ChatMessage(BaseModel):
    """A single message in the conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Role of the message sender: 'user' or 'assistant'")
    content: str = Field(description="Raw (unformatted) message text")
    is_error: bool = Field(
        default=False,
        description="True for the generic error entry shown in place of a response"
    )

    def to_wire(self) -> dict[str, str]:
        """Return the {role, content} pair sent to the endpoint."""
        return {"role": self.role.value, "content": self.content}


class Transcript(BaseModel):
    """Ordered sequence of chat messages, in render order."""

    messages: list[ChatMessage] = Field(default_factory=list)

    def append(self, message: ChatMessage) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()

    @property
    def is_empty(self) -> bool:
        return not self.messages

    def __len__(self) -> int:
        return len(self.messages)

    def history(self) -> list[dict[str, str]]:
        """Wire history for the next request (error entries are not sent)."""
        return [msg.to_wire() for msg in self.messages if not msg.is_error]

    def last_response(self) -> str | None:
        """Get the last non-error assistant response."""
        for msg in reversed(self.messages):
            if msg.role is Role.ASSISTANT and not msg.is_error:
                return msg.content
        return None

    def to_blob(self) -> str:
        """Serialize for the history store."""
        return self.model_dump_json()

    @classmethod
    def from_blob(cls, blob: str) -> "Transcript":
        return cls.model_validate_json(blob)


class PersistedState(BaseModel):
    """State read from the history store at startup."""

    transcript: Transcript = Field(default_factory=Transcript)
    theme: Theme = Theme.DARK
