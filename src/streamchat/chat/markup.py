"""HTML projection of a transcript.

The transcript is rendered to the same markup the chat view shows, so a
saved conversation can be exported as a standalone fragment.
"""

from ..formatting import parse_markdown
from .models import ChatMessage, Role, Transcript

PLACEHOLDER_TITLE = "StreamChat"
PLACEHOLDER_BODY = (
    "Chat with the model running on our servers. "
    "Your history stays on this machine and is never uploaded."
)


def render_placeholder_markup() -> str:
    """HTML for the default view shown when there is no saved conversation."""
    return (
        '<div class="default-text">'
        f"<h1>{PLACEHOLDER_TITLE}</h1>"
        f"<p>{PLACEHOLDER_BODY}</p>"
        "</div>"
    )


def render_message_markup(message: ChatMessage) -> str:
    direction = "outgoing" if message.role is Role.USER else "incoming"
    if message.is_error:
        body = f'<p class="error">{message.content}</p>'
    else:
        body = f"<p>{parse_markdown(message.content)}</p>"
    return (
        f'<div class="chat {direction}">'
        f'<div class="chat-content"><div class="chat-details">{body}</div></div>'
        "</div>"
    )


def render_transcript_markup(transcript: Transcript) -> str:
    """Render every message in order, or the placeholder when empty."""
    if transcript.is_empty:
        return render_placeholder_markup()
    return "\n".join(render_message_markup(msg) for msg in transcript.messages)
