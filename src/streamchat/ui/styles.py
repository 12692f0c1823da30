"""CSS for the TUI.

User bubbles lean right and assistant bubbles lean left, the way a chat
page lays them out. Colors come from the active theme variables only, so
switching between the dark and light theme needs no CSS change.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#chat-history {
    height: 1fr;
    padding: 1 2;
    background: $surface;
    scrollbar-gutter: stable;
    border: blank;
    border-title-align: left;
    border-subtitle-align: right;
    border-subtitle-color: $text-muted;

    &:focus-within {
        border: tall $primary 40%;
    }
}

.default-text {
    width: 100%;
    height: auto;
    margin: 4 8;
    text-align: center;
    color: $text-muted;
}

MessageBubble {
    height: auto;
    max-width: 90%;
    margin-bottom: 1;
    padding: 0 1;
}

MessageBubble.outgoing {
    margin-left: 10;
    border-right: outer $success;
    background: $success 10%;

    & .message-header {
        width: 100%;
        text-align: right;
        color: $success;
    }
}

MessageBubble.incoming {
    margin-right: 10;
    border-left: outer $secondary;
    background: $secondary 10%;

    & .message-header {
        color: $secondary;
    }
}

MessageBubble.incoming.error {
    border-left: outer $error;
    background: $error 15%;

    & .message-content {
        color: $error;
    }
}

.message-header {
    height: 1;
    text-style: bold;
}

.message-content {
    height: auto;
}

TypingIndicator {
    height: 1;
    color: $secondary;
}

#debug-panel {
    height: 10;
    border: round $warning 50%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    background: $panel;
}

ChatInputBar {
    height: 6;
    padding: 0 1;
    background: $panel;
    border-top: hkey $primary 50%;
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    background: $surface;
}

#send-btn, #stop-btn {
    width: 10;
    height: 3;
    margin-left: 1;
}

/* Light theme: stronger bubble fills to keep contrast on a pale background */
Screen.light-mode MessageBubble.outgoing {
    background: $success 18%;
}

Screen.light-mode MessageBubble.incoming {
    background: $secondary 18%;
}
"""
