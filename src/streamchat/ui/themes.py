"""Theme definitions for the TUI.

The saved preference has only two values, dark_mode and light_mode. Each
maps to one registered Textual theme; the palettes below are Nord Polar
Night for dark and Nord Snow Storm for light.
"""

from textual.theme import Theme as TextualTheme

from ..chat.models import Theme

STREAMCHAT_DARK = TextualTheme(
    name="streamchat-dark",
    primary="#88c0d0",      # Frost - borders and focus
    secondary="#b48ead",    # Aurora purple - assistant bubbles
    accent="#ebcb8b",       # Aurora yellow
    foreground="#eceff4",
    background="#242933",
    success="#a3be8c",      # Aurora green - user bubbles, Send
    warning="#d08770",      # Aurora orange - Stop
    error="#bf616a",        # Aurora red - error entries
    surface="#2e3440",
    panel="#3b4252",
    dark=True,
    variables={
        "border": "#4c566a",
        "scrollbar": "#434c5e",
        "scrollbar-hover": "#4c566a",
        "scrollbar-active": "#88c0d0",
        "footer-key-foreground": "#ebcb8b",
        "text-muted": "#7b88a1",
        "link-color": "#88c0d0",
    },
)

STREAMCHAT_LIGHT = TextualTheme(
    name="streamchat-light",
    primary="#5e81ac",
    secondary="#8f5e8a",
    accent="#c08b30",
    foreground="#2e3440",
    background="#eceff4",
    success="#5f8a46",
    warning="#c0603f",
    error="#b03a48",
    surface="#e5e9f0",
    panel="#d8dee9",
    dark=False,
    variables={
        "border": "#a5b0c4",
        "scrollbar": "#c5cdd9",
        "scrollbar-hover": "#a5b0c4",
        "scrollbar-active": "#5e81ac",
        "footer-key-foreground": "#c08b30",
        "text-muted": "#6b7589",
        "link-color": "#5e81ac",
    },
)

THEMES: dict[Theme, TextualTheme] = {
    Theme.DARK: STREAMCHAT_DARK,
    Theme.LIGHT: STREAMCHAT_LIGHT,
}


def textual_theme_name(theme: Theme) -> str:
    """Name of the registered Textual theme for a saved preference."""
    return THEMES[theme].name
