"""Terminal rendering of formatted chat messages.

Hides how the HTML fragments produced by streamchat.formatting are shown
in a terminal: the fixed tag set is mapped onto Rich styles.
"""

import re

from rich.style import Style
from rich.text import Text

_TAG = re.compile(r"<(/?)(strong|em|code|pre|h[1-6]|a|hr|br)((?:\s[^<>]*)?)>")
_HREF = re.compile(r'href="([^"]*)"')

_TAG_STYLES = {
    "strong": Style(bold=True),
    "em": Style(italic=True),
    "code": Style(color="cyan"),
    "pre": Style(bgcolor="grey15"),
    "h1": Style(bold=True, underline=True),
    "h2": Style(bold=True, underline=True),
    "h3": Style(bold=True),
    "h4": Style(bold=True),
    "h5": Style(bold=True, italic=True),
    "h6": Style(italic=True),
}

HR_WIDTH = 40


def html_to_text(fragment: str) -> Text:
    """Render a parse_markdown fragment as Rich Text for the terminal.

    Only the tags parse_markdown emits are interpreted. Anything else,
    including HTML typed by the user, is shown literally.
    """
    text = Text(overflow="fold")
    stack: list[tuple[str, Style]] = []
    position = 0

    def current_style() -> Style:
        return sum((style for _, style in stack), Style.null())

    for match in _TAG.finditer(fragment):
        text.append(fragment[position:match.start()], style=current_style())
        position = match.end()
        closing, tag, attrs = match.groups()

        if tag == "br":
            text.append("\n")
        elif tag == "hr":
            text.append("─" * HR_WIDTH, style="dim")
        elif closing:
            # Pop back to the matching opener; stray closers are dropped
            for index in range(len(stack) - 1, -1, -1):
                if stack[index][0] == tag:
                    del stack[index:]
                    break
        elif tag == "a":
            href = _HREF.search(attrs or "")
            link = href.group(1) if href else None
            stack.append((tag, Style(underline=True, link=link)))
        else:
            stack.append((tag, _TAG_STYLES[tag]))

    text.append(fragment[position:], style=current_style())
    return text
