"""Markdown formatting for chat messages.

Hides the fixed set of regex substitutions that turns model output into an
HTML fragment.
"""

import re

# Substitutions run in this order; later patterns must not re-match the
# output of earlier ones.
_MARKDOWN_RULES: list[tuple[re.Pattern[str], str]] = [
    # Code blocks
    (re.compile(r"```([\s\S]*?)```"), r"<pre><code>\1</code></pre>"),
    # Titles
    (re.compile(r"^# (.*?)$", re.MULTILINE), r"<h1>\1</h1>"),
    (re.compile(r"^## (.*?)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^### (.*?)$", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^#### (.*?)$", re.MULTILINE), r"<h4>\1</h4>"),
    (re.compile(r"^##### (.*?)$", re.MULTILINE), r"<h5>\1</h5>"),
    (re.compile(r"^###### (.*?)$", re.MULTILINE), r"<h6>\1</h6>"),
    # Bold
    (re.compile(r"\*\*(.*?)\*\*"), r"<strong>\1</strong>"),
    # Italic
    (re.compile(r"\*(.*?)\*"), r"<em>\1</em>"),
    # Inline code
    (re.compile(r"`(.*?)`"), r"<code>\1</code>"),
    # Link
    (re.compile(r"\[(.*?)\]\((.*?)\)"), r'<a href="\2">\1</a>'),
    # Horizontal rule
    (re.compile(r"^---$", re.MULTILINE), "<hr>"),
    # Line break
    (re.compile(r"  \n"), "<br>"),
]


def parse_markdown(markdown_text: str) -> str:
    """Convert a small markdown subset to an HTML fragment.

    Existing HTML is passed through unescaped, and running the function on
    its own output is not safe: each piece of text must be formatted once.
    """
    for pattern, replacement in _MARKDOWN_RULES:
        markdown_text = pattern.sub(replacement, markdown_text)
    return markdown_text
