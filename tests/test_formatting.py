"""Unit tests for markdown formatting and its terminal rendering."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from streamchat.chat.markup import PLACEHOLDER_TITLE, render_transcript_markup
from streamchat.chat.models import ChatMessage, Role, Transcript
from streamchat.formatting import parse_markdown
from streamchat.ui.formatting import html_to_text


class TestParseMarkdown:
    """Tests for parse_markdown."""

    def test_bold_and_italic(self):
        assert parse_markdown("**bold** and *italic*") == "<strong>bold</strong> and <em>italic</em>"

    def test_fenced_code_block(self):
        assert parse_markdown("```code```") == "<pre><code>code</code></pre>"

    def test_fenced_block_spans_lines(self):
        result = parse_markdown("before\n```\nx = 1\ny = 2\n```\nafter")
        assert result == "before\n<pre><code>\nx = 1\ny = 2\n</code></pre>\nafter"

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, level: int):
        assert parse_markdown(f"{'#' * level} Title") == f"<h{level}>Title</h{level}>"

    def test_heading_only_at_line_start(self):
        assert parse_markdown("not a # heading") == "not a # heading"

    def test_heading_on_later_line(self):
        assert parse_markdown("intro\n## Part") == "intro\n<h2>Part</h2>"

    def test_seven_hashes_is_not_a_heading(self):
        assert parse_markdown("####### Deep") == "####### Deep"

    def test_inline_code(self):
        assert parse_markdown("run `ls -la` now") == "run <code>ls -la</code> now"

    def test_link(self):
        assert parse_markdown("[docs](https://example.com)") == '<a href="https://example.com">docs</a>'

    def test_horizontal_rule(self):
        assert parse_markdown("above\n---\nbelow") == "above\n<hr>\nbelow"

    def test_rule_must_be_whole_line(self):
        assert parse_markdown("a --- b") == "a --- b"

    def test_double_space_line_break(self):
        assert parse_markdown("one  \ntwo") == "one<br>two"

    def test_single_newline_is_kept(self):
        assert parse_markdown("one\ntwo") == "one\ntwo"

    def test_html_is_not_escaped(self):
        assert parse_markdown("<b>raw</b> & more") == "<b>raw</b> & more"

    def test_bold_inside_heading_keeps_fixed_order(self):
        assert parse_markdown("# **Big** news") == "<h1><strong>Big</strong> news</h1>"

    def test_code_block_content_still_matches_later_rules(self):
        # Substitutions run in a fixed order over the whole text
        assert parse_markdown("```a *b* c```") == "<pre><code>a <em>b</em> c</code></pre>"

    def test_bold_does_not_span_lines(self):
        assert parse_markdown("**open\nclose**") == "<em></em>open\nclose<em></em>"

    def test_not_idempotent(self):
        once = parse_markdown("*  \n*")
        assert once == "*<br>*"
        assert parse_markdown(once) == "<em><br></em>"

    @given(st.text(alphabet=st.characters(exclude_characters="*`#[]()-\n ")))
    def test_plain_text_passes_through(self, text: str):
        """Property test: text without markdown markers is unchanged."""
        assert parse_markdown(text) == text


class TestHtmlToText:
    """Tests for the terminal projection of formatted fragments."""

    def test_plain_text(self):
        assert html_to_text("hello").plain == "hello"

    def test_tags_are_stripped_and_styled(self):
        text = html_to_text("<strong>bold</strong> and <em>italic</em>")
        assert text.plain == "bold and italic"
        bold_spans = [span for span in text.spans if "bold" in str(span.style)]
        assert bold_spans

    def test_line_break_and_rule(self):
        text = html_to_text("one<br>two<hr>")
        assert text.plain.startswith("one\ntwo")
        assert "─" in text.plain

    def test_link_keeps_label(self):
        text = html_to_text('<a href="https://example.com">docs</a>')
        assert text.plain == "docs"

    def test_unknown_markup_shown_literally(self):
        assert html_to_text("<b>raw</b>").plain == "<b>raw</b>"

    def test_stray_closing_tag_is_dropped(self):
        assert html_to_text("text</strong>").plain == "text"

    @given(st.text())
    def test_never_raises(self, text: str):
        """Property test: any formatted input renders."""
        html_to_text(parse_markdown(text))


class TestTranscriptMarkup:
    """Tests for the HTML projection of a transcript."""

    def test_empty_transcript_renders_placeholder(self):
        markup = render_transcript_markup(Transcript())
        assert 'class="default-text"' in markup
        assert PLACEHOLDER_TITLE in markup

    def test_messages_render_in_order(self):
        transcript = Transcript()
        transcript.append(ChatMessage(role=Role.USER, content="**hi**"))
        transcript.append(ChatMessage(role=Role.ASSISTANT, content="hello"))
        markup = render_transcript_markup(transcript)

        outgoing = markup.index('class="chat outgoing"')
        incoming = markup.index('class="chat incoming"')
        assert outgoing < incoming
        assert "<p><strong>hi</strong></p>" in markup

    def test_error_entry_is_not_formatted(self):
        transcript = Transcript()
        transcript.append(ChatMessage(role=Role.ASSISTANT, content="*oops*", is_error=True))
        assert '<p class="error">*oops*</p>' in render_transcript_markup(transcript)
