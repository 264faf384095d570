#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for question hint separation."""

import pytest

from richblocks.api import parse_html
from richblocks.hints import HintExtractionHandler, extract_question_parts, learning_card_href
from richblocks.tokenizer import feed_events


@pytest.mark.unit
class TestExtractQuestionParts:
    """Test splitting question markup."""

    def test_hint_and_button_are_separated(self) -> None:
        """Test the hint div and toggle button."""
        parts = extract_question_parts(
            "<p>Which vessel?</p>"
            "<button onclick=\"toggle('hintdiv')\">Show <b>hint</b></button>"
            '<div id="hintdiv"><p>Think <b>big</b></p><div>nested</div></div>'
            "<p>After</p>"
        )
        assert parts.content_html == "<p>Which vessel?</p><p>After</p>"
        assert parts.hint_html == "<p>Think <b>big</b></p><div>nested</div>"

    def test_without_hint(self) -> None:
        """Test markup with no hint."""
        parts = extract_question_parts("  <p>Plain</p>  ")
        assert parts.content_html == "<p>Plain</p>"
        assert parts.hint_html is None

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_input(self, raw) -> None:
        """Test empty questions."""
        parts = extract_question_parts(raw)
        assert parts.content_html == ""
        assert parts.hint_html is None

    def test_blank_hint_is_none(self) -> None:
        """Test a hint div with only whitespace."""
        assert extract_question_parts('<p>Q</p><div id="hintdiv">  </div>').hint_html is None

    def test_text_is_reescaped(self) -> None:
        """Test that decoded markup characters are escaped again."""
        parts = extract_question_parts("<p>a &lt; b &amp; c</p>")
        assert parts.content_html == "<p>a &lt; b &amp; c</p>"

    def test_void_elements_have_no_end_tag(self) -> None:
        """Test br and img serialization."""
        parts = extract_question_parts('<p>x<br>y<img src="file:///media/a.png"></p>')
        assert parts.content_html == '<p>x<br>y<img src="file:///media/a.png"></p>'

    def test_attribute_quotes_escaped(self) -> None:
        """Test double quotes inside attribute values."""
        parts = extract_question_parts("<span title='say \"hi\"'>x</span>")
        assert parts.content_html == '<span title="say &quot;hi&quot;">x</span>'

    def test_content_and_hint_are_sanitized(self) -> None:
        """Test that styles go and media references point at the local media folder on both sides."""
        parts = extract_question_parts(
            "<style>.q { color: red }</style>"
            '<p style="color:blue">See <img src="https://cdn.example.org/img/ecg.png?v=1"></p>'
            '<div id="hintdiv"><a href="media://murmur.mp3">Listen</a></div>'
        )
        assert parts.content_html == '<p>See <img src="file:///media/ecg.png"></p>'
        assert parts.hint_html == '<a href="file:///media/murmur.mp3" class="metalink">Listen</a>'

    def test_sanitized_media_link_renders_as_metalink(self) -> None:
        """Test that a rewritten media link picks up the metalink styling when parsed."""
        parts = extract_question_parts('<p>Play <a href="clips/echo.mp4">clip</a></p>')
        (block,) = parse_html(parts.content_html)
        assert block.text.links() == ["file:///media/echo.mp4"]
        assert block.text.runs[-1].style.italic

    def test_attribute_ampersands_survive_reparsing(self) -> None:
        """Test that re-serialized query strings parse back to the original value."""
        parts = extract_question_parts('<p><a href="page?a=1&amp;lt=2">x</a></p>')
        (block,) = parse_html(parts.content_html)
        assert block.text.links() == ["page?a=1&lt=2"]

    def test_hint_toggle_onclick_removed_from_content(self) -> None:
        """Test that other elements lose their hint toggle handler."""
        parts = extract_question_parts('<a class="more" onclick="show(\'hintdiv\')">More</a>')
        assert parts.content_html == '<a class="more">More</a>'


@pytest.mark.unit
class TestLearningCardLinks:
    """Test learning-card anchor rewriting."""

    def test_empty_href_with_anchor(self) -> None:
        """Test the anchor suffix."""
        parts = extract_question_parts('<a data-learningcard-id="AB12" data-anker="Z9" href="">card</a>')
        assert 'href="learningcard://AB12/Z9"' in parts.content_html

    def test_template_href(self) -> None:
        """Test placeholder hrefs."""
        parts = extract_question_parts('<a href="{{card}}" data-learningcard-id="AB12">card</a>')
        assert 'href="learningcard://AB12"' in parts.content_html

    def test_missing_href_is_added(self) -> None:
        """Test anchors without an href."""
        assert learning_card_href({"data-learningcard-id": " AB12 "}) == "learningcard://AB12"

    def test_real_href_is_kept(self) -> None:
        """Test that usable hrefs are not rewritten."""
        assert learning_card_href({"href": "https://example.org", "data-learningcard-id": "AB12"}) is None

    def test_without_card_id(self) -> None:
        """Test ordinary anchors."""
        assert learning_card_href({"href": ""}) is None


@pytest.mark.unit
class TestHintExtractionHandler:
    """Test the handler with hand-written events."""

    def test_nested_divs_inside_hint(self) -> None:
        """Test that the hint ends at its own closing div."""
        handler = HintExtractionHandler()
        feed_events(
            [
                ("start", ("div", {"id": "hintdiv"})),
                ("start", ("div", {})),
                ("text", "inner"),
                ("end", "div"),
                ("end", "div"),
                ("text", "outside"),
            ],
            handler,
        )
        assert "".join(handler.hint_parts) == "<div>inner</div>"
        assert "".join(handler.content_parts) == "outside"
