#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for inline style composition and resolution."""

import pytest
from utils import tree_from_events

from richblocks.constants import METALINK_TEXT_COLOR, SMALL_TEXT_FONT_SIZE
from richblocks.styles import (
    Color,
    InlineHighlight,
    InlineStyle,
    RichTextPalette,
    apply_class_styles,
    apply_tag_style,
    is_link_target,
    resolve_span_style,
)

PALETTE = RichTextPalette()


def _element(tag, attributes=None):
    tree = tree_from_events(("open", tag, attributes or {}), ("close", tag))
    return tree.root_nodes()[0]


@pytest.mark.unit
class TestColor:
    """Test the ARGB color value."""

    def test_from_hex_rgb_adds_opaque_alpha(self) -> None:
        """Test six-digit notation."""
        assert Color.from_hex("#E91E63") == Color(0xFFE91E63)

    def test_from_hex_argb(self) -> None:
        """Test eight-digit notation."""
        assert Color.from_hex("80112233").argb == 0x80112233

    def test_from_hex_rejects_bad_length(self) -> None:
        """Test invalid notation."""
        with pytest.raises(ValueError):
            Color.from_hex("#123")

    def test_hex_property(self) -> None:
        """Test formatting."""
        assert Color(0xFF00FF00).hex == "#FF00FF00"


@pytest.mark.unit
class TestTagStyles:
    """Test tag-driven style deltas."""

    @pytest.mark.parametrize(
        "tag, field",
        [
            ("strong", "bold"),
            ("b", "bold"),
            ("em", "italic"),
            ("i", "italic"),
            ("u", "underline"),
            ("code", "monospace"),
            ("sup", "superscript"),
            ("sub", "subscript"),
        ],
    )
    def test_flag_tags(self, tag, field) -> None:
        """Test that formatting tags set their flag."""
        style = apply_tag_style(InlineStyle(), _element(tag))
        assert getattr(style, field) is True

    def test_unknown_tag_returns_same_style(self) -> None:
        """Test that tags without a delta leave the style untouched."""
        style = InlineStyle(bold=True)
        assert apply_tag_style(style, _element("span")) is style

    def test_anchor_with_target_sets_link(self) -> None:
        """Test link targets."""
        style = apply_tag_style(InlineStyle(), _element("a", {"href": " https://example.org "}))
        assert style.link == "https://example.org"

    @pytest.mark.parametrize("href", ["", "   ", "#", "javascript:void(0)", "JavaScript:alert(1)"])
    def test_anchor_without_usable_target(self, href) -> None:
        """Test that empty, bare-fragment and javascript hrefs are not links."""
        style = apply_tag_style(InlineStyle(), _element("a", {"href": href}))
        assert style.link is None
        assert not is_link_target(href)

    def test_styles_are_immutable(self) -> None:
        """Test that composition never mutates the input style."""
        base = InlineStyle()
        apply_tag_style(base, _element("b"))
        assert base.bold is False


@pytest.mark.unit
class TestClassStyles:
    """Test class-driven overrides."""

    def test_important_highlights_and_bolds(self) -> None:
        """Test the important marker."""
        style = apply_class_styles(InlineStyle(), ["Wichtig"], PALETTE, False)
        assert style.highlight is InlineHighlight.IMPORTANT
        assert style.bold

    def test_selected_only_when_enabled(self) -> None:
        """Test that selected highlighting depends on the option."""
        assert apply_class_styles(InlineStyle(), ["selected"], PALETTE, False).highlight is None
        enabled = apply_class_styles(InlineStyle(), ["selected"], PALETTE, True)
        assert enabled.highlight is InlineHighlight.SELECTED

    def test_dictionary_underlines(self) -> None:
        """Test dictionary terms."""
        style = apply_class_styles(InlineStyle(), ["dictionary"], PALETTE, False)
        assert style.dictionary and style.underline

    def test_nowrap_preserves_whitespace(self) -> None:
        """Test both nowrap spellings."""
        for name in ("nowrap", "no-wrap"):
            assert apply_class_styles(InlineStyle(), [name], PALETTE, False).preserve_whitespace

    def test_scientific_name_italic(self) -> None:
        """Test scientific names."""
        assert apply_class_styles(InlineStyle(), ["scientific-name"], PALETTE, False).italic

    def test_metalink_overrides_abstract_color(self) -> None:
        """Test that the metalink color wins over the abstract color."""
        style = apply_class_styles(InlineStyle(), ["metalink", "abstract"], PALETTE, False)
        assert style.text_color == Color(METALINK_TEXT_COLOR)
        assert style.small_text
        assert style.italic

    def test_no_classes_returns_same_style(self) -> None:
        """Test the empty class set."""
        style = InlineStyle()
        assert apply_class_styles(style, [], PALETTE, True) is style


@pytest.mark.unit
class TestResolveSpanStyle:
    """Test resolution to render-ready attributes."""

    def test_plain_style(self) -> None:
        """Test that the default style resolves to no decoration."""
        span = resolve_span_style(InlineStyle(), PALETTE)
        assert span.color is None and span.background is None
        assert span.baseline_shift == "none"
        assert span.font_size is None

    def test_important_colors(self) -> None:
        """Test important highlight colors."""
        span = resolve_span_style(InlineStyle(highlight=InlineHighlight.IMPORTANT), PALETTE)
        assert span.background == PALETTE.important_background
        assert span.color == PALETTE.important_text

    def test_explicit_color_wins(self) -> None:
        """Test text color precedence."""
        style = InlineStyle(text_color=Color(0xFF000000), highlight=InlineHighlight.SELECTED)
        span = resolve_span_style(style, PALETTE)
        assert span.color == Color(0xFF000000)
        assert span.background == PALETTE.selected_background

    def test_tooltip_forces_underline_and_dictionary_color(self) -> None:
        """Test tooltip owners."""
        span = resolve_span_style(InlineStyle(tooltip="Explanation"), PALETTE)
        assert span.underline
        assert span.color == PALETTE.dictionary_text

    def test_superscript_before_subscript(self) -> None:
        """Test baseline shift precedence."""
        span = resolve_span_style(InlineStyle(superscript=True, subscript=True), PALETTE)
        assert span.baseline_shift == "superscript"
        assert resolve_span_style(InlineStyle(subscript=True), PALETTE).baseline_shift == "subscript"

    def test_small_text_font_size(self) -> None:
        """Test the abstract font size."""
        span = resolve_span_style(InlineStyle(small_text=True), PALETTE)
        assert span.font_size == SMALL_TEXT_FONT_SIZE

    def test_custom_palette(self) -> None:
        """Test that the caller's palette is used."""
        palette = RichTextPalette(dictionary_text=Color(0xFF123456))
        span = resolve_span_style(InlineStyle(dictionary=True), palette)
        assert span.color == Color(0xFF123456)
