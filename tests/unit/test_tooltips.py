#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for tooltip payload parsing and extraction."""

from unittest.mock import patch

import pytest
from utils import first_element, tree_from_events

from richblocks.exceptions import DependencyError
from richblocks.tooltips import (
    extract_tooltip_text,
    find_inline_tooltip_node,
    is_tooltip_content_node,
    parse_tooltip_payload,
    strip_html,
)


def _span(attributes):
    tree = tree_from_events(("open", "span", attributes), ("text", "term"), ("close", "span"))
    return tree.root_nodes()[0]


@pytest.mark.unit
class TestParseTooltipPayload:
    """Test interpretation of raw attribute values."""

    def test_json_object_text_key(self) -> None:
        """Test key lookup in a JSON object."""
        assert parse_tooltip_payload('{"text":"Hi"}') == "Hi"

    def test_json_key_order(self) -> None:
        """Test that description wins over text."""
        assert parse_tooltip_payload('{"text": "second", "description": "first"}') == "first"

    def test_non_string_value_falls_back_to_raw(self) -> None:
        """Test that a numeric value is skipped and the raw value used."""
        assert parse_tooltip_payload('{"text":123}') == '{"text":123}'

    def test_blank_string_value_skipped(self) -> None:
        """Test that blank values are skipped in favour of later keys."""
        assert parse_tooltip_payload('{"description": "  ", "message": "Later"}') == "Later"

    def test_json_array_of_strings(self) -> None:
        """Test key lookup across a JSON array."""
        assert parse_tooltip_payload('["", "  ", "Second"]') == "Second"

    def test_json_array_of_objects(self) -> None:
        """Test objects inside a JSON array."""
        assert parse_tooltip_payload('[{"value": 1}, {"body": "Body"}]') == "Body"

    def test_malformed_json_is_stripped_as_html(self) -> None:
        """Test that broken JSON falls back to plain text."""
        assert parse_tooltip_payload('{"text": "unterminated}') == '{"text": "unterminated}'

    def test_json_value_containing_markup(self) -> None:
        """Test that markup inside a JSON value is stripped."""
        assert parse_tooltip_payload('{"text": "<b>Aorta</b>"}') == "Aorta"

    def test_plain_html(self) -> None:
        """Test non-JSON values."""
        assert parse_tooltip_payload("<p>Main <i>artery</i></p>") == "Main artery"

    @pytest.mark.parametrize("raw", ["", "   ", "<b> </b>"])
    def test_blank_results_are_none(self, raw) -> None:
        """Test that blank payloads produce no tooltip."""
        assert parse_tooltip_payload(raw) is None


@pytest.mark.unit
class TestStripHtml:
    """Test HTML stripping."""

    def test_strips_tags_and_decodes(self) -> None:
        """Test tag removal and entity decoding."""
        assert strip_html("  <p>A &amp; B</p> ") == "A & B"

    def test_empty(self) -> None:
        """Test empty input."""
        assert strip_html("") == ""

    def test_missing_dependency_raises(self) -> None:
        """Test the dependency check when bs4 cannot be imported."""
        with patch("importlib.import_module", side_effect=ImportError("No module named 'bs4'")):
            with pytest.raises(DependencyError) as exc_info:
                strip_html("<b>x</b>")
        assert exc_info.value.missing_packages == [("beautifulsoup4", "bs4")]


@pytest.mark.unit
class TestCarrierDetection:
    """Test recognition of inline tooltip carriers."""

    @pytest.mark.parametrize(
        "attributes",
        [
            {"class": "TooltipText"},
            {"class": "smartip__content other"},
            {"data-role": "Tooltip"},
            {"data-tooltip-part": "content"},
            {"data-tooltip-role": "CONTENT"},
            {"data-type": "tooltip"},
            {"data-tooltip-content": ""},
            {"data-tooltip-text": ""},
        ],
    )
    def test_carrier_markers(self, attributes) -> None:
        """Test every carrier signal."""
        assert is_tooltip_content_node(_span(attributes))

    def test_ordinary_span_is_not_a_carrier(self) -> None:
        """Test a span without carrier signals."""
        assert not is_tooltip_content_node(_span({"class": "tooltip"}))

    def test_find_inline_tooltip_node_depth_first(self) -> None:
        """Test that the first carrier in document order is returned."""
        owner = first_element(
            '<span class="owner"><i><span class="tooltiptext">first</span></i>'
            '<span class="tooltiptext">second</span></span>',
            "span",
        )
        carrier = find_inline_tooltip_node(owner)
        assert carrier is not None
        assert carrier.text() == "first"


@pytest.mark.unit
class TestExtractTooltipText:
    """Test tooltip resolution order on an owner element."""

    def test_attribute_candidates_in_order(self) -> None:
        """Test that data-tooltip wins over title."""
        assert extract_tooltip_text(_span({"title": "Title", "data-tooltip": "Tooltip"})) == "Tooltip"

    def test_title_attribute(self) -> None:
        """Test the title fallback."""
        assert extract_tooltip_text(_span({"title": "Heart muscle"})) == "Heart muscle"

    def test_tooltip_json_attribute(self) -> None:
        """Test the dedicated JSON attribute."""
        assert extract_tooltip_text(_span({"data-tooltip-json": '{"content": "From JSON"}'})) == "From JSON"

    def test_inline_carrier(self) -> None:
        """Test the inline carrier fallback."""
        owner = first_element(
            '<span class="owner">aorta<span class="tooltiptext">  Main artery  </span></span>', "span"
        )
        assert extract_tooltip_text(owner) == "Main artery"

    def test_no_tooltip(self) -> None:
        """Test an element without any tooltip source."""
        assert extract_tooltip_text(_span({"class": "plain"})) is None
