#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for block serialization."""

import json

import pytest

from richblocks import parse_html
from richblocks.ast import (
    AbstractBlock,
    Block,
    BlockVisitor,
    CodeBlock,
    Divider,
    Heading,
    Media,
    OrderedList,
    Paragraph,
    block_to_dict,
    blocks_to_dicts,
    blocks_to_json,
)
from richblocks.text import StyledText


@pytest.mark.unit
class TestBlockToDict:
    """Test conversion of individual blocks."""

    def test_paragraph(self) -> None:
        """Test a plain paragraph."""
        result = block_to_dict(Paragraph(text=StyledText.plain("Hello"), text_align="center"))
        assert result == {
            "node_type": "Paragraph",
            "text": {"text": "Hello", "annotations": []},
            "text_align": "center",
        }

    def test_heading_level(self) -> None:
        """Test heading fields."""
        result = block_to_dict(Heading(level=3, text=StyledText.plain("T")))
        assert (result["node_type"], result["level"]) == ("Heading", 3)

    def test_ordered_list(self) -> None:
        """Test list items."""
        result = block_to_dict(OrderedList(items=[StyledText.plain("a")], start=4))
        assert result["start"] == 4
        assert [item["text"] for item in result["items"]] == ["a"]

    def test_divider_and_code(self) -> None:
        """Test the simplest blocks."""
        assert block_to_dict(Divider()) == {"node_type": "Divider"}
        assert block_to_dict(CodeBlock(text="x")) == {"node_type": "CodeBlock", "text": "x"}

    def test_media(self) -> None:
        """Test media fields."""
        result = block_to_dict(Media(source="a/b.png", media_ref="b.png", class_names=frozenset({"z", "a"})))
        assert result["media_ref"] == "b.png"
        assert result["class_names"] == ["a", "z"]

    def test_abstract_nests_children(self) -> None:
        """Test nested serialization."""
        block = AbstractBlock(title=StyledText.plain("T"), blocks=[Divider()])
        result = block_to_dict(block)
        assert result["title"]["text"] == "T"
        assert result["blocks"] == [{"node_type": "Divider"}]

    def test_unknown_block_type_raises(self) -> None:
        """Test that foreign blocks are rejected."""

        class Custom(Block):
            def accept(self, visitor):
                return visitor.generic_visit(self)

        with pytest.raises(ValueError):
            block_to_dict(Custom())

    def test_runs_included_on_request(self) -> None:
        """Test verbose run output."""
        (block,) = parse_html("<p><b>bold</b></p>")
        result = block_to_dict(block, include_runs=True)
        (run,) = result["text"]["runs"]
        assert run["style"] == {"bold": True}


@pytest.mark.unit
class TestParsedOutput:
    """Test serialization of parser output."""

    def test_link_annotation_serialized(self) -> None:
        """Test annotation fields."""
        (result,) = blocks_to_dicts(parse_html('<p>go <a href="https://example.org">here</a></p>'))
        assert result["text"]["annotations"] == [
            {"tag": "URL", "value": "https://example.org", "start": 3, "end": 7}
        ]

    def test_table_serialized(self) -> None:
        """Test table rows and cells."""
        (result,) = blocks_to_dicts(parse_html("<table><tr><th>A</th></tr><tr><td>1</td></tr></table>"))
        assert result["node_type"] == "Table"
        assert result["header_rows"][0]["cells"][0]["is_header"] is True
        assert result["body_rows"][0]["cells"][0]["text"]["text"] == "1"

    def test_blocks_to_json(self) -> None:
        """Test the JSON document wrapper."""
        document = json.loads(blocks_to_json(parse_html("<h2>Título</h2>"), indent=2))
        assert document["schema_version"] == 1
        assert document["blocks"][0]["text"]["text"] == "Título"

    def test_unicode_not_escaped(self) -> None:
        """Test that non-ASCII text is written verbatim."""
        assert "Título" in blocks_to_json(parse_html("<p>Título</p>"))


@pytest.mark.unit
class TestBlockVisitor:
    """Test the visitor base class."""

    def test_abstract_children_visited_by_default(self) -> None:
        """Test that the default abstract visit descends into the body."""
        seen = []

        class Collector(BlockVisitor):
            def visit_divider(self, node):
                seen.append(node)

        Collector().visit_abstract_block(AbstractBlock(blocks=[Divider(), Divider()]))
        assert len(seen) == 2
