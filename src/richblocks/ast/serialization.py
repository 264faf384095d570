#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/ast/serialization.py
"""JSON-compatible serialization of parsed blocks.

Blocks are converted to plain dictionaries for debugging output and snapshot
comparisons. Styled text is flattened to its text plus annotation regions;
run styles are included only on request because they are verbose.

Examples
--------
    >>> from richblocks import parse_html
    >>> from richblocks.ast.serialization import blocks_to_json
    >>> print(blocks_to_json(parse_html("<h2>Title</h2>"), indent=2))

"""

from __future__ import annotations

import json
from typing import Any, Optional

from richblocks.ast.nodes import (
    AbstractBlock,
    Block,
    BulletList,
    CodeBlock,
    Divider,
    Heading,
    Media,
    OrderedList,
    Paragraph,
    Table,
    TableCell,
    TableRow,
)
from richblocks.ast.visitors import BlockVisitor
from richblocks.styles import SpanStyle
from richblocks.text import StyledText


def _serialize_span_style(style: Optional[SpanStyle]) -> Optional[dict[str, Any]]:
    if style is None:
        return None
    result: dict[str, Any] = {}
    for flag in ("bold", "italic", "underline", "monospace"):
        if getattr(style, flag):
            result[flag] = True
    if style.baseline_shift != "none":
        result["baseline_shift"] = style.baseline_shift
    if style.color is not None:
        result["color"] = style.color.hex
    if style.background is not None:
        result["background"] = style.background.hex
    if style.font_size is not None:
        result["font_size"] = style.font_size
    return result


def styled_text_to_dict(text: StyledText, include_runs: bool = False) -> dict[str, Any]:
    """Convert styled text to a dictionary.

    Parameters
    ----------
    text : StyledText
        Text to serialize
    include_runs : bool, default False
        Also emit each run with its resolved style

    Returns
    -------
    dict
        ``{"text": ..., "annotations": [...]}`` and optionally ``"runs"``

    """
    result: dict[str, Any] = {
        "text": text.text,
        "annotations": [
            {"tag": annotation.tag, "value": annotation.value, "start": annotation.start, "end": annotation.end}
            for annotation in text.annotations
        ],
    }
    if include_runs:
        result["runs"] = [
            {"text": run.text, "start": run.start, "style": _serialize_span_style(run.style)} for run in text.runs
        ]
    return result


class _BlockSerializer(BlockVisitor):
    """Visitor returning a dictionary for each visited block."""

    def __init__(self, include_runs: bool = False):
        self.include_runs = include_runs

    def _text(self, text: StyledText) -> dict[str, Any]:
        return styled_text_to_dict(text, include_runs=self.include_runs)

    def generic_visit(self, node: Block) -> Any:
        raise ValueError(f"Unknown block type for serialization: {type(node).__name__}")

    def visit_paragraph(self, node: Paragraph) -> dict[str, Any]:
        return {"node_type": "Paragraph", "text": self._text(node.text), "text_align": node.text_align}

    def visit_heading(self, node: Heading) -> dict[str, Any]:
        return {
            "node_type": "Heading",
            "level": node.level,
            "text": self._text(node.text),
            "text_align": node.text_align,
        }

    def visit_bullet_list(self, node: BulletList) -> dict[str, Any]:
        return {"node_type": "BulletList", "items": [self._text(item) for item in node.items]}

    def visit_ordered_list(self, node: OrderedList) -> dict[str, Any]:
        return {"node_type": "OrderedList", "start": node.start, "items": [self._text(item) for item in node.items]}

    def visit_code_block(self, node: CodeBlock) -> dict[str, Any]:
        return {"node_type": "CodeBlock", "text": node.text}

    def visit_divider(self, node: Divider) -> dict[str, Any]:
        return {"node_type": "Divider"}

    def _cell(self, cell: TableCell) -> dict[str, Any]:
        result: dict[str, Any] = {
            "text": self._text(cell.text),
            "column_span": cell.column_span,
            "row_span": cell.row_span,
            "alignment": cell.alignment,
            "is_header": cell.is_header,
            "class_names": sorted(cell.class_names),
            "padding_start": cell.padding_start,
        }
        if cell.width is not None:
            result["width"] = cell.width
        return result

    def _row(self, row: TableRow) -> dict[str, Any]:
        return {
            "cells": [self._cell(cell) for cell in row.cells],
            "is_header": row.is_header,
            "class_names": sorted(row.class_names),
        }

    def visit_table(self, node: Table) -> dict[str, Any]:
        return {
            "node_type": "Table",
            "column_count": node.column_count,
            "class_names": sorted(node.class_names),
            "header_rows": [self._row(row) for row in node.header_rows],
            "body_rows": [self._row(row) for row in node.body_rows],
        }

    def visit_abstract_block(self, node: AbstractBlock) -> dict[str, Any]:
        return {
            "node_type": "AbstractBlock",
            "title": self._text(node.title) if node.title is not None else None,
            "class_names": sorted(node.class_names),
            "blocks": [child.accept(self) for child in node.blocks],
        }

    def visit_media(self, node: Media) -> dict[str, Any]:
        return {
            "node_type": "Media",
            "source": node.source,
            "media_ref": node.media_ref,
            "description": node.description,
            "width": node.width,
            "height": node.height,
            "alignment": node.alignment,
            "class_names": sorted(node.class_names),
        }


def block_to_dict(block: Block, include_runs: bool = False) -> dict[str, Any]:
    """Convert a block to a dictionary representation.

    Parameters
    ----------
    block : Block
        The block to convert
    include_runs : bool, default False
        Include styled runs for every text payload

    Returns
    -------
    dict
        Dictionary with a ``node_type`` key plus the block's fields

    Raises
    ------
    ValueError
        If ``block`` is not a known block type

    Examples
    --------
    >>> from richblocks.ast import CodeBlock
    >>> block_to_dict(CodeBlock(text="x = 1"))
    {'node_type': 'CodeBlock', 'text': 'x = 1'}

    """
    return block.accept(_BlockSerializer(include_runs=include_runs))


def blocks_to_dicts(blocks: list[Block], include_runs: bool = False) -> list[dict[str, Any]]:
    """Convert a block list to a list of dictionaries."""
    serializer = _BlockSerializer(include_runs=include_runs)
    return [block.accept(serializer) for block in blocks]


def blocks_to_json(blocks: list[Block], indent: int | None = None, include_runs: bool = False) -> str:
    """Serialize a block list to a JSON string.

    The output is an object with a ``schema_version`` field and a ``blocks``
    array. Unicode characters are written without escape sequences.
    """
    payload = {"schema_version": 1, "blocks": blocks_to_dicts(blocks, include_runs=include_runs)}
    return json.dumps(payload, indent=indent, ensure_ascii=False)
