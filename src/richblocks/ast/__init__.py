#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/ast/__init__.py
"""Block model produced by the rich text parser."""

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
from richblocks.ast.serialization import block_to_dict, blocks_to_dicts, blocks_to_json
from richblocks.ast.visitors import BlockVisitor

__all__ = [
    "AbstractBlock",
    "Block",
    "BlockVisitor",
    "BulletList",
    "CodeBlock",
    "Divider",
    "Heading",
    "Media",
    "OrderedList",
    "Paragraph",
    "Table",
    "TableCell",
    "TableRow",
    "block_to_dict",
    "blocks_to_dicts",
    "blocks_to_json",
]
