#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/ast/visitors.py
"""Visitor pattern base class for block traversal.

Visitors keep algorithms that walk a block list (serialization, rendering,
text extraction) separate from the block classes themselves.

Examples
--------
Count tables, including those nested in abstract blocks:

    >>> class TableCounter(BlockVisitor):
    ...     def __init__(self):
    ...         self.count = 0
    ...
    ...     def visit_table(self, node):
    ...         self.count += 1
    ...
    >>> counter = TableCounter()
    >>> for block in blocks:
    ...     block.accept(counter)

"""

from __future__ import annotations

from typing import Any

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
)


class BlockVisitor:
    """Base class for block visitors.

    Every ``visit_*`` method falls back to :meth:`generic_visit`, which does
    nothing except descend into the body of an :class:`AbstractBlock`.
    Subclasses override only the methods they care about.
    """

    def generic_visit(self, node: Block) -> Any:
        """Handle a block without a dedicated visit method."""
        return None

    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph block."""
        return self.generic_visit(node)

    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading block."""
        return self.generic_visit(node)

    def visit_bullet_list(self, node: BulletList) -> Any:
        """Visit a BulletList block."""
        return self.generic_visit(node)

    def visit_ordered_list(self, node: OrderedList) -> Any:
        """Visit an OrderedList block."""
        return self.generic_visit(node)

    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock block."""
        return self.generic_visit(node)

    def visit_divider(self, node: Divider) -> Any:
        """Visit a Divider block."""
        return self.generic_visit(node)

    def visit_table(self, node: Table) -> Any:
        """Visit a Table block."""
        return self.generic_visit(node)

    def visit_media(self, node: Media) -> Any:
        """Visit a Media block."""
        return self.generic_visit(node)

    def visit_abstract_block(self, node: AbstractBlock) -> Any:
        """Visit an AbstractBlock, descending into its body."""
        for child in node.blocks:
            child.accept(self)
        return self.generic_visit(node)
