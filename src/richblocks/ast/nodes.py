#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/ast/nodes.py
"""Block node classes for parsed rich text.

A parse produces an ordered list of blocks. Blocks carry resolved
:class:`~richblocks.text.StyledText` rather than nested inline nodes, so a
renderer only has to lay out runs and honour their annotations.

Block Hierarchy
---------------
All blocks inherit from :class:`Block` and support the visitor pattern.

    - Paragraph, Heading, CodeBlock, Divider
    - BulletList, OrderedList
    - Table (with TableRow and TableCell)
    - AbstractBlock (a titled container of nested blocks)
    - Media

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from richblocks.constants import TextAlign
from richblocks.text import StyledText


class Block(ABC):
    """Base class for all content blocks."""

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this block.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result from the matching visitor method

        """
        ...


@dataclass
class Paragraph(Block):
    """A paragraph of styled text.

    Parameters
    ----------
    text : StyledText
        Paragraph content
    text_align : TextAlign, default "start"
        Resolved alignment

    """

    text: StyledText
    text_align: TextAlign = "start"

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_paragraph``."""
        return visitor.visit_paragraph(self)


@dataclass
class Heading(Block):
    """A heading of level 1 to 6.

    Parameters
    ----------
    level : int
        Heading level (1-6)
    text : StyledText
        Heading content
    text_align : TextAlign, default "start"
        Resolved alignment

    """

    level: int
    text: StyledText
    text_align: TextAlign = "start"

    def __post_init__(self) -> None:
        """Validate heading level is between 1 and 6."""
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be 1-6, got {self.level}")

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_heading``."""
        return visitor.visit_heading(self)


@dataclass
class BulletList(Block):
    """An unordered list; each item is one styled text."""

    items: list[StyledText] = field(default_factory=list)

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_bullet_list``."""
        return visitor.visit_bullet_list(self)


@dataclass
class OrderedList(Block):
    """An ordered list.

    Parameters
    ----------
    items : list of StyledText
        List items in order
    start : int, default 1
        Number of the first item

    """

    items: list[StyledText] = field(default_factory=list)
    start: int = 1

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_ordered_list``."""
        return visitor.visit_ordered_list(self)


@dataclass
class CodeBlock(Block):
    """Preformatted plain text."""

    text: str

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_code_block``."""
        return visitor.visit_code_block(self)


@dataclass
class Divider(Block):
    """A horizontal rule."""

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_divider``."""
        return visitor.visit_divider(self)


@dataclass
class TableCell:
    """One logical table cell.

    Parameters
    ----------
    text : StyledText
        Cell content
    column_span : int, default 1
        Columns covered (at least 1)
    row_span : int, default 1
        Rows covered (at least 1)
    alignment : TextAlign, default "start"
        Resolved cell alignment
    is_header : bool, default False
        Header cell, either by its own traits or because its row is a header row
    class_names : frozenset of str, default empty
        The cell's own class names
    width : float or None, default None
        Width in layout units from ``style`` or ``width``
    padding_start : float, default 0.0
        Leading padding in layout units

    """

    text: StyledText
    column_span: int = 1
    row_span: int = 1
    alignment: TextAlign = "start"
    is_header: bool = False
    class_names: frozenset[str] = frozenset()
    width: Optional[float] = None
    padding_start: float = 0.0

    def __post_init__(self) -> None:
        """Validate spans are positive."""
        if self.column_span < 1 or self.row_span < 1:
            raise ValueError(f"Cell spans must be >= 1, got {self.column_span}x{self.row_span}")


@dataclass
class TableRow:
    """One logical table row.

    Parameters
    ----------
    cells : list of TableCell
        Cells in source order
    is_header : bool, default False
        Whether the row was classified as a header row
    class_names : frozenset of str, default empty
        Row classes, classes of ancestors up to the table, and table classes

    """

    cells: list[TableCell] = field(default_factory=list)
    is_header: bool = False
    class_names: frozenset[str] = frozenset()


@dataclass
class Table(Block):
    """A table split into header and body rows.

    Parameters
    ----------
    header_rows : list of TableRow
        Rows classified as headers, in source order
    body_rows : list of TableRow
        Remaining rows, in source order
    column_count : int
        Widest row's total column span, clamped to the column ceiling
    class_names : frozenset of str, default empty
        The table element's classes

    """

    header_rows: list[TableRow] = field(default_factory=list)
    body_rows: list[TableRow] = field(default_factory=list)
    column_count: int = 0
    class_names: frozenset[str] = frozenset()

    @property
    def rows(self) -> list[TableRow]:
        """Return header rows followed by body rows."""
        return [*self.header_rows, *self.body_rows]

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_table``."""
        return visitor.visit_table(self)


@dataclass
class AbstractBlock(Block):
    """A summary container, rendered as a card.

    Parameters
    ----------
    title : StyledText or None
        Text of the container's leading heading, if it had one
    blocks : list of Block
        Body blocks (the title heading excluded)
    class_names : frozenset of str, default empty
        The container element's classes

    """

    title: Optional[StyledText] = None
    blocks: list[Block] = field(default_factory=list)
    class_names: frozenset[str] = frozenset()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_abstract_block``."""
        return visitor.visit_abstract_block(self)


@dataclass
class Media(Block):
    """An embedded image.

    Parameters
    ----------
    source : str
        Raw ``src`` value
    media_ref : str or None
        Bare filename used to resolve a local resource
    description : str or None
        ``alt`` text, else ``title``
    width : int or None
        Declared pixel width
    height : int or None
        Declared pixel height
    alignment : TextAlign, default "start"
        Own ``align`` or the inherited alignment
    class_names : frozenset of str, default empty
        The image element's classes

    """

    source: str
    media_ref: Optional[str] = None
    description: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    alignment: TextAlign = "start"
    class_names: frozenset[str] = frozenset()

    def accept(self, visitor: Any) -> Any:
        """Dispatch to ``visitor.visit_media``."""
        return visitor.visit_media(self)
