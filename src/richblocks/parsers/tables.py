#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/parsers/tables.py
"""Table parsing with header inference.

Quiz tables rarely use ``<thead>`` and ``<th>`` consistently. Header rows are
therefore classified by a fixed priority of signals, strongest first:

1. the row sits inside a ``thead``
2. the row's classes match a header-row marker
3. the row carries header-indicating attributes
4. the row's classes match a title-row marker
5. every cell in the row is a header cell on its own
6. the row is a short single-cell title: center aligned or emphasised, and
   either the table's first row or spanning several columns

Rows and cells are collected through arbitrary wrapper elements but never
from inside a nested table.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from richblocks.ast.nodes import Table, TableCell, TableRow
from richblocks.constants import TextAlign
from richblocks.diagnostics import DiagnosticCallback, emit_diagnostic
from richblocks.dom import ElementNode
from richblocks.markers import (
    CENTER_ALIGNMENT_CLASS_MARKERS,
    END_ALIGNMENT_CLASS_MARKERS,
    HEADER_ATTRIBUTE_VALUES,
    HEADER_CELL_ATTRIBUTE_NAMES,
    HEADER_CELL_CLASS_MARKERS,
    HEADER_ROLE_VALUES,
    HEADER_ROW_ATTRIBUTE_NAMES,
    HEADER_ROW_CLASS_MARKERS,
    HEADER_SCOPE_VALUES,
    TITLE_ROW_CLASS_MARKERS,
    matches_any_marker,
)
from richblocks.options.richtext import RichTextOptions
from richblocks.text import StyledText
from richblocks.utils.css import parse_padding_start, parse_text_align, parse_width

logger = logging.getLogger(__name__)

_TRUTHY_VALUES = frozenset({"true", "1", "yes"})
_FALSY_VALUES = frozenset({"false", "0"})


@dataclass(frozen=True)
class CellInfo:
    """Intermediate per-cell facts gathered before row classification."""

    text: StyledText
    raw_text: str
    column_span: int
    row_span: int
    alignment: TextAlign
    width: Optional[float]
    padding_start: float
    class_names: frozenset[str]
    has_header_traits: bool


def parse_span(value: str) -> int:
    """Parse a ``colspan``/``rowspan`` value; invalid or missing means 1."""
    try:
        return max(int(value.strip()), 1)
    except ValueError:
        return 1


def has_header_attribute_marker(element: ElementNode, attribute_names: Iterable[str]) -> bool:
    """Return True if any of ``attribute_names`` signals header semantics.

    Blank values, ``"false"`` and ``"0"`` never qualify. On attributes named
    for a title, caption or heading any other non-blank value qualifies; on
    header-named attributes only ``true``/``1``/``yes`` do. ``scope`` accepts
    the column/row group values. Any value containing a header keyword
    (``header``, ``caption``, ``legend`` and so on) also qualifies.

    Parameters
    ----------
    element : ElementNode
        Row or cell element
    attribute_names : iterable of str
        Attributes to inspect, in order

    Returns
    -------
    bool
        True on the first qualifying attribute

    """
    for name in attribute_names:
        value = element.attr(name).strip()
        if not value:
            continue
        lowered = value.lower()
        if name == "scope" and lowered in HEADER_SCOPE_VALUES:
            return True

        names_title = any(keyword in name for keyword in ("title", "caption", "heading"))
        if names_title or "header" in name:
            if lowered in _FALSY_VALUES:
                continue
            if names_title or lowered in _TRUTHY_VALUES:
                return True

        if any(keyword in lowered for keyword in HEADER_ATTRIBUTE_VALUES):
            return True
    return False


def collect_rows(table: ElementNode) -> list[ElementNode]:
    """Return every ``tr`` below ``table`` in document order, skipping nested tables."""
    rows: list[ElementNode] = []
    stack = list(reversed(table.element_children()))
    while stack:
        element = stack.pop()
        if element.tag == "tr":
            rows.append(element)
        elif element.tag != "table":
            stack.extend(reversed(element.element_children()))
    return rows


def collect_cells(row: ElementNode) -> list[ElementNode]:
    """Return the ``td``/``th`` cells of ``row``, skipping nested tables."""
    cells: list[ElementNode] = []
    stack = list(reversed(row.element_children()))
    while stack:
        element = stack.pop()
        if element.tag in ("td", "th"):
            cells.append(element)
        elif element.tag != "table":
            stack.extend(reversed(element.element_children()))
    return cells


def in_header_context(row: ElementNode, table: ElementNode) -> bool:
    """Return True if a ``thead`` lies between ``row`` and ``table``."""
    cursor = row.parent
    while cursor is not None and cursor is not table:
        if cursor.tag == "thead":
            return True
        cursor = cursor.parent
    return False


def build_row_class_set(row: ElementNode, table: ElementNode) -> frozenset[str]:
    """Union of the row's classes, its ancestors' up to the table, and the table's."""
    return row.class_names() | row.ancestor_classes(stop_at=table) | table.class_names()


class TableParser:
    """Convert a ``table`` element into a :class:`~richblocks.ast.nodes.Table`.

    Parameters
    ----------
    options : RichTextOptions
        Limits and heuristics thresholds
    build_text : callable
        Inline-run composition for a cell element; returns None for blank cells
    diagnostic_callback : DiagnosticCallback or None, default None
        Sink for ``row_limit`` and ``column_limit`` events

    """

    def __init__(
        self,
        options: RichTextOptions,
        build_text: Callable[[ElementNode], Optional[StyledText]],
        diagnostic_callback: Optional[DiagnosticCallback] = None,
    ):
        """Initialize the table parser."""
        self.options = options
        self.build_text = build_text
        self.diagnostic_callback = diagnostic_callback

    def parse(self, table: ElementNode) -> Optional[Table]:
        """Parse a table element.

        Parameters
        ----------
        table : ElementNode
            The ``table`` element

        Returns
        -------
        Table or None
            The table, or None if it has no rows or no cells

        """
        rows = collect_rows(table)
        if not rows:
            return None

        max_rows = self.options.max_table_rows
        if len(rows) > max_rows:
            emit_diagnostic(
                self.diagnostic_callback,
                "row_limit",
                f"Table has {len(rows)} rows, limiting to {max_rows}",
                limit=max_rows,
                actual=len(rows),
            )
            rows = rows[:max_rows]

        header_rows: list[TableRow] = []
        body_rows: list[TableRow] = []
        for index, row in enumerate(rows):
            parsed = self.parse_row(row, table, in_header_context(row, table), is_first_row=index == 0)
            (header_rows if parsed.is_header else body_rows).append(parsed)

        column_count = max(
            (sum(cell.column_span for cell in row.cells) for row in (*header_rows, *body_rows)),
            default=0,
        )
        if column_count == 0:
            return None

        max_columns = self.options.max_table_columns
        if column_count > max_columns:
            emit_diagnostic(
                self.diagnostic_callback,
                "column_limit",
                f"Table has {column_count} columns, limiting to {max_columns}",
                limit=max_columns,
                actual=column_count,
            )
            column_count = max_columns

        return Table(
            header_rows=header_rows,
            body_rows=body_rows,
            column_count=column_count,
            class_names=table.class_names(),
        )

    def parse_row(self, row: ElementNode, table: ElementNode, header_context: bool, is_first_row: bool) -> TableRow:
        """Parse one ``tr`` element into a row with classified cells."""
        row_classes = build_row_class_set(row, table)
        cell_elements = collect_cells(row)

        if not cell_elements:
            is_header = (
                header_context
                or matches_any_marker(row.class_names(), HEADER_ROW_CLASS_MARKERS)
                or has_header_attribute_marker(row, HEADER_ROW_ATTRIBUTE_NAMES)
            )
            return TableRow(cells=[], is_header=is_header, class_names=row_classes)

        max_cells = self.options.max_table_columns
        if len(cell_elements) > max_cells:
            emit_diagnostic(
                self.diagnostic_callback,
                "column_limit",
                f"Table row has {len(cell_elements)} cells, limiting to {max_cells}",
                limit=max_cells,
                actual=len(cell_elements),
            )
            cell_elements = cell_elements[:max_cells]

        infos = [self.cell_info(cell) for cell in cell_elements]
        is_header_row = self.is_header_row(row, infos, header_context, is_first_row)

        cells = [
            TableCell(
                text=info.text,
                column_span=info.column_span,
                row_span=info.row_span,
                alignment=info.alignment,
                is_header=is_header_row or info.has_header_traits,
                class_names=info.class_names,
                width=info.width,
                padding_start=info.padding_start,
            )
            for info in infos
        ]
        return TableRow(cells=cells, is_header=is_header_row, class_names=row_classes)

    def cell_info(self, cell: ElementNode) -> CellInfo:
        """Gather text, spans, alignment, dimensions and header traits of a cell."""
        classes = cell.class_names()
        style = cell.attr("style")
        em = self.options.em_to_length_multiplier
        return CellInfo(
            text=self.build_text(cell) or StyledText(),
            raw_text=cell.text().strip(),
            column_span=parse_span(cell.attr("colspan")),
            row_span=parse_span(cell.attr("rowspan")),
            alignment=self.resolve_cell_alignment(cell),
            width=parse_width(cell.attr("width"), style, em),
            padding_start=parse_padding_start(style, em),
            class_names=classes,
            has_header_traits=self.is_header_cell(cell),
        )

    def resolve_cell_alignment(self, cell: ElementNode) -> TextAlign:
        """Resolve cell alignment.

        Order: the cell's own ``align``/``style``, the first descendant
        declaring an alignment within the bounded search depth, then center
        and end class markers, else ``"start"``.
        """
        own = parse_text_align(cell)
        if own is not None:
            return own

        frontier = cell.element_children()
        for _ in range(self.options.alignment_check_max_depth):
            if not frontier:
                break
            next_frontier: list[ElementNode] = []
            for element in frontier:
                alignment = parse_text_align(element)
                if alignment is not None:
                    return alignment
                next_frontier.extend(element.element_children())
            frontier = next_frontier

        classes = cell.class_names()
        if matches_any_marker(classes, CENTER_ALIGNMENT_CLASS_MARKERS):
            return "center"
        if matches_any_marker(classes, END_ALIGNMENT_CLASS_MARKERS):
            return "end"
        return "start"

    def is_header_cell(self, cell: ElementNode) -> bool:
        """Return True if the cell is a header by its own tag, markers or bold content."""
        if cell.tag == "th":
            return True
        if matches_any_marker(cell.class_names(), HEADER_CELL_CLASS_MARKERS):
            return True
        if has_header_attribute_marker(cell, HEADER_CELL_ATTRIBUTE_NAMES):
            return True
        if cell.attr("scope").strip().lower() in HEADER_SCOPE_VALUES:
            return True
        if cell.attr("role").strip().lower() in HEADER_ROLE_VALUES:
            return True
        # The budget counts the cell itself as the first level
        return cell.contains_bold_content(self.options.bold_check_max_depth - 1)

    def is_header_row(
        self, row: ElementNode, infos: list[CellInfo], header_context: bool, is_first_row: bool
    ) -> bool:
        """Classify a row as header or body by the six-step priority order."""
        if header_context:
            return True
        row_classes = row.class_names()
        if matches_any_marker(row_classes, HEADER_ROW_CLASS_MARKERS):
            return True
        row_has_header_attributes = has_header_attribute_marker(row, HEADER_ROW_ATTRIBUTE_NAMES)
        if row_has_header_attributes:
            return True
        row_has_title_class = matches_any_marker(row_classes, TITLE_ROW_CLASS_MARKERS)
        if row_has_title_class:
            return True
        if infos and all(info.has_header_traits for info in infos):
            return True

        if len(infos) != 1:
            return False
        info = infos[0]
        length = len(info.raw_text)
        if not 0 < length <= self.options.max_title_length:
            return False
        alphanumeric = sum(1 for ch in info.raw_text if ch.isalnum())
        if alphanumeric * 2 < length:
            return False

        center_aligned = info.alignment == "center" or parse_text_align(row) == "center"
        emphasised = info.has_header_traits or row_has_title_class or row_has_header_attributes
        spans_multiple = info.column_span >= 2
        return (center_aligned or emphasised) and (is_first_row or spans_multiple)
