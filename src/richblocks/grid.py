#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/grid.py
"""Physical grid layout for parsed tables.

A :class:`~richblocks.ast.nodes.Table` stores logical rows: each row lists
only the cells that start in it. Renderers need the physical grid, where a
cell with ``row_span > 1`` also reserves its columns in the following rows.
:class:`TableGridBuilder` walks the rows in order and tracks, per column, an
occupancy slot:

- empty: the next pending cell of the row is placed here
- anchor: the first column of a cell spanning into this row; an invisible
  placeholder with the anchor's span width is emitted and the anchor's
  remaining row count is decremented
- continuation: a later column of such a cell; skipped, since the anchor's
  placeholder already covers it

The builder is pure per table. Instances must not be shared between tables
but separate tables may be laid out concurrently.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Optional, Union

from richblocks.ast.nodes import Table, TableCell, TableRow
from richblocks.constants import DEFAULT_MAX_COLUMN_ITERATIONS
from richblocks.diagnostics import DiagnosticCallback, emit_diagnostic

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedCell:
    """One physical grid entry.

    Parameters
    ----------
    cell : TableCell
        Source cell; for placeholders, the cell whose row span covers this slot
    column_span : int
        Effective number of columns covered
    is_visible : bool
        False for continuation placeholders of a multi-row cell

    """

    cell: TableCell
    column_span: int
    is_visible: bool


@dataclass(frozen=True)
class RenderedRow:
    """A physical row ready for layout."""

    cells: tuple[RenderedCell, ...]
    is_header_row: bool
    class_names: frozenset[str]


@dataclass(frozen=True)
class TableRenderModel:
    """The physical grid of a table.

    Parameters
    ----------
    rows : tuple of RenderedRow
        Header rows followed by body rows
    column_count : int
        Widest column index reached, at least the table's declared count

    """

    rows: tuple[RenderedRow, ...]
    column_count: int


@dataclass
class _RowSpanTracker:
    cell: TableCell
    remaining_rows: int
    span_width: int
    start_column: int


@dataclass(frozen=True)
class _Anchor:
    tracker: _RowSpanTracker


@dataclass(frozen=True)
class _Continuation:
    tracker: _RowSpanTracker


_Slot = Optional[Union[_Anchor, _Continuation]]


class TableGridBuilder:
    """Stateful row-by-row grid builder for a single table.

    Parameters
    ----------
    max_column_iterations : int, default 500
        Loop ceiling per row, guarding against malformed span data
    diagnostic_callback : DiagnosticCallback or None, default None
        Receives an ``iteration_limit`` event when a row hits the ceiling

    Attributes
    ----------
    column_count : int
        Widest column index reached so far

    """

    def __init__(
        self,
        max_column_iterations: int = DEFAULT_MAX_COLUMN_ITERATIONS,
        diagnostic_callback: Optional[DiagnosticCallback] = None,
    ):
        """Initialize an empty grid."""
        self.max_column_iterations = max_column_iterations
        self.diagnostic_callback = diagnostic_callback
        self.column_count = 0
        self._slots: list[_Slot] = []

    def render_row(self, row: TableRow) -> RenderedRow:
        """Lay out the next logical row.

        Parameters
        ----------
        row : TableRow
            Next row in header-then-body order

        Returns
        -------
        RenderedRow
            Visible cells interleaved with placeholders for spans from above

        """
        pending = deque(row.cells)
        rendered: list[RenderedCell] = []
        column = 0
        iterations = 0

        while pending or self._has_anchors_from(column):
            if iterations >= self.max_column_iterations:
                emit_diagnostic(
                    self.diagnostic_callback,
                    "iteration_limit",
                    f"Table row layout stopped after {iterations} iterations",
                    limit=self.max_column_iterations,
                    actual=iterations,
                    pending_cells=len(pending),
                )
                break
            iterations += 1

            slot = self._slots[column] if column < len(self._slots) else None
            if isinstance(slot, _Anchor):
                tracker = slot.tracker
                rendered.append(RenderedCell(cell=tracker.cell, column_span=tracker.span_width, is_visible=False))
                tracker.remaining_rows -= 1
                if tracker.remaining_rows == 0:
                    self._clear(tracker)
                column += tracker.span_width
            elif isinstance(slot, _Continuation):
                column += 1
            elif not pending:
                column += 1
            else:
                cell = pending.popleft()
                span_width = max(cell.column_span, 1)
                self._ensure_slots(column + span_width)
                rendered.append(RenderedCell(cell=cell, column_span=span_width, is_visible=True))
                if cell.row_span > 1:
                    tracker = _RowSpanTracker(
                        cell=cell,
                        remaining_rows=cell.row_span - 1,
                        span_width=span_width,
                        start_column=column,
                    )
                    self._slots[column] = _Anchor(tracker)
                    for offset in range(1, span_width):
                        self._slots[column + offset] = _Continuation(tracker)
                column += span_width

        self.column_count = max(self.column_count, column)
        return RenderedRow(cells=tuple(rendered), is_header_row=row.is_header, class_names=row.class_names)

    def _has_anchors_from(self, start: int) -> bool:
        return any(isinstance(slot, _Anchor) for slot in self._slots[start:])

    def _ensure_slots(self, required: int) -> None:
        if required > len(self._slots):
            self._slots.extend([None] * (required - len(self._slots)))

    def _clear(self, tracker: _RowSpanTracker) -> None:
        end = min(tracker.start_column + tracker.span_width, len(self._slots))
        for index in range(tracker.start_column, end):
            self._slots[index] = None


def build_render_model(
    table: Table,
    max_column_iterations: int = DEFAULT_MAX_COLUMN_ITERATIONS,
    diagnostic_callback: Optional[DiagnosticCallback] = None,
) -> TableRenderModel:
    """Lay out a table's header rows followed by its body rows.

    Parameters
    ----------
    table : Table
        Parsed table block
    max_column_iterations : int, default 500
        Loop ceiling per row
    diagnostic_callback : DiagnosticCallback or None, default None
        Sink for ``iteration_limit`` events

    Returns
    -------
    TableRenderModel
        Physical rows and ``max(table.column_count, widest column reached)``

    Examples
    --------
        >>> model = build_render_model(table)
        >>> [cell.is_visible for cell in model.rows[1].cells]
        [False, True]

    """
    builder = TableGridBuilder(max_column_iterations=max_column_iterations, diagnostic_callback=diagnostic_callback)
    rows = tuple(builder.render_row(row) for row in table.rows)
    column_count = max(table.column_count, builder.column_count)
    logger.debug(f"Built table grid with {len(rows)} rows and {column_count} columns")
    return TableRenderModel(rows=rows, column_count=column_count)
