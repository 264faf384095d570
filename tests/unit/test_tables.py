#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for table parsing and header inference."""

import pytest
from utils import first_element

from richblocks.ast import Paragraph, Table
from richblocks.options import RichTextOptions
from richblocks.parsers import RichTextParser
from richblocks.parsers.tables import collect_cells, collect_rows, has_header_attribute_marker, parse_span


def _table(html, options=None, diagnostics=None) -> Table:
    callback = diagnostics.append if diagnostics is not None else None
    blocks = RichTextParser(options, diagnostic_callback=callback).parse(html)
    tables = [block for block in blocks if isinstance(block, Table)]
    assert len(tables) == 1, blocks
    return tables[0]


@pytest.mark.unit
class TestCollection:
    """Test row and cell collection."""

    def test_rows_through_wrappers_not_nested_tables(self) -> None:
        """Test that nested table rows are not collected."""
        table = first_element(
            "<table><tbody><tr><td>outer<table><tr><td>inner</td></tr></table></td></tr>"
            "<tr><td>second</td></tr></tbody></table>",
            "table",
        )
        rows = collect_rows(table)
        assert [row.text() for row in rows] == ["outerinner", "second"]
        assert len(collect_cells(rows[0])) == 1

    def test_cells_through_wrappers(self) -> None:
        """Test cells nested in non-table wrappers."""
        row = first_element("<table><tr><div><td>a</td></div><th>b</th></tr></table>", "tr")
        assert [cell.tag for cell in collect_cells(row)] == ["td", "th"]

    @pytest.mark.parametrize("value, expected", [("2", 2), (" 3 ", 3), ("0", 1), ("-4", 1), ("abc", 1), ("", 1)])
    def test_parse_span(self, value, expected) -> None:
        """Test span parsing with a floor of one."""
        assert parse_span(value) == expected

    def test_empty_table_is_pruned(self) -> None:
        """Test tables with no rows or no cells."""
        parser = RichTextParser()
        assert parser.parse("<table></table>") == []
        assert parser.parse("<table><tr></tr></table>") == []

    def test_nested_table_does_not_inflate_outer_rows(self) -> None:
        """Test the outer table of a nested pair."""
        table = _table("<table><tr><td>outer<table><tr><td>a</td><td>b</td></tr></table></td></tr></table>")
        assert len(table.rows) == 1
        assert table.column_count == 1

    def test_omitted_cell_and_row_end_tags(self) -> None:
        """Test cells and rows closed by the next sibling, with a paragraph after the table."""
        blocks = RichTextParser().parse("<table><tr><td>a<td>b<tr><td>c<td>d</table><p>after</p>")
        assert [type(block) for block in blocks] == [Table, Paragraph]
        table = blocks[0]
        assert table.column_count == 2
        assert [[cell.text.text for cell in row.cells] for row in table.rows] == [["a", "b"], ["c", "d"]]
        assert blocks[1].text.text == "after"

    def test_omitted_end_tags_inside_sections(self) -> None:
        """Test that a new table section closes the open row and cell."""
        table = _table("<table><thead><tr><th>H1<th>H2<tbody><tr><td>1<td>2</table>")
        assert [[cell.text.text for cell in row.cells] for row in table.header_rows] == [["H1", "H2"]]
        assert [[cell.text.text for cell in row.cells] for row in table.body_rows] == [["1", "2"]]


@pytest.mark.unit
class TestCellAttributes:
    """Test per-cell attribute parsing."""

    def test_spans(self) -> None:
        """Test column and row spans."""
        table = _table('<table><tr><td colspan="2" rowspan="3">a</td><td colspan="x">b</td></tr></table>')
        first, second = table.body_rows[0].cells
        assert (first.column_span, first.row_span) == (2, 3)
        assert (second.column_span, second.row_span) == (1, 1)
        assert table.column_count == 3

    def test_width_and_padding(self) -> None:
        """Test width in px and padding in em."""
        table = _table(
            '<table><tr><td style="width: 120px; padding-left: 1.5em">a</td><td width="50%">b</td></tr></table>'
        )
        first, second = table.body_rows[0].cells
        assert first.width == 120.0
        assert first.padding_start == 24.0
        assert second.width is None
        assert second.padding_start == 0.0

    def test_width_attribute_fallback(self) -> None:
        """Test the width attribute when style has none."""
        table = _table('<table><tr><td width="80">a</td></tr></table>')
        assert table.body_rows[0].cells[0].width == 80.0

    @pytest.mark.parametrize(
        "cell, expected",
        [
            ('<td align="center">x</td>', "center"),
            ('<td style="text-align:right">x</td>', "end"),
            ('<td><p style="text-align: center">x</p></td>', "center"),
            ('<td class="text-right">x</td>', "end"),
            ('<td class="ta-center">x</td>', "center"),
            ("<td>x</td>", "start"),
        ],
    )
    def test_alignment_resolution(self, cell, expected) -> None:
        """Test own, descendant, class and default alignment."""
        table = _table(f"<table><tr><td>a</td><td>b</td></tr><tr>{cell}<td>y</td></tr></table>")
        assert table.body_rows[1].cells[0].alignment == expected

    def test_alignment_search_depth_has_its_own_option(self) -> None:
        """Test that only alignment_check_max_depth bounds the descendant alignment search."""
        cell = '<td><span><span><span><span><p style="text-align:center">x</p></span></span></span></span></td>'
        html = f"<table><tr><td>a</td><td>b</td></tr><tr>{cell}<td>y</td></tr></table>"

        def alignment(options=None):
            return _table(html, options).body_rows[1].cells[0].alignment

        assert alignment() == "start"
        assert alignment(RichTextOptions(bold_check_max_depth=8)) == "start"
        assert alignment(RichTextOptions(alignment_check_max_depth=5)) == "center"

    def test_class_names(self) -> None:
        """Test row class union with wrappers and the table."""
        table = _table(
            '<table class="data"><tbody class="grp"><tr class="row"><td class="c">a</td></tr></tbody></table>'
        )
        row = table.rows[0]
        assert row.class_names == frozenset({"data", "grp", "row"})
        assert row.cells[0].class_names == frozenset({"c"})
        assert table.class_names == frozenset({"data"})


@pytest.mark.unit
class TestHeaderRows:
    """Test header-row classification."""

    def test_thead_context(self) -> None:
        """Test rows inside thead."""
        table = _table(
            "<table><thead><tr><td>H</td><td>I</td></tr></thead>"
            "<tbody><tr><td>a</td><td>b</td></tr></tbody></table>"
        )
        assert len(table.header_rows) == 1
        assert all(cell.is_header for cell in table.header_rows[0].cells)
        assert len(table.body_rows) == 1

    def test_header_row_class_marker(self) -> None:
        """Test separator-insensitive row class markers."""
        table = _table('<table><tr class="Table_Header"><td>a</td><td>b</td></tr><tr><td>1</td><td>2</td></tr></table>')
        assert len(table.header_rows) == 1

    def test_title_row_class_marker(self) -> None:
        """Test the title-row marker set."""
        table = _table('<table><tr><td>a</td></tr><tr class="caption-row"><td>b</td></tr></table>')
        assert [row.cells[0].text.text for row in table.header_rows] == ["b"]

    @pytest.mark.parametrize(
        "attributes, is_header",
        [
            ('data-header="yes"', True),
            ('data-header="true"', True),
            ('data-header="false"', False),
            ('data-header="0"', False),
            ('data-header=""', False),
            ('data-title="Vitals"', True),
            ('role="rowheader"', True),
            ('data-row-type="table-summary"', True),
            ('data-row-type="body"', False),
        ],
    )
    def test_row_attribute_markers(self, attributes, is_header) -> None:
        """Test header-indicating row attributes."""
        table = _table(f"<table><tr><td>a</td><td>b</td></tr><tr {attributes}><td>1</td><td>2</td></tr></table>")
        assert len(table.header_rows) == int(is_header)

    def test_all_th_cells(self) -> None:
        """Test rows of header cells."""
        table = _table("<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>")
        assert len(table.header_rows) == 1

    def test_all_bold_cells(self) -> None:
        """Test rows whose cells carry bold content."""
        table = _table(
            "<table><tr><td><b>A</b></td><td><strong>B</strong></td></tr><tr><td>1</td><td>2</td></tr></table>"
        )
        assert len(table.header_rows) == 1

    def test_bold_beyond_search_depth(self) -> None:
        """Test that bold content below the search depth does not count."""
        deep = "<span><span><span><span><b>A</b></span></span></span></span>"
        html = f"<table><tr><td>{deep}</td><td>{deep}</td></tr><tr><td>1</td><td>2</td></tr></table>"
        assert _table(html).header_rows == []
        options = RichTextOptions(bold_check_max_depth=6)
        assert len(_table(html, options).header_rows) == 1

    def test_mixed_row_is_body_with_header_cell(self) -> None:
        """Test that a lone th does not make the row a header row."""
        table = _table("<table><tr><td>a</td><td>b</td></tr><tr><th>Label</th><td>value</td></tr></table>")
        row = table.body_rows[1]
        assert not row.is_header
        assert [cell.is_header for cell in row.cells] == [True, False]

    def test_scope_and_role_cells(self) -> None:
        """Test ARIA and scope header semantics on cells."""
        table = _table(
            '<table><tr><td scope="col">A</td><td role="columnheader">B</td></tr><tr><td>1</td><td>2</td></tr></table>'
        )
        assert len(table.header_rows) == 1


@pytest.mark.unit
class TestTitleRowHeuristic:
    """Test the single-cell title row heuristic."""

    def test_centered_first_row(self) -> None:
        """Test a centered first row titled Summary."""
        table = _table('<table><tr><td align="center">Summary</td></tr><tr><td>a</td><td>b</td></tr></table>')
        assert [row.cells[0].text.text for row in table.header_rows] == ["Summary"]

    def test_centered_non_first_row(self) -> None:
        """Test that the same row later in the table stays a body row."""
        table = _table('<table><tr><td>a</td><td>b</td></tr><tr><td align="center">Summary</td></tr></table>')
        assert table.header_rows == []

    def test_centered_non_first_row_spanning_columns(self) -> None:
        """Test that a multi-column title row later in the table is a header."""
        table = _table(
            '<table><tr><td>a</td><td>b</td></tr><tr><td align="center" colspan="2">Summary</td></tr></table>'
        )
        assert len(table.header_rows) == 1

    def test_uncentered_first_row(self) -> None:
        """Test a plain single-cell first row."""
        table = _table("<table><tr><td>Summary</td></tr><tr><td>a</td><td>b</td></tr></table>")
        assert table.header_rows == []

    def test_row_alignment_counts(self) -> None:
        """Test centering declared on the row."""
        table = _table('<table><tr style="text-align:center"><td>Summary</td></tr><tr><td>a</td></tr></table>')
        assert len(table.header_rows) == 1

    def test_long_text_is_not_a_title(self) -> None:
        """Test the length ceiling."""
        text = "word " * 50
        table = _table(f'<table><tr><td align="center">{text}</td></tr><tr><td>a</td></tr></table>')
        assert table.header_rows == []

    def test_sparse_text_is_not_a_title(self) -> None:
        """Test the alphanumeric density check."""
        table = _table('<table><tr><td align="center">-- ** --</td></tr><tr><td>a</td></tr></table>')
        assert table.header_rows == []


@pytest.mark.unit
class TestLimits:
    """Test row and column ceilings."""

    def test_row_limit(self) -> None:
        """Test that excess rows are dropped with a diagnostic."""
        diagnostics = []
        rows = "".join(f"<tr><td>{index}</td></tr>" for index in range(5))
        table = _table(f"<table>{rows}</table>", RichTextOptions(max_table_rows=3), diagnostics)
        assert len(table.rows) == 3
        (event,) = diagnostics
        assert (event.event_type, event.limit, event.actual) == ("row_limit", 3, 5)

    def test_cells_per_row_are_capped(self) -> None:
        """Test that a row with too many cells is truncated."""
        diagnostics = []
        table = _table(
            "<table><tr><td>a</td><td>b</td><td>c</td></tr></table>", RichTextOptions(max_table_columns=2), diagnostics
        )
        assert len(table.rows[0].cells) == 2
        assert table.column_count == 2
        assert [event.event_type for event in diagnostics] == ["column_limit"]

    def test_column_count_is_clamped(self) -> None:
        """Test that wide spans are clamped rather than rejected."""
        diagnostics = []
        table = _table(
            '<table><tr><td colspan="9">a</td></tr></table>', RichTextOptions(max_table_columns=4), diagnostics
        )
        assert table.column_count == 4
        assert diagnostics[0].actual == 9


@pytest.mark.unit
class TestHeaderAttributeMarker:
    """Test the attribute marker helper directly."""

    def test_keyword_in_value(self) -> None:
        """Test header keywords inside values."""
        cell = first_element('<table><tr><td data-cell-type="legend-cell">x</td></tr></table>', "td")
        assert has_header_attribute_marker(cell, ("data-cell-type",))

    def test_scope_values(self) -> None:
        """Test scope on cells."""
        cell = first_element('<table><tr><td scope="rowgroup">x</td></tr></table>', "td")
        assert has_header_attribute_marker(cell, ("scope",))
