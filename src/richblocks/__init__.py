"""richblocks - rich text quiz markup to renderable blocks.

richblocks turns loosely structured, inconsistently authored markup (quiz
questions, explanations, answer choices) into an ordered list of typed blocks
that a client can render natively: paragraphs and headings with styled text,
lists, dividers, code, tables with spans and header detection, images and
"abstract" summary boxes.

Key Features
------------
- Tolerant streaming parse driven by the ``justhtml`` tokenizer; malformed
  markup never raises
- Styled text with bold / italic / underline / strike, highlights, links and
  tooltips carried as annotations over character ranges
- Class-name heuristics for header rows, title rows, bold cells and alignment
- Table grid layout honoring row and column spans
- Defensive limits (recursion depth, rows, columns, grid iterations) reported
  through a diagnostic callback
- Hint separation for question markup

Requirements
------------
- Python 3.10+
- ``justhtml`` for tokenizing
- ``beautifulsoup4`` for stripping markup from tooltip payloads

Examples
--------
Parse a fragment:

    >>> from richblocks import parse_html
    >>> blocks = parse_html("<h2>Heart</h2><p>The <b>aorta</b> leaves the left ventricle.</p>")
    >>> [type(block).__name__ for block in blocks]
    ['Heading', 'Paragraph']

Configure the parser and collect limit breaches:

    >>> from richblocks import RichTextOptions
    >>> options = RichTextOptions(show_selected_highlight=True, max_table_rows=200)
    >>> events = []
    >>> blocks = parse_html(html, options=options, diagnostic_callback=events.append)

Lay out a table:

    >>> from richblocks import table_render_model
    >>> model = table_render_model(blocks[0])
    >>> model.column_count
    3

See Also
--------
richblocks.ast : Block definitions and serialization
richblocks.parsers : Parser classes

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "richblocks requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from richblocks.api import media_model, parse_events, parse_html, table_render_model
from richblocks.ast import (
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
    blocks_to_json,
)
from richblocks.diagnostics import DiagnosticCallback, DiagnosticEvent
from richblocks.exceptions import DependencyError, InvalidOptionsError, RichBlocksError, ValidationError
from richblocks.grid import RenderedCell, RenderedRow, TableRenderModel
from richblocks.hints import QuestionParts, extract_question_parts
from richblocks.options import RichTextOptions
from richblocks.parsers import RichTextParser
from richblocks.styles import Color, RichTextPalette, SpanStyle
from richblocks.text import Annotation, StyledRun, StyledText
from richblocks.utils.html_sanitizer import sanitize_for_webview

__all__ = [
    "__version__",
    # API
    "parse_html",
    "parse_events",
    "table_render_model",
    "media_model",
    "sanitize_for_webview",
    "extract_question_parts",
    "QuestionParts",
    "RichTextParser",
    "RichTextOptions",
    # Blocks
    "Block",
    "Paragraph",
    "Heading",
    "BulletList",
    "OrderedList",
    "CodeBlock",
    "Divider",
    "Table",
    "TableRow",
    "TableCell",
    "AbstractBlock",
    "Media",
    "blocks_to_json",
    # Styled text
    "StyledText",
    "StyledRun",
    "Annotation",
    "SpanStyle",
    "Color",
    "RichTextPalette",
    # Tables
    "TableRenderModel",
    "RenderedRow",
    "RenderedCell",
    # Diagnostics and errors
    "DiagnosticEvent",
    "DiagnosticCallback",
    "RichBlocksError",
    "ValidationError",
    "InvalidOptionsError",
    "DependencyError",
]
