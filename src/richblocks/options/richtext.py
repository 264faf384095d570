#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/options/richtext.py
"""Configuration options for rich text parsing.

This module defines the options controlling style resolution and the
defensive bounds applied to untrusted quiz markup.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from richblocks.constants import (
    DEFAULT_ALIGNMENT_CHECK_MAX_DEPTH,
    DEFAULT_BOLD_CHECK_MAX_DEPTH,
    DEFAULT_BOLD_FONT_WEIGHT_THRESHOLD,
    DEFAULT_EM_TO_LENGTH_MULTIPLIER,
    DEFAULT_MAX_COLUMN_ITERATIONS,
    DEFAULT_MAX_TABLE_COLUMNS,
    DEFAULT_MAX_TABLE_ROWS,
    DEFAULT_MAX_TITLE_LENGTH,
)
from richblocks.media import MediaResolver
from richblocks.options.base import BaseParserOptions
from richblocks.styles import RichTextPalette


@dataclass(frozen=True)
class RichTextOptions(BaseParserOptions):
    """Configuration options for HTML-to-block parsing.

    Parameters
    ----------
    show_selected_highlight : bool, default False
        Highlight elements with the ``selected`` class. Callers enable this
        once the answer to a question has been revealed.
    palette : RichTextPalette, default RichTextPalette()
        Colors used when resolving inline styles
    media_resolver : MediaResolver or None, default None
        Maps a bare media filename to a local resource path; consulted by
        :func:`richblocks.api.media_model`
    max_recursion_depth : int, default 100
        Block nesting depth at which parsing of a subtree stops
    max_table_rows : int, default 1000
        Rows beyond this count are dropped
    max_table_columns : int, default 50
        Column counts above this are clamped
    max_title_length : int, default 200
        Longest text a single-cell row may hold and still count as a title row
    bold_font_weight_threshold : int, default 600
        Numeric ``font-weight`` at or above which text counts as bold
    bold_check_max_depth : int, default 4
        Descendant levels searched for bold content in table cells
    alignment_check_max_depth : int, default 4
        Descendant levels searched for an alignment when a table cell declares none
    em_to_length_multiplier : float, default 16.0
        Layout units per ``em`` when converting cell widths and padding
    max_column_iterations : int, default 500
        Iteration ceiling per rendered table row in the grid builder

    Examples
    --------
    Enable selection highlighting on a copy of the defaults:

        >>> options = RichTextOptions().create_updated(show_selected_highlight=True)

    """

    show_selected_highlight: bool = field(
        default=False,
        metadata={"help": "Highlight elements marked 'selected' (answer revealed)", "importance": "core"},
    )
    palette: RichTextPalette = field(
        default_factory=RichTextPalette,
        metadata={"help": "Named colors used for style resolution", "importance": "core"},
    )
    media_resolver: Optional[MediaResolver] = field(
        default=None,
        metadata={"help": "Callable mapping a media filename to a local path", "importance": "advanced"},
    )
    max_table_rows: int = field(
        default=DEFAULT_MAX_TABLE_ROWS,
        metadata={"help": "Maximum rows kept per table", "type": int, "importance": "security"},
    )
    max_table_columns: int = field(
        default=DEFAULT_MAX_TABLE_COLUMNS,
        metadata={"help": "Maximum resolved column count per table", "type": int, "importance": "security"},
    )
    max_title_length: int = field(
        default=DEFAULT_MAX_TITLE_LENGTH,
        metadata={"help": "Longest text of a single-cell title row", "type": int, "importance": "advanced"},
    )
    bold_font_weight_threshold: int = field(
        default=DEFAULT_BOLD_FONT_WEIGHT_THRESHOLD,
        metadata={"help": "Numeric font-weight treated as bold", "type": int, "importance": "advanced"},
    )
    bold_check_max_depth: int = field(
        default=DEFAULT_BOLD_CHECK_MAX_DEPTH,
        metadata={"help": "Descendant depth searched for bold cell content", "type": int, "importance": "advanced"},
    )
    alignment_check_max_depth: int = field(
        default=DEFAULT_ALIGNMENT_CHECK_MAX_DEPTH,
        metadata={"help": "Descendant depth searched for cell alignment", "type": int, "importance": "advanced"},
    )
    em_to_length_multiplier: float = field(
        default=DEFAULT_EM_TO_LENGTH_MULTIPLIER,
        metadata={"help": "Layout units per em", "type": float, "importance": "advanced"},
    )
    max_column_iterations: int = field(
        default=DEFAULT_MAX_COLUMN_ITERATIONS,
        metadata={"help": "Iteration ceiling per rendered table row", "type": int, "importance": "security"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any limit is not positive.

        """
        super().__post_init__()

        for name in (
            "max_table_rows",
            "max_table_columns",
            "max_title_length",
            "bold_font_weight_threshold",
            "bold_check_max_depth",
            "alignment_check_max_depth",
            "em_to_length_multiplier",
            "max_column_iterations",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
