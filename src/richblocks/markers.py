#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/markers.py
"""Class-name marker matching and curated marker vocabularies.

Quiz content rarely uses semantic markup for table headers, bold labels or
alignment. Instead it relies on ad-hoc class names (``table-header``,
``fw-bold``, ``text-centre``) and data attributes. This module normalizes those
class names and matches them against curated vocabularies.

A marker is normalized by dropping whitespace, hyphens and underscores and
lowercasing the rest, so ``Table_Header``, ``table-header`` and
``tableheader`` all compare equal.
"""

from __future__ import annotations

from collections.abc import Iterable


def normalize_marker(value: str) -> str:
    """Normalize a class marker for separator- and case-insensitive comparison.

    Parameters
    ----------
    value : str
        Raw class name

    Returns
    -------
    str
        Lowercased class name without whitespace, ``-`` or ``_``

    """
    if not value:
        return value
    return "".join(ch for ch in value if not ch.isspace() and ch not in "-_").lower()


def normalized_markers(*markers: str) -> frozenset[str]:
    """Build a frozen set of normalized markers."""
    return frozenset(normalize_marker(marker) for marker in markers)


def matches_any_marker(classes: Iterable[str], markers: frozenset[str]) -> bool:
    """Return True if any class normalizes to a member of ``markers``.

    Parameters
    ----------
    classes : iterable of str
        Raw class names of an element
    markers : frozenset of str
        Normalized marker vocabulary, see :func:`normalized_markers`

    Returns
    -------
    bool
        True when at least one class matches

    """
    if not markers:
        return False
    return any(normalize_marker(candidate) in markers for candidate in classes)


def contains_insensitive(classes: Iterable[str], target: str) -> bool:
    """Return True if ``classes`` contains ``target`` ignoring case."""
    target = target.lower()
    return any(candidate.lower() == target for candidate in classes)


def contains_any_insensitive(classes: Iterable[str], targets: Iterable[str]) -> bool:
    """Return True if ``classes`` contains any of ``targets`` ignoring case."""
    lowered = {candidate.lower() for candidate in classes}
    if not lowered:
        return False
    return any(target.lower() in lowered for target in targets)


# =============================================================================
# Tag vocabularies
# =============================================================================

IGNORED_TAGS = frozenset({"style", "script", "head", "meta", "link", "title"})

# Children of <p> that interrupt the paragraph and are parsed as blocks
BLOCK_LEVEL_CHILD_TAGS = frozenset(
    {
        "div",
        "section",
        "article",
        "table",
        "ul",
        "ol",
        "dl",
        "figure",
        "figcaption",
        "blockquote",
        "pre",
        "form",
        "header",
        "footer",
        "nav",
        "aside",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "hr",
    }
)

# Elements that never have content, the tokenizer emits no end tag for them
VOID_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)

_CLOSES_PARAGRAPH = frozenset({"p"})
_CLOSES_FORM_CONTROL = frozenset({"input", "option", "optgroup", "select", "button", "datalist", "textarea"})
_CLOSES_TABLE_SECTION = frozenset({"thead", "tbody", "tfoot", "tr", "th", "td"})
_CLOSES_DEFINITION = frozenset({"dd", "dt"})
_CLOSES_RUBY = frozenset({"rt", "rp"})

_PARAGRAPH_CLOSING_TAGS = (
    "p",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "address",
    "article",
    "aside",
    "blockquote",
    "details",
    "div",
    "dl",
    "fieldset",
    "figcaption",
    "figure",
    "footer",
    "form",
    "header",
    "hr",
    "main",
    "nav",
    "ol",
    "pre",
    "section",
    "table",
    "ul",
)

# Start tag -> open elements it closes when they sit on top of the stack.
# Optional end tags (</li>, </td>, </p>, ...) are implied by the next sibling.
OPEN_IMPLIES_CLOSE: dict[str, frozenset[str]] = {
    "tr": frozenset({"tr", "th", "td"}),
    "th": frozenset({"th", "td"}),
    "td": frozenset({"thead", "th", "td"}),
    "body": frozenset({"head", "link", "script"}),
    "li": frozenset({"li"}),
    "option": frozenset({"option"}),
    "optgroup": frozenset({"optgroup", "option"}),
    "dd": _CLOSES_DEFINITION,
    "dt": _CLOSES_DEFINITION,
    "rt": _CLOSES_RUBY,
    "rp": _CLOSES_RUBY,
    "thead": _CLOSES_TABLE_SECTION,
    "tbody": _CLOSES_TABLE_SECTION,
    "tfoot": _CLOSES_TABLE_SECTION,
    **{tag: _CLOSES_FORM_CONTROL for tag in ("select", "input", "output", "button", "datalist", "textarea")},
    **{tag: _CLOSES_PARAGRAPH for tag in _PARAGRAPH_CLOSING_TAGS},
}

# =============================================================================
# Class marker vocabularies
# =============================================================================

ABSTRACT_CLASS_NAME = "abstract"

HEADER_ROW_CLASS_MARKERS = normalized_markers(
    "header",
    "table-header",
    "table_header",
    "tableheader",
    "table-header-row",
    "tableheaderrow",
    "thead",
    "tablehead",
    "column-header-row",
    "columnheaderrow",
    "ueberschrift",
    "titelzeile",
    "section-header",
    "subheader",
    "table-heading",
    "tableheading",
)

TITLE_ROW_CLASS_MARKERS = normalized_markers(
    "table-title",
    "tabletitle",
    "table-caption",
    "tablecaption",
    "caption-row",
    "captionrow",
    "legend-row",
    "legendrow",
    "data-table-title",
    "datatabletitle",
)

HEADER_CELL_CLASS_MARKERS = normalized_markers(
    "header",
    "table-header",
    "tableheader",
    "column-header",
    "columnheader",
    "row-header",
    "rowheader",
    "table-head",
    "tablehead",
    "col-header",
    "colheader",
    "ueberschrift",
    "title-cell",
    "titlecell",
    "label-cell",
    "labelcell",
)

BOLD_CLASS_MARKERS = normalized_markers(
    "bold",
    "text-bold",
    "fw-bold",
    "fwbold",
    "font-weight-bold",
    "fontweightbold",
    "strong",
    "important",
)

CENTER_ALIGNMENT_CLASS_MARKERS = normalized_markers(
    "text-center",
    "text-centre",
    "align-center",
    "centered",
    "centre-text",
    "ta-center",
    "tacentre",
    "center-text",
)

END_ALIGNMENT_CLASS_MARKERS = normalized_markers(
    "text-right",
    "text-end",
    "align-right",
    "align-end",
    "ta-right",
    "taright",
    "text-right-align",
    "textright",
)

# Matched case-insensitively but without separator normalization
TOOLTIP_CONTENT_CLASS_NAMES = frozenset(
    {
        "tooltiptext",
        "tooltip-text",
        "tooltip-content",
        "tooltip__content",
        "annotation-description",
        "annotation__description",
        "smartip-description",
        "smartip__description",
        "smartip-content",
        "smartip__content",
    }
)

# =============================================================================
# Attribute vocabularies
# =============================================================================

# Substrings of attribute values that indicate header semantics
HEADER_ATTRIBUTE_VALUES = (
    "header",
    "heading",
    "title",
    "label",
    "legend",
    "summary",
    "caption",
    "topic",
    "thead",
)

HEADER_ROW_ATTRIBUTE_NAMES = (
    "data-row-type",
    "data-type",
    "role",
    "data-role",
    "aria-role",
    "data-section",
    "data-header",
    "data-caption",
    "data-title",
    "data-heading",
)

HEADER_CELL_ATTRIBUTE_NAMES = (
    "data-cell-type",
    "data-type",
    "role",
    "data-role",
    "data-header",
    "data-heading",
    "headers",
    "scope",
)

HEADER_SCOPE_VALUES = frozenset({"col", "colgroup", "row", "rowgroup"})
HEADER_ROLE_VALUES = frozenset({"columnheader", "rowheader"})

# Attributes checked, in order, for a tooltip payload
TOOLTIP_ATTRIBUTE_CANDIDATES = (
    "data-tooltip",
    "data-tooltip-text",
    "data-tooltip-content",
    "data-smartip",
    "data-smarttip",
    "miamed-smartip",
    "data-description",
    "data-desc",
    "data-term-description",
    "data-info",
    "data-message",
    "data-details",
    "data-content",
    "data-title",
    "title",
)

TOOLTIP_JSON_ATTRIBUTE = "data-tooltip-json"

# Keys checked, in order, inside a JSON tooltip payload
TOOLTIP_JSON_KEYS = ("description", "text", "content", "value", "body", "tooltip", "message")
