#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/utils/css.py
"""Helpers for the small set of inline CSS properties richblocks honours.

Only ``text-align``, ``font-weight``, ``width`` (and its min/max variants) and
``padding-left`` are read. There is no cascade: every lookup inspects a single
element's ``style`` attribute.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from richblocks.constants import DEFAULT_BOLD_FONT_WEIGHT_THRESHOLD, DEFAULT_EM_TO_LENGTH_MULTIPLIER, TextAlign

if TYPE_CHECKING:
    from richblocks.dom import ElementNode

logger = logging.getLogger(__name__)

_ALIGN_VALUES: dict[str, TextAlign] = {
    "center": "center",
    "right": "end",
    "justify": "justify",
}


def extract_css_value(style_attr: str, property_name: str) -> Optional[str]:
    """Return the value of ``property_name`` in an inline style declaration.

    Parameters
    ----------
    style_attr : str
        Raw ``style`` attribute value
    property_name : str
        CSS property to look up (case-insensitive)

    Returns
    -------
    str or None
        The first non-empty value with any ``!important`` suffix removed

    """
    if not style_attr or not style_attr.strip():
        return None
    for declaration in style_attr.split(";"):
        name, sep, raw_value = declaration.partition(":")
        if not sep or name.strip().lower() != property_name.lower():
            continue
        value = raw_value.split("!important", 1)[0].strip()
        if value:
            return value
    return None


def _map_alignment(value: str) -> TextAlign:
    return _ALIGN_VALUES.get(value, "start")


def parse_text_align(element: ElementNode) -> Optional[TextAlign]:
    """Resolve an element's own alignment from ``align`` or ``style``.

    Parameters
    ----------
    element : ElementNode
        Element to inspect

    Returns
    -------
    TextAlign or None
        ``"center"``, ``"end"``, ``"justify"`` or ``"start"`` when the element
        declares an alignment, None when it declares none

    """
    align = element.attr("align").strip().lower()
    if align:
        return _map_alignment(align)

    style = element.attr("style").lower()
    if "text-align" in style:
        value = style.split("text-align", 1)[1]
        value = value.split(":", 1)[1] if ":" in value else ""
        return _map_alignment(value.split(";", 1)[0].strip())
    return None


def parse_length(value: str, em_multiplier: float = DEFAULT_EM_TO_LENGTH_MULTIPLIER) -> Optional[float]:
    """Convert a CSS length to layout units.

    Parameters
    ----------
    value : str
        Raw length such as ``"120px"``, ``"1.5em"`` or ``"80"``
    em_multiplier : float, default 16.0
        Layout units per ``em``

    Returns
    -------
    float or None
        The length, or None for percentages and unparsable values

    """
    clean = value.strip().lower()
    if not clean or clean.endswith("%"):
        return None
    multiplier = 1.0
    if clean.endswith("px"):
        clean = clean[:-2]
    elif clean.endswith("em"):
        clean = clean[:-2]
        multiplier = em_multiplier
    try:
        return float(clean) * multiplier
    except ValueError:
        logger.debug(f"Ignoring unparsable CSS length: {value!r}")
        return None


def parse_width(
    width_attr: str, style_attr: str, em_multiplier: float = DEFAULT_EM_TO_LENGTH_MULTIPLIER
) -> Optional[float]:
    """Resolve a table cell width from its style, falling back to ``width=``.

    ``width``, ``min-width`` and ``max-width`` are tried in that order before
    the attribute. Percentages are ignored.
    """
    for property_name in ("width", "min-width", "max-width"):
        value = extract_css_value(style_attr, property_name)
        if value is not None:
            length = parse_length(value, em_multiplier)
            if length is not None:
                return length
    if width_attr.strip():
        return parse_length(width_attr, em_multiplier)
    return None


def parse_padding_start(style_attr: str, em_multiplier: float = DEFAULT_EM_TO_LENGTH_MULTIPLIER) -> float:
    """Return the ``padding-left`` of a cell in layout units (0 if absent)."""
    padding = extract_css_value(style_attr, "padding-left")
    if padding is None:
        return 0.0
    padding = padding.lower()
    if not padding.endswith(("em", "px")):
        return 0.0
    return parse_length(padding, em_multiplier) or 0.0


def style_indicates_bold(style_attr: str, threshold: int = DEFAULT_BOLD_FONT_WEIGHT_THRESHOLD) -> bool:
    """Return True if an inline style sets a bold ``font-weight``.

    Parameters
    ----------
    style_attr : str
        Raw ``style`` attribute value
    threshold : int, default 600
        Numeric weight at or above which text counts as bold

    Returns
    -------
    bool
        True for ``bold``/``bolder`` or a numeric weight >= threshold

    """
    font_weight = extract_css_value(style_attr, "font-weight")
    if font_weight is None:
        return False
    font_weight = font_weight.strip().lower()
    if font_weight.startswith("bold"):
        return True
    digits = "".join(ch for ch in font_weight if ch.isdigit())
    return bool(digits) and int(digits) >= threshold
