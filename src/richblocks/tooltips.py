#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/tooltips.py
"""Tooltip text extraction.

Quiz content attaches explanatory text to terms in several ways: a plain
attribute (``data-tooltip``, ``title`` and a dozen legacy spellings), a JSON
payload in one of those attributes or in ``data-tooltip-json``, or a nested
"tooltip content carrier" element holding the text inline. The carrier is
hidden from the owner's visible text and its content becomes the owner's
``TOOLTIP`` annotation instead.

Extraction never raises. Malformed JSON and non-string JSON values fall back
to treating the raw value as HTML and stripping its tags.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from richblocks.constants import DEPS_HTML_STRIP
from richblocks.dom import ElementNode
from richblocks.markers import (
    TOOLTIP_ATTRIBUTE_CANDIDATES,
    TOOLTIP_CONTENT_CLASS_NAMES,
    TOOLTIP_JSON_ATTRIBUTE,
    TOOLTIP_JSON_KEYS,
    contains_any_insensitive,
)
from richblocks.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


def is_tooltip_content_node(element: ElementNode) -> bool:
    """Return True if ``element`` carries tooltip text for its owner.

    Recognized by a tooltip-content class name, ``data-role="tooltip"``,
    ``data-tooltip-part="content"``, ``data-tooltip-role="content"``,
    ``data-type="tooltip"``, or the mere presence of ``data-tooltip-content``
    or ``data-tooltip-text``.
    """
    if contains_any_insensitive(element.class_names(), TOOLTIP_CONTENT_CLASS_NAMES):
        return True
    if element.attr("data-role").lower() == "tooltip":
        return True
    if element.attr("data-tooltip-part").lower() == "content":
        return True
    if element.has_attr("data-tooltip-content") or element.has_attr("data-tooltip-text"):
        return True
    if element.attr("data-tooltip-role").lower() == "content":
        return True
    return element.attr("data-type").lower() == "tooltip"


def find_inline_tooltip_node(element: ElementNode) -> Optional[ElementNode]:
    """Return the first tooltip carrier at or below ``element``, depth-first.

    The element itself is checked first, then its descendants in document
    order.
    """
    if is_tooltip_content_node(element):
        return element
    for node in element.iter_descendants():
        if isinstance(node, ElementNode) and is_tooltip_content_node(node):
            return node
    return None


@requires_dependencies("tooltips", DEPS_HTML_STRIP)
def strip_html(markup: str) -> str:
    """Remove tags from ``markup``, returning decoded, trimmed plain text.

    Parameters
    ----------
    markup : str
        HTML fragment (or plain text)

    Returns
    -------
    str
        Concatenated text content

    Raises
    ------
    DependencyError
        If beautifulsoup4 is not installed

    """
    from bs4 import BeautifulSoup

    if not markup:
        return ""
    return BeautifulSoup(markup, "html.parser").get_text().strip()


def _search_keys(payload: dict[str, Any]) -> Optional[str]:
    for key in TOOLTIP_JSON_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _search_json(trimmed: str) -> Optional[str]:
    """Return the first usable string inside a JSON object or array payload."""
    if trimmed.startswith("{") and trimmed.endswith("}"):
        payload = json.loads(trimmed)
        if isinstance(payload, dict):
            return _search_keys(payload)
    elif trimmed.startswith("[") and trimmed.endswith("]"):
        payload = json.loads(trimmed)
        if isinstance(payload, list):
            for item in payload:
                if isinstance(item, dict):
                    candidate = _search_keys(item)
                elif isinstance(item, str):
                    candidate = item
                else:
                    candidate = None
                if candidate and candidate.strip():
                    return candidate
    return None


def parse_tooltip_payload(raw_value: str) -> Optional[str]:
    """Interpret an attribute value as a tooltip payload.

    JSON objects are searched for ``description``, ``text``, ``content``,
    ``value``, ``body``, ``tooltip`` and ``message`` in that order; JSON arrays
    are searched element by element. Only non-blank string values count. If JSON
    lookup finds nothing (or the value is not JSON at all), the raw value is
    treated as HTML and stripped.

    Parameters
    ----------
    raw_value : str
        Attribute value

    Returns
    -------
    str or None
        Plain tooltip text, or None if the result is blank

    Examples
    --------
        >>> parse_tooltip_payload('{"text": "Hi"}')
        'Hi'
        >>> parse_tooltip_payload('<b>Aorta</b>')
        'Aorta'

    """
    trimmed = raw_value.strip()
    if not trimmed:
        return None

    try:
        candidate = _search_json(trimmed)
    except ValueError as e:
        logger.debug(f"Tooltip payload is not valid JSON, using plain text: {e}")
        candidate = None

    if candidate is not None:
        stripped = strip_html(candidate)
        if stripped:
            return stripped

    return strip_html(trimmed) or None


def extract_tooltip_text(element: ElementNode) -> Optional[str]:
    """Resolve the tooltip attached to ``element``, if any.

    Tries the tooltip attribute candidates in order, then
    ``data-tooltip-json``, then the trimmed text of the first inline tooltip
    carrier.

    Parameters
    ----------
    element : ElementNode
        Candidate tooltip owner

    Returns
    -------
    str or None
        Tooltip text, or None when the element has no tooltip

    """
    for attribute_name in TOOLTIP_ATTRIBUTE_CANDIDATES:
        value = element.attr(attribute_name)
        if value.strip():
            tooltip = parse_tooltip_payload(value)
            if tooltip is not None:
                return tooltip

    payload = element.attr(TOOLTIP_JSON_ATTRIBUTE)
    if payload.strip():
        tooltip = parse_tooltip_payload(payload)
        if tooltip is not None:
            return tooltip

    carrier = find_inline_tooltip_node(element)
    if carrier is None:
        return None
    return carrier.text().strip() or None
