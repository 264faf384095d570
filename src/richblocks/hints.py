#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/hints.py
"""Question hint separation.

Question markup embeds an optional hint in a ``<div id="hintdiv">`` together
with a ``<button onclick="...hintdiv...">`` that toggles it. Before parsing,
the hint is split off so that it can be rendered on demand:

- the hint div's content goes to :attr:`QuestionParts.hint_html`
- the toggle button is dropped with its content
- everything else goes to :attr:`QuestionParts.content_html`, with
  learning-card anchors whose ``href`` is empty or a ``{{template}}``
  rewritten to ``learningcard://<id>[/<anchor>]``

The events are sanitized on the way in (see
:mod:`richblocks.utils.html_sanitizer`) and re-serialized, so the output is
normalized: styles removed, media references local, attribute values
double-quoted, text re-escaped.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from richblocks.markers import VOID_TAGS
from richblocks.tokenizer import feed_events, tokenize
from richblocks.utils.html_sanitizer import SanitizingFilter, render_start_tag

logger = logging.getLogger(__name__)

HINT_DIV_ID = "hintdiv"
LEARNING_CARD_SCHEME = "learningcard://"


@dataclass(frozen=True)
class QuestionParts:
    """Question markup split into visible content and an optional hint."""

    content_html: str
    hint_html: Optional[str] = None


def learning_card_href(attributes: Mapping[str, str]) -> Optional[str]:
    """Return a ``learningcard://`` target for an anchor that lacks a usable href.

    Parameters
    ----------
    attributes : Mapping[str, str]
        The anchor's attributes

    Returns
    -------
    str or None
        The rewritten target, or None if the anchor needs no rewrite

    Examples
    --------
        >>> learning_card_href({"href": "", "data-learningcard-id": "AB12", "data-anker": "Z9"})
        'learningcard://AB12/Z9'

    """
    href = attributes.get("href") or ""
    card_id = (attributes.get("data-learningcard-id") or "").strip()
    if not card_id or (href.strip() and "{{" not in href):
        return None
    anchor = attributes.get("data-anker")
    if anchor is not None:
        return f"{LEARNING_CARD_SCHEME}{card_id}/{anchor}"
    return f"{LEARNING_CARD_SCHEME}{card_id}"


class HintExtractionHandler:
    """Markup handler that routes events into content and hint buffers."""

    def __init__(self) -> None:
        """Initialize empty buffers."""
        self.content_parts: list[str] = []
        self.hint_parts: list[str] = []
        self._in_hint = False
        self._hint_div_depth = 0
        self._skip_depth = 0

    def on_open_tag(self, name: str, attributes: Optional[Mapping[str, Optional[str]]] = None) -> None:
        """Route an opening tag."""
        name = name.lower()
        attrs = {key.lower(): value or "" for key, value in (attributes or {}).items()}

        if self._skip_depth > 0:
            self._skip_depth += 1
            return

        if attrs.get("id") == HINT_DIV_ID and not self._in_hint:
            self._in_hint = True
            self._hint_div_depth = 1
            return

        if name == "button" and HINT_DIV_ID in attrs.get("onclick", "").lower():
            self._skip_depth = 1
            return

        if self._in_hint:
            if name == "div":
                self._hint_div_depth += 1
            self.hint_parts.append(render_start_tag(name, attrs))
            return

        if HINT_DIV_ID in attrs.get("onclick", ""):
            del attrs["onclick"]
        if name == "a":
            href = learning_card_href(attrs)
            if href is not None:
                attrs["href"] = href
        self.content_parts.append(render_start_tag(name, attrs))

    def on_text(self, text: str) -> None:
        """Route character data, re-escaping markup characters."""
        if self._skip_depth > 0:
            return
        escaped = html.escape(text, quote=False)
        (self.hint_parts if self._in_hint else self.content_parts).append(escaped)

    def on_close_tag(self, name: str) -> None:
        """Route a closing tag; void elements get no end tag."""
        name = name.lower()
        if self._skip_depth > 0:
            self._skip_depth -= 1
            return

        if self._in_hint and name == "div":
            self._hint_div_depth -= 1
            if self._hint_div_depth == 0:
                self._in_hint = False
                return

        if name in VOID_TAGS:
            return
        (self.hint_parts if self._in_hint else self.content_parts).append(f"</{name}>")

    def on_end(self) -> None:
        """Nothing to flush; buffers are read by the caller."""


def extract_question_parts(raw_html: Optional[str]) -> QuestionParts:
    """Split question markup into its visible content and its hint.

    Parameters
    ----------
    raw_html : str or None
        Question markup

    Returns
    -------
    QuestionParts
        Trimmed content markup and the trimmed hint markup (None when absent
        or blank)

    Raises
    ------
    DependencyError
        If the tokenizer package is not installed

    """
    if not raw_html or not raw_html.strip():
        return QuestionParts(content_html="")

    handler = HintExtractionHandler()
    feed_events(tokenize(raw_html), SanitizingFilter(handler))
    hint = "".join(handler.hint_parts).strip()
    logger.debug(f"Extracted question parts (hint present: {bool(hint)})")
    return QuestionParts(content_html="".join(handler.content_parts).strip(), hint_html=hint or None)
