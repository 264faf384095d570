#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/styles.py
"""Inline style cascading and resolution.

An :class:`InlineStyle` describes what the markup asks for (bold, a link
target, a dictionary term). It is composed top-down: each element applies its
tag delta (:func:`apply_tag_style`) and then its class overrides
(:func:`apply_class_styles`) to the style inherited from its parent. Styles
are frozen; every composition returns a new value.

:func:`resolve_span_style` turns an inline style into a :class:`SpanStyle`,
the render-ready record with concrete colors taken from a
:class:`RichTextPalette` supplied by the caller.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from richblocks.constants import METALINK_TEXT_COLOR, SMALL_TEXT_FONT_SIZE, BaselineShift
from richblocks.dom import ElementNode


@dataclass(frozen=True)
class Color:
    """An opaque ARGB color.

    Parameters
    ----------
    argb : int
        32-bit color value, alpha in the high byte

    """

    argb: int

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#RRGGBB`` or ``#AARRGGBB`` notation.

        Raises
        ------
        ValueError
            If the value is not 6 or 8 hex digits

        """
        digits = value.lstrip("#")
        if len(digits) == 6:
            digits = "FF" + digits
        if len(digits) != 8:
            raise ValueError(f"Expected #RRGGBB or #AARRGGBB, got {value!r}")
        return cls(int(digits, 16))

    @property
    def hex(self) -> str:
        """Return the color as ``#AARRGGBB``."""
        return f"#{self.argb:08X}"


@dataclass(frozen=True)
class RichTextPalette:
    """Named colors used when resolving inline styles.

    Parameters
    ----------
    important_background : Color
        Background for important/highlighted content
    important_text : Color
        Text color for important/highlighted content
    selected_background : Color
        Background for selected content
    selected_text : Color
        Text color for selected content
    dictionary_text : Color
        Text color for dictionary terms and tooltip owners
    abstract_text : Color
        Text color for abstract/summary sections

    """

    important_background: Color = Color(0xFFFFD8E4)
    important_text: Color = Color(0xFF31111D)
    selected_background: Color = Color(0xFFEADDFF)
    selected_text: Color = Color(0xFF21005D)
    dictionary_text: Color = Color(0xFF6750A4)
    abstract_text: Color = Color(0xFF49454F)


class InlineHighlight(enum.Enum):
    """Highlight kind requested by a class marker."""

    IMPORTANT = "important"
    SELECTED = "selected"


@dataclass(frozen=True)
class InlineStyle:
    """Immutable inline style inherited down the element tree."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    monospace: bool = False
    superscript: bool = False
    subscript: bool = False
    link: Optional[str] = None
    highlight: Optional[InlineHighlight] = None
    dictionary: bool = False
    preserve_whitespace: bool = False
    small_text: bool = False
    text_color: Optional[Color] = None
    tooltip: Optional[str] = None

    def with_tooltip(self, tooltip: Optional[str]) -> InlineStyle:
        """Return a copy carrying ``tooltip`` (unchanged when None)."""
        if tooltip is None:
            return self
        return replace(self, tooltip=tooltip)


@dataclass(frozen=True)
class SpanStyle:
    """Render-ready visual attributes for one styled run."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    monospace: bool = False
    baseline_shift: BaselineShift = "none"
    background: Optional[Color] = None
    color: Optional[Color] = None
    font_size: Optional[float] = None


def is_link_target(href: str) -> bool:
    """Return True if ``href`` should become a link annotation.

    Empty hrefs, bare ``#`` and ``javascript:`` URIs render as plain text.
    """
    href = href.strip()
    return bool(href) and href != "#" and not href.lower().startswith("javascript")


def apply_tag_style(style: InlineStyle, element: ElementNode) -> InlineStyle:
    """Apply the style delta implied by an element's tag.

    Parameters
    ----------
    style : InlineStyle
        Style inherited from the parent
    element : ElementNode
        Element whose tag is applied

    Returns
    -------
    InlineStyle
        New style (or ``style`` itself if the tag implies nothing)

    """
    tag = element.tag
    if tag in ("strong", "b"):
        return replace(style, bold=True)
    if tag in ("em", "i"):
        return replace(style, italic=True)
    if tag == "u":
        return replace(style, underline=True)
    if tag == "code":
        return replace(style, monospace=True)
    if tag == "sup":
        return replace(style, superscript=True)
    if tag == "sub":
        return replace(style, subscript=True)
    if tag == "a":
        href = element.attr("href").strip()
        if is_link_target(href):
            return replace(style, link=href)
    return style


def apply_class_styles(
    style: InlineStyle,
    classes: Iterable[str],
    palette: RichTextPalette,
    show_selected_highlight: bool,
) -> InlineStyle:
    """Layer class-driven overrides on top of ``style``.

    Rules are applied in a fixed order regardless of class order, so later
    rules win when two of them set the same field (``metalink`` overrides the
    ``abstract`` text color).

    Parameters
    ----------
    style : InlineStyle
        Style after tag deltas
    classes : iterable of str
        The element's class names
    palette : RichTextPalette
        Palette supplying the abstract text color
    show_selected_highlight : bool
        Whether the ``selected`` class highlights (answer revealed)

    Returns
    -------
    InlineStyle
        New style with the overrides applied

    """
    lowered = {name.lower() for name in classes}
    if not lowered:
        return style

    updates: dict[str, object] = {}
    if lowered & {"important", "wichtig"}:
        updates.update(highlight=InlineHighlight.IMPORTANT, bold=True)
    if "selected" in lowered and show_selected_highlight:
        updates.update(highlight=InlineHighlight.SELECTED)
    if "dictionary" in lowered:
        updates.update(dictionary=True, underline=True)
    if lowered & {"nowrap", "no-wrap"}:
        updates.update(preserve_whitespace=True)
    if "scientific-name" in lowered:
        updates.update(italic=True)
    if "abstract" in lowered:
        updates.update(small_text=True, text_color=palette.abstract_text)
    if "metalink" in lowered:
        updates.update(text_color=Color(METALINK_TEXT_COLOR), italic=True)

    if not updates:
        return style
    return replace(style, **updates)  # type: ignore[arg-type]


def resolve_span_style(style: InlineStyle, palette: RichTextPalette) -> SpanStyle:
    """Resolve an inline style to concrete render attributes.

    Text color precedence is: explicit color, important highlight, selected
    highlight, dictionary term, tooltip owner. Any tooltip forces underline.
    """
    if style.text_color is not None:
        color: Optional[Color] = style.text_color
    elif style.highlight is InlineHighlight.IMPORTANT:
        color = palette.important_text
    elif style.highlight is InlineHighlight.SELECTED:
        color = palette.selected_text
    elif style.dictionary or style.tooltip is not None:
        color = palette.dictionary_text
    else:
        color = None

    if style.highlight is InlineHighlight.IMPORTANT:
        background: Optional[Color] = palette.important_background
    elif style.highlight is InlineHighlight.SELECTED:
        background = palette.selected_background
    else:
        background = None

    if style.superscript:
        baseline_shift: BaselineShift = "superscript"
    elif style.subscript:
        baseline_shift = "subscript"
    else:
        baseline_shift = "none"

    return SpanStyle(
        bold=style.bold,
        italic=style.italic,
        underline=style.underline or style.dictionary or style.tooltip is not None,
        monospace=style.monospace,
        baseline_shift=baseline_shift,
        background=background,
        color=color,
        font_size=SMALL_TEXT_FONT_SIZE if style.small_text else None,
    )
