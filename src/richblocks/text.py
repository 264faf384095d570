#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/text.py
"""Annotated styled text.

:class:`StyledText` is the text payload of paragraphs, headings, list items
and table cells: the concatenated text, the styled runs it was assembled from,
and named annotation regions (``URL``, ``TOOLTIP``) addressed by character
offsets into the concatenated text.

:class:`StyledTextBuilder` assembles one. Builders are created per block and
are never shared or pooled, so concurrent parses cannot observe each other's
buffers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from richblocks.constants import ANNOTATION_TOOLTIP, ANNOTATION_URL, NON_BREAKING_SPACE
from richblocks.styles import InlineStyle, RichTextPalette, SpanStyle, resolve_span_style


@dataclass(frozen=True)
class Annotation:
    """A named region of styled text.

    Parameters
    ----------
    tag : str
        Annotation name, ``"URL"`` or ``"TOOLTIP"``
    value : str
        Link target or tooltip text
    start : int
        Inclusive start offset
    end : int
        Exclusive end offset

    """

    tag: str
    value: str
    start: int
    end: int


@dataclass(frozen=True)
class StyledRun:
    """A contiguous span of text sharing one style.

    ``style`` is None for structural text such as line breaks and list markers.
    """

    text: str
    start: int
    style: Optional[SpanStyle] = None

    @property
    def end(self) -> int:
        """Return the exclusive end offset of the run."""
        return self.start + len(self.text)


@dataclass(frozen=True)
class StyledText:
    """Immutable styled text with annotation regions.

    Parameters
    ----------
    runs : tuple of StyledRun, default empty
        Runs in order; their texts concatenate to :attr:`text`
    annotations : tuple of Annotation, default empty
        Regions ordered by start offset

    """

    runs: tuple[StyledRun, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    text: str = field(init=False)

    def __post_init__(self) -> None:
        """Derive the concatenated text from the runs."""
        object.__setattr__(self, "text", "".join(run.text for run in self.runs))

    @classmethod
    def plain(cls, text: str) -> StyledText:
        """Build unstyled text without annotations."""
        if not text:
            return cls()
        return cls(runs=(StyledRun(text=text, start=0),))

    def __len__(self) -> int:
        """Return the length of the concatenated text."""
        return len(self.text)

    def __str__(self) -> str:
        """Return the concatenated text."""
        return self.text

    @property
    def plain_text(self) -> str:
        """Return the text with non-breaking spaces folded to regular spaces."""
        return self.text.replace(NON_BREAKING_SPACE, " ")

    def is_blank(self) -> bool:
        """Return True if the text is empty or whitespace only."""
        return not self.text.strip()

    def get_string_annotations(self, tag: str, start: int = 0, end: Optional[int] = None) -> list[Annotation]:
        """Return annotations named ``tag`` that intersect ``[start, end)``.

        Parameters
        ----------
        tag : str
            Annotation name to select
        start : int, default 0
            Range start offset
        end : int or None, default None
            Range end offset; None means the end of the text

        Returns
        -------
        list of Annotation
            Matching annotations in start order

        """
        if end is None:
            end = len(self.text)
        return [
            annotation
            for annotation in self.annotations
            if annotation.tag == tag and annotation.start < max(end, start + 1) and annotation.end > start
        ]

    def annotations_at(self, offset: int) -> list[Annotation]:
        """Return all annotations covering ``offset``."""
        return [annotation for annotation in self.annotations if annotation.start <= offset < annotation.end]

    def links(self) -> list[str]:
        """Return the link targets in order of appearance."""
        return [annotation.value for annotation in self.annotations if annotation.tag == ANNOTATION_URL]

    def tooltips(self) -> list[str]:
        """Return the tooltip texts in order of appearance."""
        return [annotation.value for annotation in self.annotations if annotation.tag == ANNOTATION_TOOLTIP]


class StyledTextBuilder:
    """Incrementally assemble a :class:`StyledText`.

    Annotations are opened with :meth:`push_annotation` and closed, most
    recent first, with :meth:`pop`; an annotation covers every character
    appended while it is open.
    """

    def __init__(self) -> None:
        """Initialize an empty builder."""
        self._runs: list[StyledRun] = []
        self._length = 0
        self._last_char = ""
        self._open: list[tuple[str, str, int]] = []
        self._annotations: list[Annotation] = []

    @property
    def length(self) -> int:
        """Return the number of characters appended so far."""
        return self._length

    def at_line_start(self) -> bool:
        """Return True if nothing was appended yet or the last char is a newline."""
        return self._length == 0 or self._last_char == "\n"

    def append(self, text: str, style: Optional[SpanStyle] = None) -> None:
        """Append a run of text with an optional resolved style."""
        if not text:
            return
        self._runs.append(StyledRun(text=text, start=self._length, style=style))
        self._length += len(text)
        self._last_char = text[-1]

    def push_annotation(self, tag: str, value: str) -> None:
        """Open an annotation region at the current offset."""
        self._open.append((tag, value, self._length))

    def pop(self) -> None:
        """Close the most recently opened annotation region.

        Raises
        ------
        IndexError
            If no annotation is open

        """
        tag, value, start = self._open.pop()
        if self._length > start:
            self._annotations.append(Annotation(tag=tag, value=value, start=start, end=self._length))

    def append_styled(self, text: str, style: InlineStyle, palette: RichTextPalette) -> None:
        """Append text under an inline style, wrapping it in link/tooltip regions.

        Parameters
        ----------
        text : str
            Text to append
        style : InlineStyle
            Inline style in effect
        palette : RichTextPalette
            Palette used to resolve concrete colors

        """
        if not text:
            return
        display_text = text.replace(" ", NON_BREAKING_SPACE) if style.preserve_whitespace else text
        if style.link is not None:
            self.push_annotation(ANNOTATION_URL, style.link)
        if style.tooltip is not None:
            self.push_annotation(ANNOTATION_TOOLTIP, style.tooltip)
        self.append(display_text, resolve_span_style(style, palette))
        if style.tooltip is not None:
            self.pop()
        if style.link is not None:
            self.pop()

    def build(self) -> StyledText:
        """Return the assembled text; open annotations are closed first."""
        while self._open:
            self.pop()
        annotations = sorted(self._annotations, key=lambda annotation: (annotation.start, annotation.end))
        return StyledText(runs=tuple(self._runs), annotations=tuple(annotations))
