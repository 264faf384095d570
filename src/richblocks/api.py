#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/api.py
"""Public entry points for parsing rich text markup.

These functions wrap :class:`~richblocks.parsers.richtext.RichTextParser`,
:func:`~richblocks.grid.build_render_model` and
:func:`~richblocks.media.media_model_for_block` for callers that do not need
to keep a parser instance around. Every call builds its own tree, builder and
parser, so concurrent calls share no state.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from richblocks.ast.nodes import Block, Media, Table
from richblocks.diagnostics import DiagnosticCallback
from richblocks.grid import TableRenderModel, build_render_model
from richblocks.media import MediaResolver, media_model_for_block
from richblocks.options.richtext import RichTextOptions
from richblocks.parsers.richtext import RichTextParser
from richblocks.tokenizer import StreamEvent

logger = logging.getLogger(__name__)


def parse_html(
    html: Optional[str],
    options: Optional[RichTextOptions] = None,
    diagnostic_callback: Optional[DiagnosticCallback] = None,
) -> list[Block]:
    """Parse a rich text markup fragment into an ordered list of blocks.

    Parameters
    ----------
    html : str or None
        Markup fragment. Surrounding whitespace is ignored.
    options : RichTextOptions, optional
        Parsing options (palette, highlight toggle, defensive limits).
        Defaults are used when None.
    diagnostic_callback : DiagnosticCallback, optional
        Receives a :class:`~richblocks.diagnostics.DiagnosticEvent` whenever a
        size limit truncates or clamps part of the input.

    Returns
    -------
    list of Block
        Blocks in document order; empty for None or blank input

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a RichTextOptions instance
    DependencyError
        If the tokenizer package is not installed

    Examples
    --------
        >>> blocks = parse_html("<p>Hello <b>world</b></p>")
        >>> blocks[0].text.text
        'Hello world'

    """
    if not html or not html.strip():
        return []
    return RichTextParser(options, diagnostic_callback).parse(html)


def parse_events(
    events: Iterable[StreamEvent],
    options: Optional[RichTextOptions] = None,
    diagnostic_callback: Optional[DiagnosticCallback] = None,
) -> list[Block]:
    """Parse an already tokenized event stream into blocks.

    Callers that run their own tokenizer can drive the parser with events in
    the ``justhtml`` stream shape: ``("start", (name, attrs))``,
    ``("text", data)`` and ``("end", name)``.

    Parameters
    ----------
    events : iterable of StreamEvent
        Tokenizer events in document order
    options : RichTextOptions, optional
        Parsing options
    diagnostic_callback : DiagnosticCallback, optional
        Sink for size-limit breaches

    Returns
    -------
    list of Block
        Blocks in document order

    Examples
    --------
        >>> parse_events([("start", ("p", {})), ("text", "Hi"), ("end", "p")])[0].text.text
        'Hi'

    """
    return RichTextParser(options, diagnostic_callback).parse_events(events)


def media_model(
    block: Media,
    options: Optional[RichTextOptions] = None,
    resolver: Optional[MediaResolver] = None,
) -> str:
    """Resolve the location a renderer should load a media block from.

    Parameters
    ----------
    block : Media
        Media block produced by :func:`parse_html`
    options : RichTextOptions, optional
        Supplies ``media_resolver`` when ``resolver`` is not given
    resolver : MediaResolver, optional
        Filename-to-path lookup taking precedence over the options

    Returns
    -------
    str
        Local path from the resolver, else the source without a ``file://``
        prefix, else the raw source

    Examples
    --------
        >>> (block,) = parse_html('<img src="file:///media/heart.png">')
        >>> media_model(block, RichTextOptions(media_resolver=lambda name: f"/data/media/{name}"))
        '/data/media/heart.png'

    """
    if resolver is None:
        resolver = (options or RichTextOptions()).media_resolver
    return media_model_for_block(block, resolver)


def table_render_model(
    table: Table,
    options: Optional[RichTextOptions] = None,
    diagnostic_callback: Optional[DiagnosticCallback] = None,
) -> TableRenderModel:
    """Lay out a parsed table on a grid, honoring row and column spans.

    Parameters
    ----------
    table : Table
        Table block produced by :func:`parse_html`
    options : RichTextOptions, optional
        Supplies ``max_column_iterations``
    diagnostic_callback : DiagnosticCallback, optional
        Sink for ``iteration_limit`` events

    Returns
    -------
    TableRenderModel
        Physical rows with visible anchors and invisible continuations

    """
    options = options or RichTextOptions()
    return build_render_model(
        table,
        max_column_iterations=options.max_column_iterations,
        diagnostic_callback=diagnostic_callback,
    )
