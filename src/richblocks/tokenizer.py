#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/tokenizer.py
"""Bridge between the streaming tokenizer and push-style handlers.

Tokenization is delegated to ``justhtml``, whose ``stream()`` function yields
``(event, data)`` tuples:

- ``("start", (name, attrs))`` for an opening tag
- ``("end", name)`` for a closing tag
- ``("text", data)`` for character data
- ``("comment", data)`` and ``("doctype", ...)``, which are ignored here

:func:`feed_events` replays such tuples onto any :class:`MarkupHandler`. The
tokenizer does no tree construction: it emits no end event for void elements
(``<br>``, ``<img>``) and none for the optional end tags that markup may omit
(``</li>``, ``</td>``, ``</p>``). :func:`feed_events` synthesizes both, so
handlers always see balanced open and close calls.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Mapping, Optional, Protocol

from richblocks.constants import DEPS_TOKENIZER
from richblocks.markers import OPEN_IMPLIES_CLOSE, VOID_TAGS
from richblocks.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)

StreamEvent = tuple[str, Any]


class MarkupHandler(Protocol):
    """Push-style receiver of tokenizer events."""

    def on_open_tag(self, name: str, attributes: Optional[Mapping[str, Optional[str]]] = None) -> None:
        """Handle an opening tag."""
        ...

    def on_text(self, text: str) -> None:
        """Handle character data."""
        ...

    def on_close_tag(self, name: str) -> None:
        """Handle a closing tag."""
        ...

    def on_end(self) -> None:
        """Handle the end of input."""
        ...


@requires_dependencies("tokenizer", DEPS_TOKENIZER)
def tokenize(html: str) -> Iterator[StreamEvent]:
    """Stream tokenizer events for an HTML fragment.

    Parameters
    ----------
    html : str
        Markup to tokenize

    Returns
    -------
    Iterator of tuple
        ``(event, data)`` pairs in the ``justhtml`` stream shape

    Raises
    ------
    DependencyError
        If justhtml is not installed

    """
    from justhtml import stream

    return stream(html)


def feed_events(events: Iterable[StreamEvent], handler: MarkupHandler) -> None:
    """Replay tokenizer events onto ``handler`` and signal the end of input.

    A stack of open elements supplies the end tags that markup may leave out:

    - a start tag first closes the open elements it implies the end of
      (``<li>`` closes an open ``li``, ``<tr>`` an open row and its cell,
      block openers an open ``p``), see :data:`~richblocks.markers.OPEN_IMPLIES_CLOSE`
    - an end tag closes every element above its match on the stack
    - an end tag with no open match is dropped
    - elements still open at the end of input are closed before ``on_end``

    Parameters
    ----------
    events : iterable of tuple
        ``(event, data)`` pairs; unknown event kinds are skipped
    handler : MarkupHandler
        Receiver of ``on_open_tag`` / ``on_text`` / ``on_close_tag`` / ``on_end``

    """
    open_tags: list[str] = []

    for kind, data in events:
        if kind == "start":
            name, attributes = data
            name = name.lower()
            implied = OPEN_IMPLIES_CLOSE.get(name)
            if implied:
                while open_tags and open_tags[-1] in implied:
                    handler.on_close_tag(open_tags.pop())
            handler.on_open_tag(name, attributes)
            if name in VOID_TAGS:
                handler.on_close_tag(name)
            else:
                open_tags.append(name)
        elif kind == "end":
            name = data.lower()
            if name not in open_tags:
                logger.debug(f"Dropping end tag without an open element: {name!r}")
                continue
            while open_tags:
                closed = open_tags.pop()
                handler.on_close_tag(closed)
                if closed == name:
                    break
        elif kind == "text":
            handler.on_text(data)
        else:
            logger.debug(f"Skipping tokenizer event {kind!r}")

    while open_tags:
        handler.on_close_tag(open_tags.pop())
    handler.on_end()
