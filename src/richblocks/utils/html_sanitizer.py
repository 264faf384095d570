#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/utils/html_sanitizer.py
"""Question markup sanitization for offline display.

Question markup is authored for a web page but displayed from a local media
folder. Before hints are split off, every element goes through
:class:`SanitizingFilter`, which:

- drops ``<style>`` elements with their content
- drops ``style`` attributes
- points every ``<img src>`` at ``file:///media/<filename>``
- rewrites anchors that link to media files (see :func:`rewrite_anchor_href`)
  and tags them with the ``metalink`` class

Sanitized events can be serialized back to markup with :class:`MarkupWriter`.
"""

from __future__ import annotations

import html
import logging
import re
from typing import Mapping, Optional

from richblocks.constants import (
    MEDIA_LINK_EXTENSIONS,
    MEDIA_SCHEME,
    MEDIA_URI_PREFIX,
    METALINK_CLASS,
    SPECIAL_URL_PROTOCOLS,
)
from richblocks.markers import VOID_TAGS
from richblocks.media import FILE_URI_PREFIX
from richblocks.tokenizer import MarkupHandler, feed_events, tokenize

logger = logging.getLogger(__name__)

MEDIA_LINK_PATTERN = re.compile(r"\.(?:" + "|".join(MEDIA_LINK_EXTENSIONS) + r")(?:$|[?#])", re.IGNORECASE)


def normalize_file_name(url_or_name: str) -> str:
    """Reduce a path or URL to its bare filename.

    Parameters
    ----------
    url_or_name : str
        Path, URL or filename

    Returns
    -------
    str
        Text after the last ``/`` without query string or fragment, trimmed

    Examples
    --------
    >>> normalize_file_name("https://cdn.example.org/img/heart.png?v=2#top")
    'heart.png'

    >>> normalize_file_name(" valve.jpg ")
    'valve.jpg'

    """
    filename = url_or_name.rpartition("/")[2]
    return filename.split("?", 1)[0].split("#", 1)[0].strip()


def is_special_protocol(url: str) -> bool:
    """Return True for web, mail, data and script URLs, which are never rewritten."""
    return url.lower().startswith(SPECIAL_URL_PROTOCOLS)


def rewrite_anchor_href(href: str) -> str:
    """Point an anchor at the local media folder when it links to a media file.

    Rules are tried in order:

    1. web, mail, data and script URLs are kept
    2. ``media://name`` becomes ``file:///media/name``
    3. a path containing ``/media/`` gains a ``file://`` scheme
    4. a link ending in an image, video or audio extension (optionally
       followed by a query or fragment) becomes ``file:///media/<filename>``
    5. anything else is kept

    Parameters
    ----------
    href : str
        Raw ``href`` value

    Returns
    -------
    str
        The rewritten target

    Examples
    --------
    >>> rewrite_anchor_href("media://clips/murmur.mp3")
    'file:///media/murmur.mp3'

    >>> rewrite_anchor_href("/media/ecg.png")
    'file:///media/ecg.png'

    >>> rewrite_anchor_href("https://example.org/ecg.png")
    'https://example.org/ecg.png'

    """
    lowered = href.lower()
    if is_special_protocol(href):
        return href
    if lowered.startswith(MEDIA_SCHEME):
        return MEDIA_URI_PREFIX + normalize_file_name(href[len(MEDIA_SCHEME) :])
    if "/media/" in href and not lowered.startswith(FILE_URI_PREFIX):
        return f"{FILE_URI_PREFIX}{href}" if href.startswith("/") else f"{FILE_URI_PREFIX}/{href}"
    if MEDIA_LINK_PATTERN.search(href):
        return MEDIA_URI_PREFIX + normalize_file_name(href)
    return href


def _add_class(class_value: str, class_name: str) -> str:
    if class_name in class_value.split():
        return class_value
    return f"{class_value} {class_name}".strip()


def sanitize_attributes(name: str, attributes: Mapping[str, Optional[str]]) -> dict[str, str]:
    """Return the sanitized attributes of one element.

    Parameters
    ----------
    name : str
        Lowercase tag name
    attributes : Mapping[str, str or None]
        Attributes as delivered by the tokenizer; None values become ``""``

    Returns
    -------
    dict[str, str]
        Attributes with lowercase names, without ``style``, and with image
        sources and media links rewritten

    """
    attrs = {key.lower(): value or "" for key, value in attributes.items()}
    attrs.pop("style", None)

    if name == "img":
        src = attrs.get("src", "")
        # Inline data URIs carry the image itself
        if src.strip() and not src.lower().startswith("data:"):
            attrs["src"] = MEDIA_URI_PREFIX + normalize_file_name(src)
    elif name == "a" and attrs.get("href"):
        href = rewrite_anchor_href(attrs["href"])
        attrs["href"] = href
        if href.startswith((MEDIA_URI_PREFIX, MEDIA_SCHEME)):
            attrs["class"] = _add_class(attrs.get("class", ""), METALINK_CLASS)
    return attrs


def render_start_tag(name: str, attributes: Mapping[str, str]) -> str:
    """Serialize a start tag with double-quoted, escaped attribute values."""
    parts = [f"<{name}"]
    for key, value in attributes.items():
        escaped = value.replace("&", "&amp;").replace('"', "&quot;")
        parts.append(f' {key}="{escaped}"')
    parts.append(">")
    return "".join(parts)


class SanitizingFilter:
    """Markup handler that sanitizes events before passing them on.

    Parameters
    ----------
    downstream : MarkupHandler
        Receiver of the sanitized events

    """

    def __init__(self, downstream: MarkupHandler) -> None:
        """Wrap ``downstream``."""
        self.downstream = downstream
        self._style_depth = 0

    def on_open_tag(self, name: str, attributes: Optional[Mapping[str, Optional[str]]] = None) -> None:
        """Drop style elements and forward everything else with sanitized attributes."""
        name = name.lower()
        if self._style_depth > 0 or name == "style":
            self._style_depth += 1
            return
        self.downstream.on_open_tag(name, sanitize_attributes(name, attributes or {}))

    def on_text(self, text: str) -> None:
        """Forward character data outside style elements."""
        if self._style_depth == 0:
            self.downstream.on_text(text)

    def on_close_tag(self, name: str) -> None:
        """Forward a closing tag outside style elements."""
        if self._style_depth > 0:
            self._style_depth -= 1
            return
        self.downstream.on_close_tag(name)

    def on_end(self) -> None:
        """Signal the end of input downstream."""
        self.downstream.on_end()


class MarkupWriter:
    """Markup handler that serializes events back to markup."""

    def __init__(self) -> None:
        """Initialize an empty buffer."""
        self.parts: list[str] = []

    def on_open_tag(self, name: str, attributes: Optional[Mapping[str, Optional[str]]] = None) -> None:
        """Write a start tag."""
        attrs = {key: value or "" for key, value in (attributes or {}).items()}
        self.parts.append(render_start_tag(name, attrs))

    def on_text(self, text: str) -> None:
        """Write character data, re-escaping markup characters."""
        self.parts.append(html.escape(text, quote=False))

    def on_close_tag(self, name: str) -> None:
        """Write an end tag; void elements get none."""
        if name not in VOID_TAGS:
            self.parts.append(f"</{name}>")

    def on_end(self) -> None:
        """Nothing to flush; read :meth:`getvalue`."""

    def getvalue(self) -> str:
        """Return the markup written so far."""
        return "".join(self.parts)


def sanitize_for_webview(markup: str) -> str:
    """Sanitize question or explanation markup for display from the local media folder.

    Parameters
    ----------
    markup : str
        Raw markup

    Returns
    -------
    str
        Re-serialized markup with styles removed and media references
        pointing at ``file:///media/``

    Raises
    ------
    DependencyError
        If the tokenizer package is not installed

    Examples
    --------
        >>> sanitize_for_webview('<style>p{}</style><p style="color:red"><img src="img/a.png"></p>')
        '<p><img src="file:///media/a.png"></p>'

    """
    writer = MarkupWriter()
    feed_events(tokenize(markup), SanitizingFilter(writer))
    logger.debug(f"Sanitized {len(markup)} characters of markup")
    return writer.getvalue()
