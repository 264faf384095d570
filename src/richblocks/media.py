#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/media.py
"""Media reference helpers.

A media block keeps its raw ``src`` and a *media reference*: the bare
filename used to look the resource up locally. Resolution to a readable path
is delegated to a caller-supplied :data:`MediaResolver`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from richblocks.ast.nodes import Media

logger = logging.getLogger(__name__)

MediaResolver = Callable[[str], Optional[str]]
"""Maps a bare media filename to a local resource path, or None if absent."""

FILE_URI_PREFIX = "file://"


def extract_media_ref(source: str) -> Optional[str]:
    """Return the filename portion of a path or URL.

    Parameters
    ----------
    source : str
        Image source path or URL

    Returns
    -------
    str or None
        The text after the last ``/``, or None when there is no ``/`` or the
        remainder is blank

    Examples
    --------
        >>> extract_media_ref("file:///media/heart.jpg")
        'heart.jpg'

    """
    _, sep, filename = source.rpartition("/")
    if not sep or not filename.strip():
        return None
    return filename


def media_model_for_source(
    source: str,
    media_ref: Optional[str] = None,
    resolver: Optional[MediaResolver] = None,
) -> str:
    """Resolve the location a renderer should load an image from.

    The resolver is consulted first with ``media_ref`` (or the filename
    extracted from ``source``); failing that, a ``file://`` prefix is stripped
    from the source; otherwise the source is returned unchanged.

    Parameters
    ----------
    source : str
        Raw ``src`` value
    media_ref : str or None, default None
        Explicit media filename
    resolver : MediaResolver or None, default None
        Filename-to-path lookup

    Returns
    -------
    str
        Local path or URL to load

    """
    filename = media_ref or extract_media_ref(source)
    if filename is not None and resolver is not None:
        path = resolver(filename)
        if path:
            return path
        logger.debug(f"Media resolver found no local file for {filename!r}")
    if source.startswith(FILE_URI_PREFIX):
        return source[len(FILE_URI_PREFIX) :]
    return source


def media_model_for_block(block: Media, resolver: Optional[MediaResolver] = None) -> str:
    """Resolve the load location for a parsed :class:`~richblocks.ast.nodes.Media` block."""
    return media_model_for_source(block.source, block.media_ref, resolver)
