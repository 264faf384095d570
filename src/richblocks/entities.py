#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/entities.py
"""HTML character reference decoding.

Decodes named references (``&amp;``, ``&nbsp;``) and numeric references
(``&#60;``, ``&#x3C;``) in text and attribute values. References that cannot
be resolved are left in place as literal text.
"""

from __future__ import annotations

import html.entities
import re

# Python's complete HTML5 entity list. Keys with a trailing semicolon are the
# canonical forms, keys without one are the legacy names that may omit it.
_HTML5_ENTITIES: dict[str, str] = html.entities.html5

_MAX_CODE_POINT = 0x10FFFF
_SURROGATE_RANGE = range(0xD800, 0xE000)

_REFERENCE_PATTERN = re.compile(r"&(?:#([0-9]+);|#[xX]([0-9a-fA-F]+);|([A-Za-z][A-Za-z0-9]*)(;?))")


def _decode_code_point(code_point: int) -> str | None:
    if code_point < 1 or code_point > _MAX_CODE_POINT or code_point in _SURROGATE_RANGE:
        return None
    return chr(code_point)


def _replace_reference(match: re.Match[str], in_attribute: bool = False) -> str:
    decimal, hexadecimal, name, semicolon = match.groups()

    if decimal is not None:
        # Overlong digit runs are far past the code point range anyway
        decoded = _decode_code_point(int(decimal)) if len(decimal) <= 8 else None
        return decoded if decoded is not None else match.group(0)

    if hexadecimal is not None:
        decoded = _decode_code_point(int(hexadecimal, 16)) if len(hexadecimal) <= 8 else None
        return decoded if decoded is not None else match.group(0)

    if semicolon:
        replacement = _HTML5_ENTITIES.get(f"{name};")
    else:
        # Attribute values keep a bare legacy name before "=" or an alphanumeric
        following = match.string[match.end() : match.end() + 1]
        if in_attribute and (following == "=" or following.isalnum()):
            return match.group(0)
        replacement = _HTML5_ENTITIES.get(name)
    return replacement if replacement is not None else match.group(0)


def decode_html_entities(text: str, in_attribute: bool = False) -> str:
    """Decode named and numeric character references.

    Parameters
    ----------
    text : str
        Text that may contain character references
    in_attribute : bool, default False
        Apply the attribute-value rule: a legacy reference without its
        semicolon is kept literally when an ``=`` or alphanumeric follows

    Returns
    -------
    str
        Text with every resolvable reference replaced by its character(s)

    Examples
    --------
    >>> decode_html_entities("&amp;&lt;&gt;&quot;&#39;&#x27;")
    '&<>"\\'\\''
    >>> decode_html_entities("&#99999999; stays")
    '&#99999999; stays'
    >>> decode_html_entities("?a=1&copy=2", in_attribute=True)
    '?a=1&copy=2'

    """
    if "&" not in text:
        return text
    if in_attribute:
        return _REFERENCE_PATTERN.sub(lambda match: _replace_reference(match, in_attribute=True), text)
    return _REFERENCE_PATTERN.sub(_replace_reference, text)
