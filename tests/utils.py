"""Test utilities for the richblocks test suite.

This module provides helpers for building node trees from markup or from
hand-written handler events, and for picking elements out of them.
"""

from richblocks.dom import ElementNode, NodeTree, TreeBuilder
from richblocks.parsers import RichTextParser
from richblocks.tokenizer import tokenize


def build_tree(html: str) -> NodeTree:
    """Tokenize ``html`` and build a frozen node tree."""
    return RichTextParser().build_tree(tokenize(html), decode_entities=False)


def first_element(html: str, tag: str) -> ElementNode:
    """Return the first element named ``tag`` in ``html``."""
    tree = build_tree(html)
    for node in tree.nodes:
        if isinstance(node, ElementNode) and node.tag == tag:
            return node
    raise AssertionError(f"No <{tag}> element in {html!r}")


def tree_from_events(*events) -> NodeTree:
    """Build a tree by pushing handler calls directly, without a tokenizer.

    Each event is ``("open", name, attrs)``, ``("text", data)`` or
    ``("close", name)``.
    """
    builder = TreeBuilder()
    for event in events:
        if event[0] == "open":
            builder.on_open_tag(event[1], event[2] if len(event) > 2 else None)
        elif event[0] == "text":
            builder.on_text(event[1])
        else:
            builder.on_close_tag(event[1])
    builder.on_end()
    return builder.tree


def nested_divs(depth: int, text: str = "deep") -> str:
    """Return ``depth`` nested divs wrapping ``text``."""
    return "<div>" * depth + text + "</div>" * depth
