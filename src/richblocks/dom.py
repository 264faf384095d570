#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/dom.py
"""Lightweight node tree built from tokenizer events.

The tree is arena-indexed: a :class:`NodeTree` owns a flat list of nodes and
every node refers to its parent and children by index. Ownership flows from
the arena to the nodes only; parent indices are a navigation aid.

The tree is mutated only while a :class:`TreeBuilder` receives events. Once
the builder sees the end signal the tree is frozen, and the queries that the
block parser issues repeatedly (``text()``, ``ancestor_classes()``,
``contains_bold_content()``) are memoized per node and per argument.

Examples
--------
Build a tree by hand from events:

    >>> builder = TreeBuilder()
    >>> builder.on_open_tag("p", {"class": "lead"})
    >>> builder.on_text("Hello &amp; welcome")
    >>> builder.on_close_tag("p")
    >>> builder.on_end()
    >>> paragraph = builder.tree.root_nodes()[0]
    >>> paragraph.text()
    'Hello & welcome'

"""

from __future__ import annotations

from typing import Iterator, Mapping, Optional, Union

from richblocks.constants import DEFAULT_BOLD_FONT_WEIGHT_THRESHOLD
from richblocks.entities import decode_html_entities
from richblocks.markers import BOLD_CLASS_MARKERS, matches_any_marker
from richblocks.utils.css import style_indicates_bold


class NodeTree:
    """Arena owning every node produced for one markup fragment.

    Parameters
    ----------
    bold_font_weight_threshold : int, default 600
        Numeric ``font-weight`` at or above which an element counts as bold

    Attributes
    ----------
    nodes : list of ElementNode or TextNode
        All nodes in creation (document) order
    roots : list of int
        Indices of top-level nodes
    frozen : bool
        True once construction has finished

    """

    def __init__(self, bold_font_weight_threshold: int = DEFAULT_BOLD_FONT_WEIGHT_THRESHOLD):
        """Initialize an empty, mutable tree."""
        self.nodes: list[DomNode] = []
        self.roots: list[int] = []
        self.frozen = False
        self.bold_font_weight_threshold = bold_font_weight_threshold

    def __len__(self) -> int:
        """Return the number of nodes in the arena."""
        return len(self.nodes)

    def node(self, index: int) -> DomNode:
        """Return the node stored at ``index``."""
        return self.nodes[index]

    def root_nodes(self) -> list[DomNode]:
        """Return the top-level nodes in document order."""
        return [self.nodes[index] for index in self.roots]

    def add(self, node: DomNode, parent: Optional[ElementNode]) -> DomNode:
        """Append a node to the arena, linking it under ``parent``.

        Parameters
        ----------
        node : ElementNode or TextNode
            Detached node to insert
        parent : ElementNode or None
            Parent element, or None to append a root

        Returns
        -------
        ElementNode or TextNode
            The inserted node

        Raises
        ------
        RuntimeError
            If the tree has already been frozen

        """
        if self.frozen:
            raise RuntimeError("NodeTree is frozen; nodes can only be added during construction")
        node.tree = self
        node.index = len(self.nodes)
        self.nodes.append(node)
        if parent is None:
            node.parent_index = None
            self.roots.append(node.index)
        else:
            node.parent_index = parent.index
            parent.child_indices.append(node.index)
        return node

    def freeze(self) -> None:
        """Mark construction as finished, enabling memoized queries."""
        self.frozen = True


class _BaseNode:
    """Shared arena bookkeeping for element and text nodes."""

    tree: NodeTree
    index: int
    parent_index: Optional[int]

    def __init__(self) -> None:
        self.index = -1
        self.parent_index = None

    @property
    def parent(self) -> Optional[ElementNode]:
        """Return the parent element, or None for a root node."""
        if self.parent_index is None:
            return None
        parent = self.tree.nodes[self.parent_index]
        assert isinstance(parent, ElementNode)
        return parent


class TextNode(_BaseNode):
    """A run of decoded character data.

    Parameters
    ----------
    text : str
        Entity-decoded text content

    """

    def __init__(self, text: str):
        """Initialize a detached text node."""
        super().__init__()
        self.text = text

    def __repr__(self) -> str:
        """Return a short debugging representation."""
        return f"TextNode({self.text!r})"


class ElementNode(_BaseNode):
    """An element with a lowercased tag, decoded attributes and children.

    Parameters
    ----------
    tag : str
        Tag name, lowercased on construction
    attributes : Mapping[str, str] or None
        Attribute name to decoded value

    """

    def __init__(self, tag: str, attributes: Optional[Mapping[str, str]] = None):
        """Initialize a detached element node."""
        super().__init__()
        self.tag = tag.lower()
        self.attributes: dict[str, str] = dict(attributes or {})
        self.child_indices: list[int] = []
        self._class_names: Optional[frozenset[str]] = None
        self._text: Optional[str] = None
        self._ancestor_classes: dict[Optional[int], frozenset[str]] = {}
        self._bold_content: dict[int, bool] = {}

    def __repr__(self) -> str:
        """Return a short debugging representation."""
        return f"ElementNode({self.tag!r}, children={len(self.child_indices)})"

    @property
    def children(self) -> list[DomNode]:
        """Return child nodes in document order."""
        nodes = self.tree.nodes
        return [nodes[index] for index in self.child_indices]

    def element_children(self) -> list[ElementNode]:
        """Return child elements, skipping text nodes."""
        return [child for child in self.children if isinstance(child, ElementNode)]

    def iter_descendants(self) -> Iterator[DomNode]:
        """Yield descendants depth-first in document order (self excluded)."""
        nodes = self.tree.nodes
        stack = list(reversed(self.child_indices))
        while stack:
            node = nodes[stack.pop()]
            yield node
            if isinstance(node, ElementNode):
                stack.extend(reversed(node.child_indices))

    def attr(self, name: str) -> str:
        """Return an attribute value, or an empty string if absent."""
        return self.attributes.get(name, "")

    def has_attr(self, name: str) -> bool:
        """Return True if the attribute is present, even with an empty value."""
        return name in self.attributes

    def class_names(self) -> frozenset[str]:
        """Return the element's class names split on whitespace."""
        if self._class_names is None:
            self._class_names = frozenset(self.attr("class").split())
        return self._class_names

    def text(self) -> str:
        """Return the recursive concatenation of all descendant text.

        Memoized once the tree is frozen.
        """
        if self._text is not None:
            return self._text
        parts = [node.text for node in self.iter_descendants() if isinstance(node, TextNode)]
        text = "".join(parts)
        if self.tree.frozen:
            self._text = text
        return text

    def ancestor_classes(self, stop_at: Optional[ElementNode] = None) -> frozenset[str]:
        """Collect class names of ancestors up to, but excluding, ``stop_at``.

        Parameters
        ----------
        stop_at : ElementNode or None, default None
            Boundary element; None walks up to the root

        Returns
        -------
        frozenset of str
            Union of ancestor class names (the element's own classes excluded)

        """
        key = stop_at.index if stop_at is not None else None
        cached = self._ancestor_classes.get(key)
        if cached is not None:
            return cached

        classes: set[str] = set()
        cursor = self.parent
        while cursor is not None and cursor is not stop_at:
            classes.update(cursor.class_names())
            cursor = cursor.parent

        result = frozenset(classes)
        if self.tree.frozen:
            self._ancestor_classes[key] = result
        return result

    def is_bold(self) -> bool:
        """Return True if this element alone signals bold text."""
        if self.tag in ("strong", "b"):
            return True
        if style_indicates_bold(self.attr("style"), self.tree.bold_font_weight_threshold):
            return True
        return matches_any_marker(self.class_names(), BOLD_CLASS_MARKERS)

    def contains_bold_content(self, max_depth: int) -> bool:
        """Return True if this element or a descendant within ``max_depth`` is bold.

        ``max_depth`` counts descendant levels: ``0`` inspects only this
        element, ``1`` adds its direct children, and a negative budget is
        always False.

        Parameters
        ----------
        max_depth : int
            Remaining recursion budget

        Returns
        -------
        bool
            True when bold markup, a bold ``font-weight`` or a bold class
            marker is found within the budget

        """
        if max_depth < 0:
            return False
        cached = self._bold_content.get(max_depth)
        if cached is not None:
            return cached

        result = self.is_bold() or any(
            child.contains_bold_content(max_depth - 1) for child in self.element_children()
        )
        if self.tree.frozen:
            self._bold_content[max_depth] = result
        return result


DomNode = Union[ElementNode, TextNode]


class TreeBuilder:
    """Push-style handler that assembles a :class:`NodeTree`.

    Receives ``on_open_tag`` / ``on_text`` / ``on_close_tag`` / ``on_end``
    events from an external tokenizer. Close tags that do not match the
    current element are ignored, which tolerates unbalanced markup.

    Parameters
    ----------
    bold_font_weight_threshold : int, default 600
        Passed through to the :class:`NodeTree`
    decode_entities : bool, default True
        Decode character references in text and attribute values. Disable it
        for tokenizers that already deliver decoded data, such as justhtml.

    """

    def __init__(
        self,
        bold_font_weight_threshold: int = DEFAULT_BOLD_FONT_WEIGHT_THRESHOLD,
        decode_entities: bool = True,
    ):
        """Initialize the builder with an empty tree."""
        self.tree = NodeTree(bold_font_weight_threshold=bold_font_weight_threshold)
        self.decode_entities = decode_entities
        self._cursor: Optional[ElementNode] = None

    def _decode(self, value: str, in_attribute: bool = False) -> str:
        return decode_html_entities(value, in_attribute=in_attribute) if self.decode_entities else value

    @property
    def finished(self) -> bool:
        """Return True once ``on_end`` has been received."""
        return self.tree.frozen

    def on_open_tag(self, name: str, attributes: Optional[Mapping[str, Optional[str]]] = None) -> None:
        """Open an element under the cursor and make it the new cursor."""
        if self.finished:
            return
        decoded = {
            key.lower(): self._decode(value or "", in_attribute=True) for key, value in (attributes or {}).items()
        }
        element = ElementNode(name, decoded)
        self.tree.add(element, self._cursor)
        self._cursor = element

    def on_text(self, text: str) -> None:
        """Append decoded text under the cursor (or as a root).

        Consecutive text events are merged into a single text node, since the
        tokenizer may split one run of character data across several events.
        """
        if self.finished or not text:
            return
        decoded = self._decode(text)
        siblings = self._cursor.child_indices if self._cursor is not None else self.tree.roots
        if siblings:
            previous = self.tree.nodes[siblings[-1]]
            if isinstance(previous, TextNode):
                previous.text += decoded
                return
        self.tree.add(TextNode(decoded), self._cursor)

    def on_close_tag(self, name: str) -> None:
        """Pop the cursor if it matches ``name``; ignore the event otherwise."""
        if self.finished or self._cursor is None:
            return
        if self._cursor.tag == name.lower():
            self._cursor = self._cursor.parent

    def on_end(self) -> None:
        """Finish construction and freeze the tree."""
        if self.finished:
            return
        self._cursor = None
        self.tree.freeze()
