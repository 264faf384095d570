#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/parsers/richtext.py
"""Rich text markup to block list parser.

This module converts loosely structured quiz markup into an ordered list of
blocks. It walks the node tree built by :class:`~richblocks.dom.TreeBuilder`
with a dispatch table keyed on tag name. Block elements (paragraphs,
headings, lists, tables, images, containers) become blocks; everything else
is treated as an inline container and composed into styled text.

Parsing never raises on bad markup. Nesting deeper than the configured
recursion ceiling is cut off: the blocks gathered so far are kept and a
``depth_limit`` diagnostic is emitted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from richblocks.ast.nodes import (
    AbstractBlock,
    Block,
    BulletList,
    CodeBlock,
    Divider,
    Heading,
    Media,
    OrderedList,
    Paragraph,
)
from richblocks.constants import BULLET_MARKER, NON_BREAKING_SPACE, TextAlign
from richblocks.diagnostics import DiagnosticCallback
from richblocks.dom import DomNode, ElementNode, NodeTree, TextNode, TreeBuilder
from richblocks.markers import (
    ABSTRACT_CLASS_NAME,
    BLOCK_LEVEL_CHILD_TAGS,
    IGNORED_TAGS,
    contains_insensitive,
)
from richblocks.media import extract_media_ref
from richblocks.options.richtext import RichTextOptions
from richblocks.parsers.base import BaseParser
from richblocks.parsers.tables import TableParser
from richblocks.styles import InlineStyle, apply_class_styles, apply_tag_style
from richblocks.text import StyledText, StyledTextBuilder
from richblocks.tokenizer import StreamEvent, feed_events, tokenize
from richblocks.tooltips import extract_tooltip_text, is_tooltip_content_node
from richblocks.utils.css import parse_text_align
from richblocks.utils.decorators import debug_timer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InheritedStyles:
    """Block-level context threaded through recursive parsing."""

    text_align: Optional[TextAlign] = None


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except ValueError:
        return None


class RichTextParser(BaseParser):
    """Convert rich text markup to a list of blocks.

    Parameters
    ----------
    options : RichTextOptions or None, default = None
        Parsing options; defaults are used when None
    diagnostic_callback : DiagnosticCallback or None, default = None
        Sink for depth, row, column and iteration limit breaches

    Examples
    --------
        >>> parser = RichTextParser()
        >>> blocks = parser.parse("<h2>Anatomy</h2><p>The <b>aorta</b> ...</p>")
        >>> [type(block).__name__ for block in blocks]
        ['Heading', 'Paragraph']

    """

    # Dispatch table mapping tag names to block handler methods
    _BLOCK_HANDLERS = {
        "p": "_handle_paragraph",
        "h1": "_handle_heading",
        "h2": "_handle_heading",
        "h3": "_handle_heading",
        "h4": "_handle_heading",
        "h5": "_handle_heading",
        "h6": "_handle_heading",
        "ul": "_handle_bullet_list",
        "ol": "_handle_ordered_list",
        "hr": "_handle_divider",
        "pre": "_handle_code_block",
        "code": "_handle_code_block",
        "table": "_handle_table",
        "div": "_handle_container",
        "section": "_handle_container",
        "article": "_handle_container",
        "blockquote": "_handle_container",
        "img": "_handle_image",
    }

    def __init__(
        self,
        options: RichTextOptions | None = None,
        diagnostic_callback: Optional[DiagnosticCallback] = None,
    ):
        """Initialize the parser with options and an optional diagnostic sink."""
        BaseParser._validate_options_type(options, RichTextOptions, "richtext")
        options = options or RichTextOptions()
        super().__init__(options, diagnostic_callback)
        self.options: RichTextOptions = options
        self._table_parser = TableParser(options, self.build_styled_text, diagnostic_callback)

    def parse(self, html: str) -> list[Block]:
        """Parse a markup fragment into blocks.

        Parameters
        ----------
        html : str
            Markup fragment; surrounding whitespace is ignored

        Returns
        -------
        list of Block
            Ordered blocks, empty for blank input

        Raises
        ------
        DependencyError
            If the tokenizer package is not installed

        """
        if not html or not html.strip():
            return []
        with debug_timer(logger, "Parsing rich text"):
            # justhtml delivers text and attribute values already decoded
            return self.parse_tree(self.build_tree(tokenize(html.strip()), decode_entities=False))

    def parse_events(self, events: Iterable[StreamEvent]) -> list[Block]:
        """Parse a stream of tokenizer events into blocks."""
        return self.parse_tree(self.build_tree(events))

    def build_tree(self, events: Iterable[StreamEvent], decode_entities: bool = True) -> NodeTree:
        """Replay tokenizer events into a frozen :class:`~richblocks.dom.NodeTree`.

        Character references are decoded unless ``decode_entities`` is False.
        """
        builder = TreeBuilder(
            bold_font_weight_threshold=self.options.bold_font_weight_threshold,
            decode_entities=decode_entities,
        )
        feed_events(events, builder)
        logger.debug(f"Built node tree with {len(builder.tree)} nodes")
        return builder.tree

    def parse_tree(self, tree: NodeTree) -> list[Block]:
        """Parse the top-level nodes of an already built tree."""
        return self.parse_nodes(tree.root_nodes(), InheritedStyles(), 0)

    def parse_nodes(self, nodes: Iterable[DomNode], inherited: InheritedStyles, depth: int) -> list[Block]:
        """Convert sibling nodes into blocks.

        Parameters
        ----------
        nodes : iterable of DomNode
            Sibling nodes in document order
        inherited : InheritedStyles
            Context inherited from the enclosing element
        depth : int
            Current nesting depth

        Returns
        -------
        list of Block
            Blocks for these nodes; empty once the depth ceiling is reached

        """
        max_depth = self.options.max_recursion_depth
        if depth >= max_depth:
            self._emit_diagnostic(
                "depth_limit",
                f"Maximum recursion depth reached at {depth} levels",
                limit=max_depth,
                actual=depth,
            )
            return []

        blocks: list[Block] = []
        for node in nodes:
            if isinstance(node, TextNode):
                text = node.text.strip()
                if text:
                    blocks.append(Paragraph(text=StyledText.plain(text), text_align=inherited.text_align or "start"))
                continue

            if node.tag in IGNORED_TAGS:
                continue
            current_align = parse_text_align(node) or inherited.text_align
            styles = InheritedStyles(text_align=current_align)

            handler_name = self._BLOCK_HANDLERS.get(node.tag)
            if handler_name:
                getattr(self, handler_name)(node, blocks, styles, depth)
            else:
                self._handle_inline_container(node, blocks, styles, depth)
        return blocks

    # ------------------------------------------------------------------
    # Block handlers
    # ------------------------------------------------------------------

    def _handle_paragraph(self, node: ElementNode, blocks: list[Block], styles: InheritedStyles, depth: int) -> None:
        """Emit the paragraph's inline runs, interrupting blocks, then its images."""
        base_style = self._class_style(InlineStyle(), node)
        alignment = styles.text_align or "start"
        inline_nodes: list[DomNode] = []
        images: list[ElementNode] = []

        def flush() -> None:
            if not inline_nodes:
                return
            builder = StyledTextBuilder()
            for inline_node in inline_nodes:
                self._append_node(builder, inline_node, base_style, 0)
            inline_nodes.clear()
            text = builder.build()
            if not text.is_blank():
                blocks.append(Paragraph(text=text, text_align=alignment))

        for child in node.children:
            if isinstance(child, ElementNode) and child.tag == "img":
                images.append(child)
            elif isinstance(child, ElementNode) and child.tag in BLOCK_LEVEL_CHILD_TAGS:
                flush()
                blocks.extend(self.parse_nodes([child], styles, depth + 1))
            else:
                inline_nodes.append(child)
        flush()

        for image in images:
            media = self._parse_media(image, styles.text_align)
            if media is not None:
                blocks.append(media)

    def _handle_heading(self, node: ElementNode, blocks: list[Block], styles: InheritedStyles, depth: int) -> None:
        level = _parse_int(node.tag[1:])
        if level is None or not 1 <= level <= 6:
            level = 6
        text = self.build_styled_text(node)
        if text is not None:
            blocks.append(Heading(level=level, text=text, text_align=styles.text_align or "start"))

    def _list_items(self, node: ElementNode) -> list[StyledText]:
        items = []
        for child in node.element_children():
            if child.tag != "li":
                continue
            text = self.build_styled_text(child)
            if text is not None:
                items.append(text)
        return items

    def _handle_bullet_list(self, node: ElementNode, blocks: list[Block], styles: InheritedStyles, depth: int) -> None:
        items = self._list_items(node)
        if items:
            blocks.append(BulletList(items=items))

    def _handle_ordered_list(self, node: ElementNode, blocks: list[Block], styles: InheritedStyles, depth: int) -> None:
        items = self._list_items(node)
        if items:
            start = _parse_int(node.attr("start"))
            blocks.append(OrderedList(items=items, start=1 if start is None else start))

    def _handle_divider(self, node: ElementNode, blocks: list[Block], styles: InheritedStyles, depth: int) -> None:
        blocks.append(Divider())

    def _handle_code_block(self, node: ElementNode, blocks: list[Block], styles: InheritedStyles, depth: int) -> None:
        text = node.text().strip()
        if text:
            blocks.append(CodeBlock(text=text))

    def _handle_table(self, node: ElementNode, blocks: list[Block], styles: InheritedStyles, depth: int) -> None:
        table = self._table_parser.parse(node)
        if table is not None:
            blocks.append(table)

    def _handle_container(self, node: ElementNode, blocks: list[Block], styles: InheritedStyles, depth: int) -> None:
        """Splice a container's children inline, or build an abstract block."""
        if contains_insensitive(node.class_names(), ABSTRACT_CLASS_NAME):
            abstract = self._parse_abstract(node, depth + 1)
            if abstract is not None:
                blocks.append(abstract)
        else:
            blocks.extend(self.parse_nodes(node.children, styles, depth + 1))

    def _handle_image(self, node: ElementNode, blocks: list[Block], styles: InheritedStyles, depth: int) -> None:
        media = self._parse_media(node, styles.text_align)
        if media is not None:
            blocks.append(media)

    def _handle_inline_container(
        self, node: ElementNode, blocks: list[Block], styles: InheritedStyles, depth: int
    ) -> None:
        text = self.build_styled_text(node)
        if text is not None:
            blocks.append(Paragraph(text=text, text_align=styles.text_align or "start"))

    def _parse_abstract(self, node: ElementNode, depth: int) -> Optional[AbstractBlock]:
        """Build an abstract block; a leading heading becomes its title."""
        child_blocks = self.parse_nodes(node.children, InheritedStyles(), depth + 1)
        if not child_blocks:
            return None
        title = None
        first = child_blocks[0]
        if isinstance(first, Heading):
            title = first.text
            child_blocks = child_blocks[1:]
        return AbstractBlock(title=title, blocks=child_blocks, class_names=node.class_names())

    def _parse_media(self, node: ElementNode, inherited_align: Optional[TextAlign]) -> Optional[Media]:
        """Build a media block from an ``img`` element; None without ``src``."""
        source = node.attr("src")
        if not source.strip():
            return None
        description = node.attr("alt").strip() or node.attr("title").strip() or None

        align = node.attr("align").strip().lower()
        alignment: TextAlign
        if align == "center":
            alignment = "center"
        elif align == "right":
            alignment = "end"
        else:
            alignment = inherited_align or "start"

        return Media(
            source=source,
            media_ref=node.attr("data-filename").strip() or extract_media_ref(source),
            description=description,
            width=_parse_int(node.attr("width")),
            height=_parse_int(node.attr("height")),
            alignment=alignment,
            class_names=node.class_names(),
        )

    # ------------------------------------------------------------------
    # Inline composition
    # ------------------------------------------------------------------

    def _class_style(self, style: InlineStyle, element: ElementNode) -> InlineStyle:
        return apply_class_styles(
            style, element.class_names(), self.options.palette, self.options.show_selected_highlight
        )

    def build_styled_text(self, element: ElementNode) -> Optional[StyledText]:
        """Compose the children of ``element`` into styled text.

        The element's own class overrides form the base style; its tag does
        not contribute a delta.

        Parameters
        ----------
        element : ElementNode
            Block-level owner (paragraph, heading, list item, table cell)

        Returns
        -------
        StyledText or None
            The composed text, or None if it is blank

        """
        builder = StyledTextBuilder()
        base_style = self._class_style(InlineStyle(), element)
        for child in element.children:
            self._append_node(builder, child, base_style, 0)
        text = builder.build()
        return None if text.is_blank() else text

    def _append_node(self, builder: StyledTextBuilder, node: DomNode, style: InlineStyle, depth: int) -> None:
        if isinstance(node, TextNode):
            text = node.text.replace(NON_BREAKING_SPACE, " ")
            if not text:
                return
            # Whitespace-only text still separates adjacent inline elements
            builder.append_styled(text if text.strip() else " ", style, self.options.palette)
            return

        if is_tooltip_content_node(node) or node.tag in IGNORED_TAGS:
            return
        if node.tag == "br":
            builder.append("\n")
            return
        if node.tag == "li":
            if not builder.at_line_start():
                builder.append("\n")
            builder.append(self._list_marker(node))

        max_depth = self.options.max_recursion_depth
        if depth >= max_depth:
            self._emit_diagnostic(
                "depth_limit",
                f"Maximum inline nesting depth reached at {depth} levels",
                limit=max_depth,
                actual=depth,
                tag=node.tag,
            )
            return

        next_style = self._class_style(apply_tag_style(style, node), node)
        next_style = next_style.with_tooltip(extract_tooltip_text(node))
        for child in node.children:
            self._append_node(builder, child, next_style, depth + 1)

        if node.tag in ("p", "div"):
            builder.append("\n")

    @staticmethod
    def _list_marker(item: ElementNode) -> str:
        """Return ``"• "`` or ``"<n>. "`` for a list item met in inline context."""
        parent = item.parent
        if parent is None or parent.tag != "ol":
            return BULLET_MARKER
        start = _parse_int(parent.attr("start"))
        number = 1 if start is None else start
        for sibling in parent.element_children():
            if sibling is item:
                break
            if sibling.tag == "li":
                number += 1
        return f"{number}. "
