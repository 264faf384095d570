#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/parsers/__init__.py
"""Markup parsers producing block lists."""

from richblocks.parsers.base import BaseParser
from richblocks.parsers.richtext import InheritedStyles, RichTextParser
from richblocks.parsers.tables import TableParser

__all__ = ["BaseParser", "InheritedStyles", "RichTextParser", "TableParser"]
