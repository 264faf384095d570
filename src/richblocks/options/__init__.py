#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parser options for richblocks."""

from richblocks.options.base import BaseParserOptions, CloneFrozenMixin
from richblocks.options.richtext import RichTextOptions

__all__ = ["BaseParserOptions", "CloneFrozenMixin", "RichTextOptions"]
