#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the richblocks library.

This module centralizes the hardcoded limits, magic numbers and default
configuration values used across richblocks. Marker vocabularies used for
class-name heuristics live in :mod:`richblocks.markers`.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Parsing Limits - Defensive bounds against pathological input
3. Heuristics - Thresholds used by table and bold detection
4. Styling - Fixed colors and sizes applied by class overrides
5. Media Links - URL rewriting applied when sanitizing question markup
6. Dependencies - Optional import checks for third-party packages
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

TextAlign = Literal["start", "center", "end", "justify"]
BaselineShift = Literal["none", "superscript", "subscript"]
DiagnosticType = Literal["depth_limit", "row_limit", "column_limit", "iteration_limit"]

# Annotation tags attached to styled text regions
ANNOTATION_URL = "URL"
ANNOTATION_TOOLTIP = "TOOLTIP"

# =============================================================================
# Parsing Limits
# =============================================================================

DEFAULT_MAX_RECURSION_DEPTH = 100
DEFAULT_MAX_TABLE_ROWS = 1000
DEFAULT_MAX_TABLE_COLUMNS = 50

# Maximum iterations per rendered table row, guards against malformed spans
DEFAULT_MAX_COLUMN_ITERATIONS = 500

# =============================================================================
# Heuristics
# =============================================================================

# Longest text a single-cell row may carry and still be treated as a title row
DEFAULT_MAX_TITLE_LENGTH = 200

# Numeric font-weight at or above which a cell counts as bold
DEFAULT_BOLD_FONT_WEIGHT_THRESHOLD = 600

# How deep header-cell detection looks for bold descendants
DEFAULT_BOLD_CHECK_MAX_DEPTH = 4

# How deep cell alignment resolution searches descendants for an align or text-align
DEFAULT_ALIGNMENT_CHECK_MAX_DEPTH = 4

# Conversion factor from ``em`` to layout units for cell padding
DEFAULT_EM_TO_LENGTH_MULTIPLIER = 16.0

# =============================================================================
# Styling
# =============================================================================

# Accent color forced by the "metalink" class marker (ARGB)
METALINK_TEXT_COLOR = 0xFFE91E63

# Font size (sp) used for text inside "abstract" class markers
SMALL_TEXT_FONT_SIZE = 12.0

NON_BREAKING_SPACE = "\u00a0"
BULLET_MARKER = "• "

# =============================================================================
# Media Links
# =============================================================================

# Local media folder that sanitized image sources and media links point into
MEDIA_URI_PREFIX = "file:///media/"
MEDIA_SCHEME = "media://"

# Class added to anchors whose rewritten target is a local media file
METALINK_CLASS = "metalink"

# URL prefixes left untouched by anchor rewriting (compared case-insensitively)
SPECIAL_URL_PROTOCOLS = ("http:", "https:", "mailto:", "data:", "javascript:")

# Extensions that mark an href as a link to an image, video or audio file
MEDIA_LINK_EXTENSIONS = (
    "jpg",
    "jpeg",
    "png",
    "gif",
    "bmp",
    "webp",
    "mp4",
    "avi",
    "mkv",
    "mov",
    "webm",
    "3gp",
    "mp3",
    "wav",
    "ogg",
    "m4a",
    "aac",
    "flac",
)

# =============================================================================
# Dependencies
# =============================================================================

# (install_name, import_name) pairs checked before use
DEPS_TOKENIZER = [("justhtml", "justhtml")]
DEPS_HTML_STRIP = [("beautifulsoup4", "bs4")]
