#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/diagnostics.py
"""Diagnostic callback system for size-limit breaches.

Parsing never fails on oversized input. When a fragment exceeds one of the
defensive bounds (recursion depth, table rows, table columns, grid iterations)
the affected part is truncated or clamped, a warning is logged and a
:class:`DiagnosticEvent` is handed to the caller-supplied callback so that
embedding applications can redirect or suppress these reports.

Examples
--------
Collect diagnostics while parsing:

    >>> from richblocks import parse_html
    >>> events = []
    >>> blocks = parse_html(html, diagnostic_callback=events.append)
    >>> [event.event_type for event in events]
    ['row_limit']

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from richblocks.constants import DiagnosticType

logger = logging.getLogger(__name__)


@dataclass
class DiagnosticEvent:
    """A single size-limit breach reported while parsing.

    Parameters
    ----------
    event_type : DiagnosticType
        Which limit was hit:

        - "depth_limit": block recursion stopped at the depth ceiling
        - "row_limit": excess table rows were dropped
        - "column_limit": the table column count was clamped
        - "iteration_limit": a rendered table row hit the iteration ceiling

    message : str
        Human-readable description of the breach
    limit : int, default 0
        The configured ceiling
    actual : int, default 0
        The observed value that exceeded the ceiling
    metadata : dict, default empty
        Additional event-specific information

    """

    event_type: DiagnosticType
    message: str
    limit: int = 0
    actual: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        """Return human-readable string representation."""
        return f"[{self.event_type.upper()}] {self.message} ({self.actual}/{self.limit})"


DiagnosticCallback = Callable[[DiagnosticEvent], None]
"""Type alias for diagnostic callback functions.

Callbacks should not raise; exceptions are caught and logged.
"""


def emit_diagnostic(
    callback: Optional[DiagnosticCallback],
    event_type: DiagnosticType,
    message: str,
    limit: int = 0,
    actual: int = 0,
    **metadata: Any,
) -> None:
    """Log a limit breach and forward it to the callback if one is registered.

    Parameters
    ----------
    callback : DiagnosticCallback or None
        Sink receiving the event
    event_type : DiagnosticType
        Kind of limit that was hit
    message : str
        Human-readable description
    limit : int, default 0
        The configured ceiling
    actual : int, default 0
        The observed value
    **metadata : Any
        Extra event fields

    """
    logger.warning(message)
    if not callback:
        return

    try:
        callback(DiagnosticEvent(event_type=event_type, message=message, limit=limit, actual=actual, metadata=metadata))
    except Exception as e:
        # Log but don't interrupt parsing if callback fails
        logger.warning(f"Diagnostic callback raised exception: {e}", exc_info=True)
