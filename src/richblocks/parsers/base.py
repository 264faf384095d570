#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/parsers/base.py
"""Base classes for markup parsers.

This module defines the abstract base class for parsers that turn markup
into an ordered list of :class:`~richblocks.ast.nodes.Block` objects.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from richblocks.ast import Block
from richblocks.constants import DiagnosticType
from richblocks.diagnostics import DiagnosticCallback, emit_diagnostic
from richblocks.exceptions import InvalidOptionsError
from richblocks.options.base import BaseParserOptions

logger = logging.getLogger(__name__)


class BaseParser(ABC):
    """Abstract base class for markup parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Parser-specific options
    diagnostic_callback : DiagnosticCallback or None, default = None
        Optional sink for size-limit breaches during parsing

    Examples
    --------
    Creating a custom parser:

        >>> from richblocks.ast import CodeBlock
        >>> from richblocks.parsers.base import BaseParser
        >>>
        >>> class PlainTextParser(BaseParser):
        ...     def parse(self, html):
        ...         return [CodeBlock(text=html)]

    """

    def __init__(
        self,
        options: BaseParserOptions | None = None,
        diagnostic_callback: Optional[DiagnosticCallback] = None,
    ):
        """Store the options and the diagnostic sink.

        Parameters
        ----------
        options : BaseParserOptions or None, default = None
            Parser-specific options. If None, default options will be used.
        diagnostic_callback : DiagnosticCallback or None, default = None
            Optional callback for size-limit breaches.

        """
        self.options: BaseParserOptions | None = options
        self.diagnostic_callback: Optional[DiagnosticCallback] = diagnostic_callback

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Reject an options object that belongs to a different parser.

        Parameters
        ----------
        options : BaseParserOptions or None
            Options passed by the caller
        expected_type : type
            Options class this parser accepts
        parser_name : str
            Parser name used in the error message

        Raises
        ------
        InvalidOptionsError
            If ``options`` is set but is not an ``expected_type``

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                parser_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, html: str) -> list[Block]:
        """Parse a markup fragment into blocks.

        Parameters
        ----------
        html : str
            Markup fragment

        Returns
        -------
        list of Block
            Ordered blocks; never None, possibly empty

        """
        ...

    def _emit_diagnostic(
        self, event_type: DiagnosticType, message: str, limit: int = 0, actual: int = 0, **metadata: Any
    ) -> None:
        """Report a size-limit breach to the log and the registered callback.

        Examples
        --------
            >>> self._emit_diagnostic("row_limit", "Table truncated", limit=1000, actual=1500)

        """
        emit_diagnostic(self.diagnostic_callback, event_type, message, limit=limit, actual=actual, **metadata)
