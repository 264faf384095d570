#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/options/base.py
"""Base classes for parser options.

This module defines the foundation shared by every richblocks options class:
frozen dataclasses that are cloned, never mutated.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from richblocks.constants import DEFAULT_MAX_RECURSION_DEPTH


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Copy-with-changes support for frozen option dataclasses.

    Options are never mutated; callers derive a variant from an existing
    instance instead.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Return a copy with the given fields replaced.

        Parameters
        ----------
        **kwargs : Any
            Fields to override

        Returns
        -------
        Self
            The copy; ``__post_init__`` validation runs again

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseParserOptions(CloneFrozenMixin):
    """Options shared by every richblocks parser.

    Parameters
    ----------
    max_recursion_depth : int, default 100
        Block nesting depth at which parsing of a subtree stops

    Notes
    -----
    Subclasses should define parser-specific options as frozen dataclass fields
    and call ``super().__post_init__()`` from their own validation.

    """

    max_recursion_depth: int = field(
        default=DEFAULT_MAX_RECURSION_DEPTH,
        metadata={
            "help": "Nesting depth at which block parsing stops for a subtree",
            "type": int,
            "importance": "security",
        },
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges for base parser options.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.max_recursion_depth <= 0:
            raise ValueError(f"max_recursion_depth must be positive, got {self.max_recursion_depth}")
