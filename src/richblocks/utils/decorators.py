#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/utils/decorators.py
"""Utility decorators for richblocks components.

Centralizes the dependency checks for the tokenizer and the HTML stripper so
that call sites do not repeat try/except ImportError blocks.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator

from richblocks.exceptions import DependencyError


def requires_dependencies(component_name: str, packages: list[tuple[str, str]]) -> Callable:
    """Check that required packages import before running the wrapped function.

    Parameters
    ----------
    component_name : str
        Name of the component (e.g., "tokenizer"), used in error messages
    packages : list of tuple
        Required packages as (install_name, import_name) pairs

    Returns
    -------
    Callable
        Decorated function that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package cannot be imported. The first ImportError is
        chained for debugging.

    Examples
    --------
        >>> @requires_dependencies("tokenizer", [("justhtml", "justhtml")])
        ... def tokenize(html):
        ...     from justhtml import stream
        ...     return list(stream(html))

    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            original_error = None

            for install_name, import_name in packages:
                try:
                    # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, import_name))
                    if original_error is None:
                        original_error = e

            if missing:
                raise DependencyError(
                    component_name=component_name,
                    missing_packages=missing,
                    original_import_error=original_error,
                ) from original_error

            return func(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Timing is skipped entirely when the logger is not enabled for DEBUG.

    Examples
    --------
        >>> with debug_timer(logger, "Parsing fragment"):
        ...     blocks = parser.parse(html)

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.4f}s")
    else:
        yield
