#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Exceptions raised by richblocks.

Parsing markup never raises: malformed tags, oversized tables, broken tooltip
JSON and unresolvable character references all degrade into a partial block
list. What remains are configuration mistakes and missing packages.

Exception Hierarchy
-------------------
- RichBlocksError

  - ValidationError (bad option values or types)
    - InvalidOptionsError (options object of the wrong class)

  - DependencyError (tokenizer or HTML stripper not importable)

"""

from typing import Any


class RichBlocksError(Exception):
    """Root of the richblocks exception hierarchy.

    Parameters
    ----------
    message : str
        What went wrong
    original_error : Exception, optional
        Lower-level exception being wrapped

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Store the message and the wrapped exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(RichBlocksError):
    """A caller-supplied value was rejected.

    Parameters
    ----------
    message : str
        What was wrong with the value
    parameter_name : str, optional
        Which parameter held the value
    parameter_value : any, optional
        The rejected value
    original_error : Exception, optional
        Lower-level exception being wrapped

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Store the rejected parameter alongside the message."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """A parser was given an options object of the wrong class.

    Parameters
    ----------
    parser_name : str
        Parser that rejected the options (e.g. ``"richtext"``)
    expected_type : type
        Options class the parser accepts
    received_type : type
        Class of the object that was passed
    message : str, optional
        Overrides the generated message

    """

    def __init__(
        self,
        parser_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
    ):
        """Build the message from the expected and received classes."""
        if message is None:
            message = (
                f"The {parser_name} parser takes {expected_type.__name__} options, "
                f"got {received_type.__name__} instead."
            )
        super().__init__(message, parameter_name="options", parameter_value=received_type)
        self.parser_name = parser_name
        self.expected_type = expected_type
        self.received_type = received_type


class DependencyError(RichBlocksError):
    """A package richblocks needs at runtime could not be imported.

    Parameters
    ----------
    component_name : str
        Component that needs the packages (``"tokenizer"``, ``"tooltips"``)
    missing_packages : list[tuple[str, str]]
        ``(install_name, import_name)`` pairs that failed to import
    message : str, optional
        Overrides the generated message
    original_import_error : ImportError, optional
        The first ImportError encountered

    """

    def __init__(
        self,
        component_name: str,
        missing_packages: list[tuple[str, str]],
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Build an install hint from the missing distribution names."""
        if message is None:
            install_names = " ".join(install_name for install_name, _ in missing_packages)
            message = f"richblocks {component_name} support is unavailable. Install with: pip install {install_names}"
        super().__init__(message, original_error=original_import_error)
        self.component_name = component_name
        self.missing_packages = missing_packages
        self.original_import_error = original_import_error
