"""Pytest configuration and shared fixtures for the richblocks test suite.

This module provides shared fixtures and test configuration used across the
entire test suite.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from richblocks.options import RichTextOptions
from richblocks.parsers import RichTextParser

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by hypothesis")


@pytest.fixture
def parser() -> RichTextParser:
    """Provide a parser with default options."""
    return RichTextParser()


@pytest.fixture
def diagnostics() -> list:
    """Provide a list that collects diagnostic events when used as a callback."""
    return []


@pytest.fixture
def collecting_parser(diagnostics) -> RichTextParser:
    """Provide a parser whose diagnostics are appended to ``diagnostics``."""
    return RichTextParser(RichTextOptions(), diagnostic_callback=diagnostics.append)
