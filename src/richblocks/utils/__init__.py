#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/richblocks/utils/__init__.py
"""Shared helpers for CSS parsing and dependency checks."""
