"""
Utility package for Valora.

This package provides helpers that sit beside the engine rather than inside
it, such as result reporting.
"""

from .reporter import RESULT_SCHEMA, ValidationReporter, format_path

__all__ = [
    "RESULT_SCHEMA",
    "ValidationReporter",
    "format_path",
]
