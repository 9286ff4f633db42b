"""Shared helper utilities for consistency across the dashboard."""

from .validation import as_mapping, as_rows, finite_float, finite_int, optional_str
from .reasons import FailureKind
from .timer import PeriodicTimer

__all__ = [
    "as_mapping",
    "as_rows",
    "finite_float",
    "finite_int",
    "optional_str",
    "FailureKind",
    "PeriodicTimer",
]
