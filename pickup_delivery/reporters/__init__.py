"""Reporting utilities for planning results."""

from .console_reporter import (
    format_move,
    format_plan,
    format_results_table,
    print_results,
    summarize_failures,
)

__all__ = [
    "format_move",
    "format_plan",
    "format_results_table",
    "print_results",
    "summarize_failures",
]
