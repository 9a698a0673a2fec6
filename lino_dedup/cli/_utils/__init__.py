"""CLI utilities for formatting and parsing."""

from .formatting import (
    console,
    print_edge_case_report,
    print_error,
    print_stats,
    print_success,
    print_table,
    print_warning,
    truncate,
)
from .parsers import generate_output_path, parse_threshold, threshold_callback

__all__ = [
    "console",
    "print_table",
    "print_stats",
    "print_error",
    "print_success",
    "print_warning",
    "print_edge_case_report",
    "truncate",
    "generate_output_path",
    "parse_threshold",
    "threshold_callback",
]
