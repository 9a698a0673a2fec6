"""
lino-dedup - Reference-based deduplication for Links Notation.

Finds repeated token sequences across lines and rewrites them as
numbered references with a one-time definition:

    (hello world foo)          1: hello world
    (hello world bar)    ->    1 foo
                               1 bar

Quick Start:

    from lino_dedup import run_deduplication

    result = run_deduplication(text, top_percentage=0.5)
    if result.success:
        print(result.output)
    else:
        print(f"Nothing applied: {result.reason}")

Raw logs:

    # Quote timestamps, host:port pairs and stray parentheses first
    result = run_deduplication(log_text, auto_escape=True)

Error Handling:

    from lino_dedup import ParseError

    try:
        run_deduplication(text, fail_on_parse_error=True)
    except ParseError as e:
        print(f"Invalid lino: {e.details}")

Enable logging to see what the pipeline does:

    import logging
    logging.basicConfig(level=logging.DEBUG)
"""

from .config import DeduplicatorConfig, ParserConfig
from .edge_cases import (
    EdgeCase,
    EdgeCaseReport,
    classify_edge_case,
    detect_edge_cases,
    summarize_edge_cases,
)
from .exceptions import ConfigurationError, LinoDedupError, ParseError
from .formatter import Formatter, LinoFormatter, format_entries
from .models import Compound, DeduplicationResult, Leaf, Node, Pattern, PatternKind
from .parser import LinoParser, Parser, parse
from .transforms import Deduplicator, run_deduplication

__version__ = "0.3.0"

__all__ = [
    # Main API
    "run_deduplication",
    "Deduplicator",
    "DeduplicationResult",
    # Config
    "DeduplicatorConfig",
    "ParserConfig",
    # Models
    "Leaf",
    "Compound",
    "Node",
    "Pattern",
    "PatternKind",
    # Parsing and formatting
    "Parser",
    "LinoParser",
    "parse",
    "Formatter",
    "LinoFormatter",
    "format_entries",
    # Edge cases
    "EdgeCase",
    "EdgeCaseReport",
    "classify_edge_case",
    "detect_edge_cases",
    "summarize_edge_cases",
    # Exceptions
    "LinoDedupError",
    "ParseError",
    "ConfigurationError",
]
