"""Deduplication transforms for lino-dedup."""

from .auto_escape import (
    AutoEscaper,
    EscapeResult,
    auto_escape,
    escape_all_tokens,
    escape_colon_references,
    escape_problem_tokens,
)
from .flattener import content_text, flatten, is_structured
from .pattern_finder import PatternFinder, find_patterns
from .pattern_selector import select_patterns, selection_budget
from .pipeline import (
    REASON_EMPTY_INPUT,
    REASON_NO_PATTERNS,
    REASON_PARSE_FAILED,
    Deduplicator,
    run_deduplication,
)
from .rewriter import (
    ReferenceBinding,
    assign_references,
    first_free_reference,
    rewrite_entries,
)

__all__ = [
    # Pipeline
    "Deduplicator",
    "run_deduplication",
    "REASON_EMPTY_INPUT",
    "REASON_NO_PATTERNS",
    "REASON_PARSE_FAILED",
    # Flattening
    "flatten",
    "content_text",
    "is_structured",
    # Discovery and selection
    "PatternFinder",
    "find_patterns",
    "select_patterns",
    "selection_budget",
    # Rewriting
    "ReferenceBinding",
    "assign_references",
    "first_free_reference",
    "rewrite_entries",
    # Auto-escape
    "AutoEscaper",
    "EscapeResult",
    "auto_escape",
    "escape_colon_references",
    "escape_problem_tokens",
    "escape_all_tokens",
]
