"""Find log lines that auto-escape cannot repair.

Each non-blank line is run through the pipeline on its own with
auto-escape and strict parsing enabled; lines that still raise
ParseError are reported and bucketed by a rough shape heuristic.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .config import DeduplicatorConfig
from .exceptions import ParseError
from .transforms.pipeline import Deduplicator

logger = logging.getLogger(__name__)

UNBALANCED_PARENTHESES = "Unbalanced Parentheses"
ONLY_PUNCTUATION = "Only Punctuation"
MISMATCHED_BRACKETS = "Mismatched Brackets"
NESTED_UNCLOSED = "Nested Unclosed"
OTHER = "Other"

_PAREN_ONLY_PATTERN = re.compile(r"^[\s()]+$")


@dataclass
class EdgeCase:
    """A line that fails to parse even after auto-escape."""

    line_number: int
    original_line: str
    error: str


@dataclass
class EdgeCaseReport:
    """Edge cases grouped by category, with line statistics."""

    total_lines: int
    edge_cases: list[EdgeCase] = field(default_factory=list)
    by_category: dict[str, list[EdgeCase]] = field(default_factory=dict)

    @property
    def failed_lines(self) -> int:
        return len(self.edge_cases)

    @property
    def success_rate(self) -> float:
        """Percentage of processed lines that parsed."""
        if self.total_lines == 0:
            return 100.0
        return 100.0 * (1 - self.failed_lines / self.total_lines)


def classify_edge_case(line: str) -> str:
    """Name the likely reason a line could not be repaired."""
    if "))(" in line or "(()" in line:
        return UNBALANCED_PARENTHESES
    if _PAREN_ONLY_PATTERN.match(line):
        return ONLY_PUNCTUATION
    if line.count("(") != line.count(")"):
        return MISMATCHED_BRACKETS
    if "((" in line and "))" not in line:
        return NESTED_UNCLOSED
    return OTHER


def detect_edge_cases(content: str, deduplicator: Deduplicator | None = None) -> list[EdgeCase]:
    """Return every non-blank line that auto-escape cannot make parseable."""
    deduplicator = deduplicator or Deduplicator(
        DeduplicatorConfig(auto_escape=True, fail_on_parse_error=True)
    )

    edge_cases: list[EdgeCase] = []
    for line_number, line in enumerate(content.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            deduplicator.deduplicate(line)
        except ParseError as e:
            edge_cases.append(
                EdgeCase(line_number=line_number, original_line=line, error=str(e))
            )

    logger.debug("Found %d edge cases", len(edge_cases))
    return edge_cases


def summarize_edge_cases(edge_cases: list[EdgeCase], total_lines: int) -> EdgeCaseReport:
    """Group edge cases by category, keeping first-seen category order."""
    by_category: dict[str, list[EdgeCase]] = {}
    for edge_case in edge_cases:
        category = classify_edge_case(edge_case.original_line)
        by_category.setdefault(category, []).append(edge_case)

    return EdgeCaseReport(
        total_lines=total_lines,
        edge_cases=list(edge_cases),
        by_category=by_category,
    )


def count_processed_lines(content: str) -> int:
    """Number of non-blank lines ``detect_edge_cases`` looks at."""
    return sum(1 for line in content.split("\n") if line.strip())
