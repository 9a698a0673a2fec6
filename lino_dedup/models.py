"""Data models for lino-dedup: entry trees, patterns and run results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Flattened content of an entry: its leaf tokens, left to right.
Content = tuple[str, ...]


@dataclass(frozen=True)
class Leaf:
    """A single token."""

    token: str


@dataclass(frozen=True)
class Compound:
    """An ordered, non-empty list of child nodes.

    ``label`` is set for id-labeled nodes such as ``1: a b``. Labels are
    not part of an entry's flattened content.
    """

    children: tuple[Node, ...]
    label: str | None = None

    def __post_init__(self) -> None:
        if not self.children:
            raise ValueError("Compound requires at least one child")


Node = Leaf | Compound


class PatternKind(str, Enum):
    """Kind of repeated token sequence."""

    EXACT = "exact"  # The whole entry repeats
    PREFIX = "prefix"  # Entries share leading tokens
    SUFFIX = "suffix"  # Entries share trailing tokens


@dataclass
class Pattern:
    """A repeatable token sequence and the entry contents it covers.

    Attributes:
        kind: Exact, prefix or suffix.
        tokens: The shared token sequence.
        items: Distinct flattened contents covered by this pattern.
        count: Total number of entries across all covered contents.
    """

    kind: PatternKind
    tokens: Content
    items: set[Content] = field(default_factory=set)
    count: int = 0

    @property
    def length(self) -> int:
        """Number of tokens in the shared sequence."""
        return len(self.tokens)

    @property
    def score(self) -> int:
        """Selection score: occurrences times token length."""
        return self.count * self.length

    @property
    def text(self) -> str:
        return " ".join(self.tokens)


@dataclass
class DeduplicationResult:
    """Result of one deduplication run.

    Attributes:
        output: Text to emit. Formatted entries on a successful parse,
            otherwise the original input.
        success: True when at least one pattern was applied.
        reason: Why the run did not succeed, if it did not.
        patterns_applied: Number of selected patterns.
        escape_stage: Auto-escape stage whose text was parsed, if auto-escape ran.
    """

    output: str
    success: bool
    reason: str | None = None
    patterns_applied: int = 0
    escape_stage: int | None = None
