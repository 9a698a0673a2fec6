"""Configuration models for lino-dedup."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TOP_PERCENTAGE = 0.2
DEFAULT_MAX_DEPTH = 256


@dataclass
class ParserConfig:
    """Configuration for the default Links Notation parser."""

    max_depth: int = DEFAULT_MAX_DEPTH  # Deepest allowed parenthesis nesting


@dataclass
class DeduplicatorConfig:
    """Configuration for a deduplication run.

    GOTCHAS:
    - top_percentage is a fraction of DISCOVERED patterns, not of entries.
      At least one pattern is always selected when any were found.
    - top_percentage is not range-checked here; the CLI validates it.
    - auto_escape quotes tokens in the raw text, so escaped tokens come back
      single-quoted in the output even when nothing was deduplicated.
    """

    top_percentage: float = DEFAULT_TOP_PERCENTAGE
    auto_escape: bool = False  # Repair malformed text before parsing
    fail_on_parse_error: bool = False  # Raise ParseError instead of returning a failed result
    max_depth: int = DEFAULT_MAX_DEPTH  # Passed to the default parser

    def parser_config(self) -> ParserConfig:
        """Return the parser configuration derived from this config."""
        return ParserConfig(max_depth=self.max_depth)
