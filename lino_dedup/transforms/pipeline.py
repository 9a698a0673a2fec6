"""Deduplication pipeline orchestration for lino-dedup.

Stage order:
1. Auto-escape (optional) - repair raw text the parser would reject
2. Parse - text to entries
3. Find patterns - exact, prefix and suffix repeats
4. Select - greedy, conflict-free, bounded by top_percentage
5. Rewrite - numbered definitions and references
6. Format - canonical text

Every call is independent: no state survives between runs, so one
Deduplicator can serve concurrent callers.
"""

from __future__ import annotations

import logging

from ..config import DeduplicatorConfig
from ..exceptions import ConfigurationError, ParseError
from ..formatter import Formatter, LinoFormatter
from ..models import DeduplicationResult, Node
from ..parser import LinoParser, Parser
from .auto_escape import AutoEscaper
from .pattern_finder import PatternFinder
from .pattern_selector import select_patterns
from .rewriter import first_free_reference, rewrite_entries

logger = logging.getLogger(__name__)

REASON_EMPTY_INPUT = "Empty input"
REASON_PARSE_FAILED = "Parsing failed"
REASON_NO_PATTERNS = "No deduplication patterns found"


class Deduplicator:
    """Replaces repeated token sequences with numbered references.

    Example:
        >>> dedup = Deduplicator(DeduplicatorConfig(top_percentage=1.0))
        >>> result = dedup.deduplicate("(hello world foo)\\n(hello world bar)")
        >>> print(result.output)
        1: hello world
        1 foo
        1 bar
    """

    def __init__(
        self,
        config: DeduplicatorConfig | None = None,
        parser: Parser | None = None,
        formatter: Formatter | None = None,
    ):
        """Initialize the deduplicator.

        Args:
            config: Run configuration.
            parser: Parser to use instead of the default LinoParser.
            formatter: Formatter to use instead of the default LinoFormatter.
        """
        self.config = config or DeduplicatorConfig()
        self.parser = parser or LinoParser(self.config.parser_config())
        self.formatter = formatter or LinoFormatter()
        self.finder = PatternFinder()

        if not isinstance(self.parser, Parser):
            raise ConfigurationError(
                "Parser must provide parse(text)",
                details={"parser": type(self.parser).__name__},
            )
        if not isinstance(self.formatter, Formatter):
            raise ConfigurationError(
                "Formatter must provide format(entries)",
                details={"formatter": type(self.formatter).__name__},
            )

    def deduplicate(self, text: str) -> DeduplicationResult:
        """Run the full pipeline on ``text``.

        Raises:
            ParseError: If the text cannot be parsed (after auto-escape, when
                enabled) and ``fail_on_parse_error`` is set.
        """
        if not text.strip():
            return DeduplicationResult(output=text, success=False, reason=REASON_EMPTY_INPUT)

        escape_stage: int | None = None
        try:
            if self.config.auto_escape:
                escaped = AutoEscaper(self.parser).escape(text)
                escape_stage = escaped.stage
                entries = escaped.entries
                if entries is None:
                    entries = self.parser.parse(escaped.text)
            else:
                entries = self.parser.parse(text)
        except ParseError as e:
            if self.config.fail_on_parse_error:
                raise
            logger.debug("Parsing failed: %s", e)
            return DeduplicationResult(
                output=text,
                success=False,
                reason=REASON_PARSE_FAILED,
                escape_stage=escape_stage,
            )

        return self._deduplicate_entries(entries, escape_stage)

    def _deduplicate_entries(
        self, entries: list[Node], escape_stage: int | None
    ) -> DeduplicationResult:
        patterns = self.finder.find(entries)
        selected = select_patterns(patterns, self.config.top_percentage)

        if not selected:
            return DeduplicationResult(
                output=self.formatter.format(entries),
                success=False,
                reason=REASON_NO_PATTERNS,
                escape_stage=escape_stage,
            )

        rewritten = rewrite_entries(entries, selected, first_free_reference(entries))
        logger.debug(
            "Deduplicated %d entries into %d with %d patterns",
            len(entries),
            len(rewritten),
            len(selected),
        )
        return DeduplicationResult(
            output=self.formatter.format(rewritten),
            success=True,
            patterns_applied=len(selected),
            escape_stage=escape_stage,
        )


def run_deduplication(
    text: str,
    top_percentage: float = 0.2,
    auto_escape: bool = False,
    fail_on_parse_error: bool = False,
    *,
    parser: Parser | None = None,
    formatter: Formatter | None = None,
) -> DeduplicationResult:
    """Deduplicate ``text`` in one call.

    Args:
        text: Links Notation (or raw text, with ``auto_escape``).
        top_percentage: Fraction of discovered patterns to apply, in [0, 1].
        auto_escape: Quote problematic tokens before parsing.
        fail_on_parse_error: Raise ParseError instead of returning a failed result.
        parser: Optional parser replacing the default.
        formatter: Optional formatter replacing the default.

    Returns:
        DeduplicationResult with the output text and what happened.
    """
    config = DeduplicatorConfig(
        top_percentage=top_percentage,
        auto_escape=auto_escape,
        fail_on_parse_error=fail_on_parse_error,
    )
    return Deduplicator(config, parser=parser, formatter=formatter).deduplicate(text)
