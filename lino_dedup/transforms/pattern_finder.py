"""Discovery of repeated token sequences across entries.

Three kinds of patterns are found:

1. Structured duplicates: entries shaped like ``(this is) a link`` that
   repeat are collapsed on their natural boundary, becoming a PREFIX
   pattern on the nested group's tokens rather than an EXACT duplicate.
2. Exact duplicates: any other content that appears at least twice.
3. Shared prefixes and suffixes: for every pair of distinct contents the
   longest common leading and trailing token runs, each leaving at least
   one token over in both contents. Contents sharing the same run are
   bucketed into one pattern keyed by that run.

The pairwise step is quadratic in the number of distinct contents. That
bound is accepted for typical inputs; it is not optimized away because
a sub-quadratic index would change which buckets are discovered.

Patterns are returned in the order exact, prefix, suffix. The selector
sorts stably, so this order is the tie-break between equal scores.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence

from ..models import Compound, Content, Node, Pattern, PatternKind
from .flattener import flatten, is_structured

logger = logging.getLogger(__name__)

MIN_CONTENT_TOKENS = 2


def common_prefix_length(a: Content, b: Content) -> int:
    """Length of the shared leading run, shorter than both contents."""
    limit = min(len(a), len(b)) - 1
    length = 0
    while length < limit and a[length] == b[length]:
        length += 1
    return length


def common_suffix_length(a: Content, b: Content) -> int:
    """Length of the shared trailing run, shorter than both contents."""
    limit = min(len(a), len(b)) - 1
    length = 0
    while length < limit and a[-1 - length] == b[-1 - length]:
        length += 1
    return length


class PatternFinder:
    """Finds exact, prefix and suffix patterns in a list of entries.

    Example:
        >>> finder = PatternFinder()
        >>> patterns = finder.find(entries)
        >>> [(p.kind.value, p.text) for p in patterns]
        [('prefix', 'hello world')]
    """

    def find(self, entries: Sequence[Node]) -> list[Pattern]:
        """Discover patterns. Patterns may overlap in the items they cover."""
        valid: list[tuple[Node, Content]] = []
        for entry in entries:
            content = flatten(entry)
            if len(content) >= MIN_CONTENT_TOKENS:
                valid.append((entry, content))

        occurrences = Counter(content for _, content in valid)

        structured_prefixes = self._structured_prefixes(valid)

        patterns = self._exact_patterns(occurrences, set(structured_prefixes))

        plain = [content for entry, content in valid if not is_structured(entry)]
        distinct = list(dict.fromkeys(plain))

        prefix_buckets: dict[Content, set[Content]] = {}
        for content, prefix in structured_prefixes.items():
            prefix_buckets.setdefault(prefix, set()).add(content)

        suffix_buckets: dict[Content, set[Content]] = {}
        for i, first in enumerate(distinct):
            for second in distinct[i + 1 :]:
                prefix_len = common_prefix_length(first, second)
                if prefix_len:
                    bucket = prefix_buckets.setdefault(first[:prefix_len], set())
                    bucket.update((first, second))

                suffix_len = common_suffix_length(first, second)
                if suffix_len:
                    bucket = suffix_buckets.setdefault(first[-suffix_len:], set())
                    bucket.update((first, second))

        for prefix, items in prefix_buckets.items():
            # A structured duplicate alone is enough: it repeats by construction.
            patterns.append(self._affix_pattern(PatternKind.PREFIX, prefix, items, occurrences))

        for suffix, items in suffix_buckets.items():
            if len(items) >= 2:
                patterns.append(
                    self._affix_pattern(PatternKind.SUFFIX, suffix, items, occurrences)
                )

        logger.debug(
            "Found %d patterns in %d entries (%d valid, %d distinct plain)",
            len(patterns),
            len(entries),
            len(valid),
            len(distinct),
        )
        return patterns

    def _structured_prefixes(self, valid: list[tuple[Node, Content]]) -> dict[Content, Content]:
        """Map repeated structured content to the tokens of its leading group."""
        first_group: dict[Content, Content] = {}
        structured_counts: Counter[Content] = Counter()

        for entry, content in valid:
            if not isinstance(entry, Compound) or not is_structured(entry):
                continue
            structured_counts[content] += 1
            if content not in first_group:
                first_group[content] = flatten(entry.children[0])

        return {
            content: prefix
            for content, prefix in first_group.items()
            if structured_counts[content] >= 2
        }

    @staticmethod
    def _exact_patterns(occurrences: Counter[Content], excluded: set[Content]) -> list[Pattern]:
        return [
            Pattern(kind=PatternKind.EXACT, tokens=content, items={content}, count=count)
            for content, count in occurrences.items()
            if count >= 2 and content not in excluded
        ]

    @staticmethod
    def _affix_pattern(
        kind: PatternKind,
        tokens: Content,
        items: set[Content],
        occurrences: Counter[Content],
    ) -> Pattern:
        return Pattern(
            kind=kind,
            tokens=tokens,
            items=set(items),
            count=sum(occurrences[item] for item in items),
        )


def find_patterns(entries: Sequence[Node]) -> list[Pattern]:
    """Find patterns with a default PatternFinder."""
    return PatternFinder().find(entries)
