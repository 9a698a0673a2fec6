"""Tests for pattern discovery.

Tests cover:
1. Exact duplicates
2. Structured duplicates collapsing to prefixes
3. Pairwise prefix and suffix buckets
4. Counting and discovery order
"""

from lino_dedup.models import PatternKind
from lino_dedup.transforms.pattern_finder import (
    PatternFinder,
    common_prefix_length,
    common_suffix_length,
    find_patterns,
)


def by_kind(patterns, kind):
    return {p.tokens: p for p in patterns if p.kind is kind}


class TestCommonRuns:
    """Tests for the prefix/suffix length helpers."""

    def test_prefix_leaves_a_token(self):
        """The shared run is always shorter than both contents."""
        assert common_prefix_length(("a", "b"), ("a", "b", "c")) == 1
        assert common_prefix_length(("a", "b", "c"), ("a", "b", "d")) == 2

    def test_suffix_leaves_a_token(self):
        assert common_suffix_length(("x", "b", "c"), ("b", "c")) == 1
        assert common_suffix_length(("x", "b", "c"), ("y", "b", "c")) == 2

    def test_no_shared_run(self):
        assert common_prefix_length(("a", "b"), ("c", "b")) == 0
        assert common_suffix_length(("a", "b"), ("a", "c")) == 0


class TestExactPatterns:
    """Tests for exact duplicate detection."""

    def test_duplicate_pair(self, entries):
        patterns = find_patterns(entries("(first second)\n(third fourth)\n(first second)"))

        assert len(patterns) == 1
        pattern = patterns[0]
        assert pattern.kind is PatternKind.EXACT
        assert pattern.tokens == ("first", "second")
        assert pattern.items == {("first", "second")}
        assert pattern.count == 2

    def test_single_tokens_ignored(self, entries):
        """Entries need at least two tokens to be deduplicated."""
        assert find_patterns(entries("(a)\n(a)\n(a)\nb\nb")) == []

    def test_unique_entries(self, entries):
        assert find_patterns(entries("(a b)\n(c d)")) == []


class TestStructuredPatterns:
    """Tests for ``(prefix) rest`` shaped entries."""

    def test_repeated_structured_entry_becomes_prefix(self, entries):
        patterns = find_patterns(entries("(this is) a link\n(this is) a link"))

        assert len(patterns) == 1
        pattern = patterns[0]
        assert pattern.kind is PatternKind.PREFIX
        assert pattern.tokens == ("this", "is")
        assert pattern.items == {("this", "is", "a", "link")}
        assert pattern.count == 2

    def test_single_structured_entry_counts_toward_exact(self, entries):
        """One structured occurrence is not forced; its content is an exact duplicate."""
        patterns = find_patterns(entries("(this is) a link\nthis is a link\nthis is a link"))

        exact = by_kind(patterns, PatternKind.EXACT)
        assert exact[("this", "is", "a", "link")].count == 3
        assert by_kind(patterns, PatternKind.PREFIX) == {}

    def test_structured_entries_skip_pairwise_search(self, entries):
        """Structured entries are not compared against plain ones."""
        patterns = find_patterns(entries("(this is) a cat\nthis is a dog"))
        assert patterns == []


class TestAffixPatterns:
    """Tests for pairwise prefix and suffix buckets."""

    def test_simple_prefix(self, entries):
        patterns = find_patterns(entries("(hello world foo)\n(hello world bar)"))

        assert len(patterns) == 1
        assert patterns[0].kind is PatternKind.PREFIX
        assert patterns[0].tokens == ("hello", "world")
        assert patterns[0].count == 2

    def test_simple_suffix(self, entries):
        patterns = find_patterns(entries("(foo ends here)\n(bar ends here)"))

        assert len(patterns) == 1
        assert patterns[0].kind is PatternKind.SUFFIX
        assert patterns[0].tokens == ("ends", "here")

    def test_buckets_keyed_by_shared_run(self, entries):
        """Each distinct shared run gets its own bucket."""
        text = (
            "(this is a link of cat)\n"
            "(this is a link of tree)\n"
            "(this is a different thing)\n"
            "(this is a different item)"
        )
        prefixes = by_kind(find_patterns(entries(text)), PatternKind.PREFIX)

        assert set(prefixes) == {
            ("this", "is", "a", "link", "of"),
            ("this", "is", "a"),
            ("this", "is", "a", "different"),
        }
        assert len(prefixes[("this", "is", "a")].items) == 4
        assert prefixes[("this", "is", "a")].count == 4

    def test_count_includes_repeats(self, entries):
        """Prefix counts sum every entry with a covered content."""
        patterns = find_patterns(entries("(x y p)\n(x y p)\n(x y q)"))

        assert by_kind(patterns, PatternKind.EXACT)[("x", "y", "p")].count == 2
        prefix = by_kind(patterns, PatternKind.PREFIX)[("x", "y")]
        assert prefix.items == {("x", "y", "p"), ("x", "y", "q")}
        assert prefix.count == 3

    def test_pattern_never_covers_whole_item(self, entries):
        """A shorter entry fully contained as a prefix still leaves a token."""
        patterns = find_patterns(entries("(a b)\n(a b c)"))

        assert [p.tokens for p in patterns] == [("a",)]
        for pattern in patterns:
            for item in pattern.items:
                assert len(item) > pattern.length

    def test_suffix_patterns_cover_two_items(self, entries):
        text = "(the cat sat on mat)\n(the dog sat on mat)\n(big cat ran to park)"
        for pattern in by_kind(find_patterns(entries(text)), PatternKind.SUFFIX).values():
            assert len(pattern.items) >= 2


class TestDiscoveryOrder:
    """Tests for the order patterns are returned in."""

    def test_exact_then_prefix_then_suffix(self, entries):
        text = "(a b c)\n(a b c)\n(a b d)\n(z b d)"
        kinds = [p.kind for p in PatternFinder().find(entries(text))]

        assert kinds == sorted(
            kinds,
            key=[PatternKind.EXACT, PatternKind.PREFIX, PatternKind.SUFFIX].index,
        )
        assert set(kinds) == {PatternKind.EXACT, PatternKind.PREFIX, PatternKind.SUFFIX}
