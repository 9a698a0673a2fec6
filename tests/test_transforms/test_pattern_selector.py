"""Tests for greedy pattern selection."""

import pytest

from lino_dedup.models import Pattern, PatternKind
from lino_dedup.transforms.pattern_finder import find_patterns
from lino_dedup.transforms.pattern_selector import select_patterns, selection_budget


def make_pattern(kind, tokens, items, count):
    return Pattern(
        kind=kind,
        tokens=tuple(tokens.split()),
        items={tuple(item.split()) for item in items},
        count=count,
    )


class TestSelectionBudget:
    """Tests for the number of patterns accepted."""

    @pytest.mark.parametrize(
        ("total", "top", "expected"),
        [
            (0, 0.2, 1),
            (2, 0.2, 1),
            (5, 0.2, 1),
            (10, 0.5, 5),
            (3, 1.0, 3),
            (4, 0.0, 1),
            (7, 0.3, 3),
        ],
    )
    def test_budget(self, total, top, expected):
        assert selection_budget(total, top) == expected


class TestSelectPatterns:
    """Tests for ranking and conflict handling."""

    def test_empty(self):
        assert select_patterns([], 1.0) == []

    def test_ranked_by_score_then_count(self):
        """Equal scores prefer the more frequent pattern."""
        wide = make_pattern(PatternKind.PREFIX, "a b c", ["a b c x", "a b c y"], 2)
        frequent = make_pattern(PatternKind.EXACT, "d e", ["d e"], 3)
        rare = make_pattern(PatternKind.EXACT, "f g", ["f g"], 2)

        selected = select_patterns([rare, wide, frequent], 1.0)
        assert selected == [frequent, wide, rare]

    def test_overlapping_patterns_rejected(self):
        """A pattern sharing an item with an accepted one is skipped."""
        long_prefix = make_pattern(PatternKind.PREFIX, "s c e", ["s c e d", "s c e v"], 2)
        short_prefix = make_pattern(
            PatternKind.PREFIX, "s", ["s c e d", "s c e v", "s n a", "s n b"], 4
        )
        other = make_pattern(PatternKind.PREFIX, "s n", ["s n a", "s n b"], 2)

        selected = select_patterns([short_prefix, other, long_prefix], 1.0)
        assert selected == [long_prefix, other]

    def test_budget_caps_accepted(self):
        patterns = [
            make_pattern(PatternKind.EXACT, f"t{i} u{i}", [f"t{i} u{i}"], 10 - i)
            for i in range(4)
        ]
        selected = select_patterns(patterns, 0.5)
        assert selected == patterns[:2]

    def test_rejected_patterns_do_not_use_budget(self):
        """Only accepted patterns count toward the budget."""
        best = make_pattern(PatternKind.EXACT, "a b c", ["a b c"], 5)
        overlapping = make_pattern(PatternKind.PREFIX, "a b", ["a b c", "a b d"], 6)
        disjoint = make_pattern(PatternKind.EXACT, "x y", ["x y"], 2)

        selected = select_patterns([best, overlapping, disjoint], 0.5)
        assert selected == [best, disjoint]

    def test_ties_keep_discovery_order(self):
        """At equal score and count, the earlier pattern wins."""
        prefix = make_pattern(PatternKind.PREFIX, "start middle", ["start middle end"], 2)
        suffix = make_pattern(PatternKind.SUFFIX, "middle end", ["start middle end"], 2)

        assert select_patterns([prefix, suffix], 1.0) == [prefix]
        assert select_patterns([suffix, prefix], 1.0) == [suffix]

    def test_selected_items_never_overlap(self, entries):
        """No content is covered by two selected patterns."""
        text = (
            "(the cat sat on mat)\n(the dog sat on mat)\n(big cat ran to park)\n"
            "(big dog ran to park)\n(the cat sat on mat)\n(system network setup)\n"
            "(system network reset)\n(system config enable debug)"
        )
        selected = select_patterns(find_patterns(entries(text)), 1.0)

        seen = set()
        for pattern in selected:
            assert seen.isdisjoint(pattern.items)
            seen.update(pattern.items)
