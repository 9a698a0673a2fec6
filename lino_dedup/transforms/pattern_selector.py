"""Greedy, conflict-free selection of discovered patterns."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from ..models import Content, Pattern

logger = logging.getLogger(__name__)


def selection_budget(total_patterns: int, top_percentage: float) -> int:
    """Maximum number of patterns to accept; never zero."""
    return max(1, math.ceil(total_patterns * top_percentage))


def select_patterns(patterns: Sequence[Pattern], top_percentage: float) -> list[Pattern]:
    """Pick the best-scoring patterns whose covered contents do not overlap.

    Patterns are ranked by ``count * length``, then by ``count``. Ties keep
    discovery order. A pattern is accepted only if none of its items was
    claimed by an earlier pattern, so no entry is rewritten twice.

    Args:
        patterns: Candidate patterns, possibly overlapping.
        top_percentage: Fraction of candidates to keep, in [0, 1].

    Returns:
        Accepted patterns in selection order.
    """
    if not patterns:
        return []

    budget = selection_budget(len(patterns), top_percentage)
    ranked = sorted(patterns, key=lambda p: (-p.score, -p.count))

    selected: list[Pattern] = []
    used: set[Content] = set()
    for pattern in ranked:
        if not used.isdisjoint(pattern.items):
            continue
        selected.append(pattern)
        used.update(pattern.items)
        if len(selected) >= budget:
            break

    logger.debug(
        "Selected %d of %d patterns (budget %d)", len(selected), len(patterns), budget
    )
    return selected
