"""Flatten entry trees into their leaf tokens."""

from __future__ import annotations

from ..models import Compound, Content, Leaf, Node


def flatten(node: Node) -> Content:
    """Return the leaf tokens under ``node``, left to right.

    Uses an explicit stack, so deep trees cannot hit the recursion limit.
    Labels are skipped.
    """
    tokens: list[str] = []
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Leaf):
            tokens.append(current.token)
        else:
            stack.extend(reversed(current.children))
    return tuple(tokens)


def content_text(content: Content) -> str:
    """Space-joined form of flattened content, for display."""
    return " ".join(content)


def is_structured(node: Node) -> bool:
    """True for unlabeled compounds that open with a nested group.

    ``(this is) a link`` is structured; ``this is a link`` and
    ``1: (this is) a link`` are not.
    """
    return (
        isinstance(node, Compound)
        and node.label is None
        and len(node.children) > 1
        and isinstance(node.children[0], Compound)
    )
