"""Canonical Links Notation output for lino-dedup."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .models import Compound, Leaf, Node

_NEEDS_QUOTING = re.compile(r"""[\s()'":]""")


@runtime_checkable
class Formatter(Protocol):
    """Anything that renders top-level entries as text."""

    def format(self, entries: Sequence[Node]) -> str: ...


def format_token(token: str) -> str:
    """Quote a token when the parser would not read it back as one token."""
    if token and not _NEEDS_QUOTING.search(token):
        return token
    if "'" in token and '"' not in token:
        return f'"{token}"'
    return f"'{token}'"


def format_node(node: Node, nested: bool = False) -> str:
    """Render one node.

    Top-level compounds are written without parentheses; nested ones
    are wrapped. Labels render as ``label: values``.
    """
    if isinstance(node, Leaf):
        return format_token(node.token)

    body = " ".join(format_node(child, nested=True) for child in node.children)
    if node.label is not None:
        body = f"{format_token(node.label)}: {body}"
    return f"({body})" if nested else body


class LinoFormatter:
    """One entry per line, no trailing newline."""

    def format(self, entries: Sequence[Node]) -> str:
        return "\n".join(format_node(entry) for entry in entries)


def format_entries(entries: Sequence[Node]) -> str:
    """Format entries with the default formatter."""
    return LinoFormatter().format(entries)
