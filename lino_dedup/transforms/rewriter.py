"""Rewrite entries into numbered references to selected patterns.

Each selected pattern gets the next id, in selection order, starting past
any numeric label the input already uses. The first entry covered by a
pattern is preceded by the pattern's definition (``1: hello world``);
every covered entry is then replaced by its usage:

    exact     1
    prefix    1 foo          (reference, then the leftover tokens)
    suffix    foo 1          (leftover tokens, then the reference)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models import Compound, Content, Leaf, Node, Pattern, PatternKind
from .flattener import flatten


@dataclass(frozen=True)
class ReferenceBinding:
    """A reference id bound to one selected pattern."""

    ref_id: int
    pattern: Pattern


def assign_references(
    patterns: Sequence[Pattern], first_id: int = 1
) -> tuple[dict[Content, ReferenceBinding], int]:
    """Bind every covered content to its pattern's reference id.

    Returns:
        The content-to-binding map and the next unused id.
    """
    bindings: dict[Content, ReferenceBinding] = {}
    next_id = first_id
    for pattern in patterns:
        binding = ReferenceBinding(ref_id=next_id, pattern=pattern)
        for item in pattern.items:
            bindings[item] = binding
        next_id += 1
    return bindings, next_id


def first_free_reference(entries: Sequence[Node]) -> int:
    """One past the largest numeric label anywhere in ``entries``, or 1."""
    highest = 0
    stack: list[Node] = list(entries)
    while stack:
        node = stack.pop()
        if not isinstance(node, Compound):
            continue
        if node.label is not None and node.label.isascii() and node.label.isdigit():
            highest = max(highest, int(node.label))
        stack.extend(node.children)
    return highest + 1


def definition_node(binding: ReferenceBinding) -> Compound:
    """``<id>: <pattern tokens>``, one leaf per token."""
    return Compound(
        tuple(Leaf(token) for token in binding.pattern.tokens),
        label=str(binding.ref_id),
    )


def usage_node(binding: ReferenceBinding, content: Content) -> Node | None:
    """The node replacing an entry with ``content``.

    Returns None when the pattern does not actually match the content.
    """
    pattern = binding.pattern
    reference = Leaf(str(binding.ref_id))
    size = pattern.length

    if pattern.kind is PatternKind.EXACT:
        return reference if content == pattern.tokens else None

    if pattern.kind is PatternKind.PREFIX:
        if content[:size] != pattern.tokens:
            return None
        leftover = content[size:]
        if not leftover:
            return reference
        return Compound((reference, *(Leaf(token) for token in leftover)))

    if pattern.kind is PatternKind.SUFFIX:
        split = len(content) - size
        if split < 0 or content[split:] != pattern.tokens:
            return None
        leftover = content[:split]
        if not leftover:
            return reference
        return Compound((*(Leaf(token) for token in leftover), reference))

    raise ValueError(f"Unknown pattern kind: {pattern.kind!r}")


def rewrite_entries(
    entries: Sequence[Node], patterns: Sequence[Pattern], first_id: int = 1
) -> list[Node]:
    """Replace covered entries with references, defining each on first use.

    Entries whose content is not covered are returned unchanged. A pattern
    whose items match no entry simply produces nothing.
    """
    bindings, _ = assign_references(patterns, first_id)

    result: list[Node] = []
    defined: set[int] = set()
    for entry in entries:
        content = flatten(entry)
        binding = bindings.get(content)
        usage = usage_node(binding, content) if binding is not None else None
        if binding is None or usage is None:
            result.append(entry)
            continue

        if binding.ref_id not in defined:
            result.append(definition_node(binding))
            defined.add(binding.ref_id)
        result.append(usage)

    return result
