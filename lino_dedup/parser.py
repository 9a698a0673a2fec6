"""Links Notation parsing for lino-dedup.

The deduplication core only needs "text -> ordered list of entries, or a
ParseError". ``LinoParser`` is the default implementation of that contract;
any object with a compatible ``parse`` method can be passed instead.

Supported syntax (one entry per non-blank line, indentation ignored):

    plain tokens             first second
    quoted tokens            'has spaces' "double quoted"
    groups                   (this is) a link
    labeled entries          1: first second
    labeled groups           (1: first second)
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

from .config import ParserConfig
from .exceptions import ParseError
from .models import Compound, Leaf, Node

_TOKEN_PATTERN = re.compile(
    r"""
      (?P<space>\s+)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<colon>:)
    | '(?P<single>[^']*)'
    | "(?P<double>[^"]*)"
    | (?P<ref>[^\s()'":]+)
    """,
    re.VERBOSE,
)


@runtime_checkable
class Parser(Protocol):
    """Anything that turns text into top-level entries.

    Implementations raise ParseError for text they cannot accept.
    """

    def parse(self, text: str) -> list[Node]: ...


class _Frame:
    """An open group while scanning a line."""

    __slots__ = ("items", "label", "column")

    def __init__(self, column: int):
        self.items: list[Node] = []
        self.label: str | None = None
        self.column = column


class LinoParser:
    """Strict parser for the Links Notation subset used by lino-dedup.

    Example:
        >>> parser = LinoParser()
        >>> parser.parse("(this is) a link")
        [Compound(children=(Compound(...), Leaf(token='a'), Leaf(token='link')))]
    """

    def __init__(self, config: ParserConfig | None = None):
        self.config = config or ParserConfig()

    def parse(self, text: str) -> list[Node]:
        """Parse text into top-level entries.

        Raises:
            ParseError: If any line is not valid Links Notation.
        """
        entries: list[Node] = []
        for line_number, line in enumerate(text.split("\n"), start=1):
            if not line.strip():
                continue
            entries.append(self._parse_line(line, line_number))
        return entries

    def _parse_line(self, line: str, line_number: int) -> Node:
        # Explicit stack of open groups; the bottom frame is the line itself.
        stack = [_Frame(column=0)]
        pos = 0

        while pos < len(line):
            match = _TOKEN_PATTERN.match(line, pos)
            if match is None:
                raise self._error("Unterminated quoted string", line_number, pos)
            kind = match.lastgroup
            frame = stack[-1]

            if kind == "open":
                if len(stack) > self.config.max_depth:
                    raise self._error(
                        "Nesting too deep", line_number, pos, max_depth=self.config.max_depth
                    )
                stack.append(_Frame(column=pos))
            elif kind == "close":
                if len(stack) == 1:
                    raise self._error("Unexpected ')'", line_number, pos)
                stack.pop()
                if not frame.items:
                    raise self._error("Empty group", line_number, frame.column)
                stack[-1].items.append(Compound(tuple(frame.items), frame.label))
            elif kind == "colon":
                if frame.label is not None or len(frame.items) != 1:
                    raise self._error("Unexpected ':'", line_number, pos)
                head = frame.items[0]
                if not isinstance(head, Leaf):
                    raise self._error("Label must be a single token", line_number, pos)
                frame.label = head.token
                frame.items.clear()
            elif kind in ("single", "double", "ref"):
                frame.items.append(Leaf(match.group(kind)))

            pos = match.end()

        if len(stack) > 1:
            raise self._error("Unclosed '('", line_number, stack[-1].column)

        root = stack[0]
        if root.label is not None:
            if not root.items:
                raise self._error("Label without values", line_number, 0)
            return Compound(tuple(root.items), root.label)
        if len(root.items) == 1:
            return root.items[0]
        return Compound(tuple(root.items))

    @staticmethod
    def _error(reason: str, line_number: int, column: int, **extra: object) -> ParseError:
        return ParseError(reason, details={"line": line_number, "column": column, **extra})


def parse(text: str, config: ParserConfig | None = None) -> list[Node]:
    """Parse text with the default parser."""
    return LinoParser(config).parse(text)
