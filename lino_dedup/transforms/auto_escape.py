"""Auto-escape: quote problematic tokens so raw text parses as lino.

Raw logs are full of tokens the strict parser rejects: timestamps and
``host:port`` pairs (a colon is only legal after a leading label), and
words glued to stray parentheses. The cascade escalates through three
passes and stops at the first whose output parses:

1. Colon references. Quote unquoted tokens with an inner colon, such as
   ``2025-07-25T21:32:46Z`` or ``server:8080``. A trailing colon marks a
   label and is left alone.
2. Token classification. Keep quoted tokens and pure punctuation runs,
   quote tokens containing a colon or a word glued to a parenthesis.
3. Total escape. Quote everything except quoted tokens and punctuation.
   This pass is returned without checking that it parses.

Every pass only rewrites tokens in place: whitespace, lines and token
order are preserved, and the same input always yields the same output.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from ..exceptions import ParseError
from ..models import Node
from ..parser import Parser

logger = logging.getLogger(__name__)

# A whitespace-delimited token; quoted spans may contain spaces but never newlines.
_TOKEN_PATTERN = re.compile(r"""(?:'[^'\n]*'|"[^"\n]*"|\S)+""")
_QUOTED_PATTERN = re.compile(r"""^(?:'[^']*'|"[^"]*")[,;.]?$""")
_PUNCTUATION_PATTERN = re.compile(r"""^[^\w\s'":]+$""")
_PAREN_BOUNDARY_PATTERN = re.compile(r"\w[()]|[()]\w")


@dataclass
class EscapeResult:
    """Outcome of the auto-escape cascade.

    Attributes:
        text: The escaped text.
        stage: Pass that produced ``text`` (1, 2 or 3).
        entries: Parsed entries when ``text`` was verified to parse,
            None for the unverified third pass.
    """

    text: str
    stage: int
    entries: list[Node] | None = None


def quote_token(token: str) -> str:
    """Wrap a token in quotes the parser will read back as one token."""
    if "'" not in token:
        return f"'{token}'"
    if '"' not in token:
        return f'"{token}"'
    # Holds both quote characters; nothing can quote it.
    return token


def is_quoted(token: str) -> bool:
    """Fully quoted, optionally followed by one of ``,;.``."""
    return bool(_QUOTED_PATTERN.match(token))


def is_punctuation(token: str) -> bool:
    """Brackets and symbols only (quotes and colons excluded)."""
    return bool(_PUNCTUATION_PATTERN.match(token))


def _rewrite_tokens(text: str, should_quote: Callable[[str], bool]) -> str:
    def replace(match: re.Match[str]) -> str:
        token = match.group(0)
        return quote_token(token) if should_quote(token) else token

    return _TOKEN_PATTERN.sub(replace, text)


def _is_colon_reference(token: str) -> bool:
    return ":" in token and not token.endswith(":") and "'" not in token and '"' not in token


def _is_problem_token(token: str) -> bool:
    if is_quoted(token) or is_punctuation(token):
        return False
    return ":" in token or bool(_PAREN_BOUNDARY_PATTERN.search(token))


def _is_unescaped_token(token: str) -> bool:
    return not is_quoted(token) and not is_punctuation(token)


def escape_colon_references(text: str) -> str:
    """Pass 1: quote colon-bearing references."""
    return _rewrite_tokens(text, _is_colon_reference)


def escape_problem_tokens(text: str) -> str:
    """Pass 2: quote tokens with colons or word/parenthesis boundaries."""
    return _rewrite_tokens(text, _is_problem_token)


def escape_all_tokens(text: str) -> str:
    """Pass 3: quote every token that is not quoted or punctuation."""
    return _rewrite_tokens(text, _is_unescaped_token)


class AutoEscaper:
    """Runs the escape cascade against a parser.

    Example:
        >>> escaper = AutoEscaper(LinoParser())
        >>> escaper.escape("2025-07-25T21:32:46Z foo").text
        "'2025-07-25T21:32:46Z' foo"
    """

    def __init__(self, parser: Parser):
        self.parser = parser

    def escape(self, text: str) -> EscapeResult:
        """Escape text with the least aggressive pass that parses."""
        for stage, escape in ((1, escape_colon_references), (2, escape_problem_tokens)):
            candidate = escape(text)
            try:
                entries = self.parser.parse(candidate)
            except ParseError as e:
                logger.debug("Auto-escape pass %d did not parse: %s", stage, e)
                continue
            logger.debug("Auto-escape pass %d parsed", stage)
            return EscapeResult(text=candidate, stage=stage, entries=entries)

        logger.debug("Auto-escape falling back to total escape")
        return EscapeResult(text=escape_all_tokens(text), stage=3)


def auto_escape(text: str, parser: Parser) -> str:
    """Return the auto-escaped form of ``text``."""
    return AutoEscaper(parser).escape(text).text
