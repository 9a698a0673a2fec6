"""Custom exceptions for lino-dedup.

All exceptions inherit from LinoDedupError, making it easy to catch
every error raised by the library:

    from lino_dedup import run_deduplication, LinoDedupError, ParseError

    try:
        result = run_deduplication(text, fail_on_parse_error=True)
    except ParseError as e:
        print(f"Not valid lino: {e}")
    except LinoDedupError as e:
        print(f"lino-dedup error: {e}")
"""

from __future__ import annotations

from typing import Any


class LinoDedupError(Exception):
    """Base exception for all lino-dedup errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class ParseError(LinoDedupError):
    """Raised when text cannot be parsed as Links Notation.

    This includes:
    - Unbalanced or empty parentheses
    - Unterminated quoted strings
    - A colon outside of a leading ``id:`` label
    - Nesting deeper than the configured limit

    Example:
        ParseError(
            "Unbalanced parentheses",
            details={"line": 3, "column": 12}
        )
    """

    def __init__(
        self,
        message: str = "Input is not valid lino format",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)


class ConfigurationError(LinoDedupError):
    """Raised when lino-dedup is misconfigured.

    Example:
        ConfigurationError(
            "Parser must provide parse(text)",
            details={"parser": "object"}
        )
    """

    pass
