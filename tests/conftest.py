"""Shared pytest fixtures for lino-dedup tests."""

import pytest

from lino_dedup.formatter import LinoFormatter
from lino_dedup.parser import LinoParser


@pytest.fixture
def parser():
    """Default Links Notation parser."""
    return LinoParser()


@pytest.fixture
def formatter():
    """Default canonical formatter."""
    return LinoFormatter()


@pytest.fixture
def entries(parser):
    """Parse lino text into entries: ``entries("(a b)\\n(a b)")``."""
    return parser.parse


@pytest.fixture
def structured_log():
    """Raw log lines sharing a timestamp, as produced by a JSON-ish logger."""
    return (
        "2025-07-25T21:32:46Z updateReferences reference {\n"
        "2025-07-25T21:32:46Z   id: a43fad436\n"
        "2025-07-25T21:32:46Z }"
    )
