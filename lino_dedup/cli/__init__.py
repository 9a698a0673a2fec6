"""Command line interface for lino-dedup."""

from .main import main

__all__ = ["main"]
