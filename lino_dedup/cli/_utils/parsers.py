"""Parsing utilities for CLI input."""

from pathlib import Path

import click

DEDUPED_SUFFIX = ".deduped.lino"


def parse_threshold(value: float) -> float:
    """Validate a deduplication threshold.

    Args:
        value: Fraction of discovered patterns to apply.

    Returns:
        The value, unchanged.

    Raises:
        click.BadParameter: If the value is outside [0, 1].
    """
    if not 0 <= value <= 1:
        raise click.BadParameter("deduplication-threshold must be between 0 and 1")
    return value


def threshold_callback(ctx: click.Context, param: click.Parameter, value: float) -> float:
    """Click callback wrapper around parse_threshold."""
    return parse_threshold(value)


def generate_output_path(input_path: str) -> str:
    """Default output path next to the input file.

    ``logs/app.lino`` becomes ``logs/app.deduped.lino``; any other file
    gets the suffix appended, so ``server.log`` becomes
    ``server.log.deduped.lino``.
    """
    path = Path(input_path)
    if path.suffix == ".lino":
        return str(path.with_name(path.stem + DEDUPED_SUFFIX))
    return input_path + DEDUPED_SUFFIX
