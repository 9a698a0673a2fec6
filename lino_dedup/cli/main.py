"""Main CLI entry point for lino-dedup."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from ..config import DEFAULT_TOP_PERCENTAGE, DeduplicatorConfig
from ..edge_cases import count_processed_lines, detect_edge_cases, summarize_edge_cases
from ..exceptions import ParseError
from ..transforms.pipeline import Deduplicator
from ._utils.formatting import (
    print_edge_case_report,
    print_error,
    print_success,
    print_warning,
)
from ._utils.parsers import generate_output_path, threshold_callback


def get_version() -> str:
    """Get the current version."""
    try:
        from lino_dedup import __version__

        return __version__
    except ImportError:
        return "unknown"


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")


def _read_input(input_file: str | None, piped_input: bool) -> str:
    if input_file:
        try:
            return Path(input_file).read_text(encoding="utf-8")
        except OSError as e:
            print_error(f"Error reading file: {e}")
            sys.exit(1)
    if piped_input:
        return sys.stdin.read()

    print_error(
        "No input provided. Use a positional argument, --input to specify a file, "
        "or --piped-input to read from stdin."
    )
    click.echo("Run with --help for usage information.", err=True)
    sys.exit(1)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_file", required=False, type=click.Path(dir_okay=False))
@click.option(
    "-i",
    "--input",
    "input_path",
    type=click.Path(dir_okay=False),
    help="Input file path (alternative to the positional argument).",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    help="Output file path. Defaults to <input>.deduped.lino, or stdout for piped input.",
)
@click.option(
    "--deduplication-threshold",
    type=float,
    default=DEFAULT_TOP_PERCENTAGE,
    show_default=True,
    callback=threshold_callback,
    help="Fraction of discovered patterns to apply (0-1).",
)
@click.option(
    "--auto-escape",
    is_flag=True,
    help="Quote problematic tokens so raw logs parse as lino.",
)
@click.option("--piped-input", is_flag=True, help="Read from stdin.")
@click.option(
    "--fail-on-parse-error",
    is_flag=True,
    help="Exit with code 1 if the input cannot be parsed as lino.",
)
@click.option(
    "--detect-auto-escape-edge-cases",
    is_flag=True,
    help="Report lines that auto-escape cannot fix, then exit.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.version_option(version=get_version(), prog_name="lino-dedup")
def main(
    input_file: str | None,
    input_path: str | None,
    output: str | None,
    deduplication_threshold: float,
    auto_escape: bool,
    piped_input: bool,
    fail_on_parse_error: bool,
    detect_auto_escape_edge_cases: bool,
    verbose: bool,
) -> None:
    """Deduplicate Links Notation by replacing repeats with numbered references.

    \b
    Examples:
        lino-dedup input.lino                     Write input.deduped.lino
        lino-dedup input.lino -o output.lino      Write output.lino
        lino-dedup --auto-escape -i server.log    Escape a raw log first
        cat in.lino | lino-dedup --piped-input    Read stdin, write stdout
        lino-dedup --detect-auto-escape-edge-cases -i server.log
    """
    _configure_logging(verbose)

    source = input_file or input_path
    text = _read_input(source, piped_input)

    if detect_auto_escape_edge_cases:
        edge_cases = detect_edge_cases(text)
        print_edge_case_report(summarize_edge_cases(edge_cases, count_processed_lines(text)))
        return

    output_file = output
    if source and not output_file:
        output_file = generate_output_path(source)

    config = DeduplicatorConfig(
        top_percentage=deduplication_threshold,
        auto_escape=auto_escape,
        fail_on_parse_error=fail_on_parse_error,
    )
    try:
        result = Deduplicator(config).deduplicate(text)
    except ParseError as e:
        print_error(str(e))
        sys.exit(1)

    if not output_file:
        click.echo(result.output, nl=False)
        return

    try:
        Path(output_file).write_text(result.output, encoding="utf-8")
    except OSError as e:
        print_error(f"Error writing file: {e}")
        sys.exit(1)

    if result.success:
        print_success(
            f"Deduplication complete. Applied {result.patterns_applied} pattern(s). "
            f"Output written to {output_file}"
        )
    else:
        print_warning(f"Deduplication failed: {result.reason}. Content written to {output_file}")


if __name__ == "__main__":
    main()
