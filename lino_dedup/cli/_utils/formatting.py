"""Formatting utilities for CLI output using Rich."""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...edge_cases import EdgeCaseReport

# Diagnostics go to stderr; stdout is reserved for deduplicated output.
console = Console(stderr=True)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: str | None = None,
) -> None:
    """Print a Rich table with headers and rows.

    Args:
        headers: Column headers for the table.
        rows: List of rows, where each row is a list of cell values.
        title: Optional title to display above the table.
    """
    table = Table(title=title)

    for header in headers:
        table.add_column(header)

    for row in rows:
        table.add_row(*row)

    console.print(table)


def print_stats(stats: dict[str, Any], title: str = "Statistics") -> None:
    """Print statistics in a nicely formatted panel.

    Args:
        stats: Dictionary of stat names to values.
        title: Title for the panel.
    """
    lines = [f"[bold]{key}:[/bold] {value}" for key, value in stats.items()]
    content = "\n".join(lines)
    console.print(Panel(content, title=title))


def print_error(msg: str) -> None:
    """Print an error message in red."""
    console.print(
        f"[bold red]Error:[/bold red] {escape(msg)}", highlight=False, soft_wrap=True
    )


def print_success(msg: str) -> None:
    """Print a success message in green."""
    console.print(
        f"[bold green]Success:[/bold green] {escape(msg)}", highlight=False, soft_wrap=True
    )


def print_warning(msg: str) -> None:
    """Print a warning message in yellow."""
    console.print(
        f"[bold yellow]Warning:[/bold yellow] {escape(msg)}", highlight=False, soft_wrap=True
    )


def truncate(text: str, max_len: int = 50) -> str:
    """Truncate text to a maximum length with ellipsis.

    Args:
        text: The text to truncate.
        max_len: Maximum length including ellipsis.

    Returns:
        Truncated text with ellipsis if it exceeded max_len.
    """
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def print_edge_case_report(report: EdgeCaseReport) -> None:
    """Print edge cases grouped by category, then line statistics."""
    if not report.edge_cases:
        print_success("No edge cases found! All lines can be parsed after auto-escape.")
        return

    print_warning(f"Found {report.failed_lines} edge case(s) that auto-escape cannot fix")

    for category, cases in report.by_category.items():
        rows = [
            [str(case.line_number), escape(truncate(case.original_line, 60))] for case in cases
        ]
        # Headings go on their own line; a table title wraps to the table width.
        console.print(
            f"[bold]{escape(category)}[/bold] ({len(cases)} cases)", highlight=False, soft_wrap=True
        )
        print_table(["Line", "Content"], rows)

    print_stats(
        {
            "Total lines processed": report.total_lines,
            "Failed lines": report.failed_lines,
            "Success rate": f"{report.success_rate:.1f}%",
        }
    )
