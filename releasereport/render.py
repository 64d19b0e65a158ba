"""
Rendering functions for releasereport output.

This module handles all pretty-printing and table formatting.
Services return data, this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from rich.markup import escape
from typing import List, Optional

from .domain.release import CommitCounts, ReleaseReport, TagInfo

console = Console()

TAG_HEADERS = ['Tag', 'Commit ID', 'Commit Title', 'Commit Message', 'Author', 'Timestamp']
SUMMARY_HEADERS = ['Fixes', 'Features', 'Refactors', 'Tests', 'Style']


def render_table(headers: List[str], rows: List[List[str]], title: Optional[str] = None) -> None:
    """
    Render a generic table with the given headers and rows.

    Args:
        headers: List of column headers
        rows: List of rows, where each row is a list of values
        title: Optional table title
    """
    if not rows:
        console.print("[yellow]No data to display.[/yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    for header in headers:
        table.add_column(header)

    for row in rows:
        table.add_row(*[escape(str(val)) for val in row])

    console.print(table)


def render_tags_table(tags: List[TagInfo], limit: int) -> None:
    """Render the recent release tags, highest first."""
    console.print()
    console.print(f"[green]Last {limit} Tags:[/green]")

    rows = [
        [tag.name, tag.commit.hash, tag.commit.title, tag.commit.message,
         tag.commit.author, tag.commit.date]
        for tag in tags
    ]
    render_table(TAG_HEADERS, rows)


def render_summary_table(counts: CommitCounts) -> None:
    console.print()
    console.print("[green]Summary:[/green]")
    render_table(SUMMARY_HEADERS, [list(counts.to_dict().values())])


def render_versions(current: str, proposed: str) -> None:
    console.print()
    # markup off: tag names may contain [brackets]
    console.print(f"Current: {current}", style="green", markup=False)
    console.print(f"Next: {proposed}", style="green", markup=False)


def render_report(report: ReleaseReport, limit: int, show_tags: bool = True) -> None:
    """
    Render a full review.

    Args:
        report: Review result
        limit: Tag count used for the table heading
        show_tags: Whether the recent-tags table was computed
    """
    if show_tags:
        render_tags_table(report.tags, limit)
    render_summary_table(report.counts)
    render_versions(report.current, report.next)
