"""Rich console utilities for version-matrix-action.

This module provides a shared Rich Console instance and helper functions
for CLI output, optimized for GitHub Actions and CI environments.
"""

import os
from contextlib import contextmanager
from datetime import date
from typing import Any, Dict, Generator, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from ._eol import CatalogEntry, describe_eol, find_entry

# Detect GitHub Actions
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
        "eol": "red",
        "supported": "green",
    }
)

# Force colors ON in GitHub Actions (it supports ANSI colors but Rich may incorrectly disable them)
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)


@contextmanager
def gha_group(title: str) -> Generator[None, None, None]:
    """
    Context manager for GitHub Actions collapsible groups.

    Usage:
        with gha_group("Details"):
            print("This is collapsible in GHA")
    """
    if IS_GITHUB_ACTIONS:
        print(f"::group::{title}")
    try:
        yield
    finally:
        if IS_GITHUB_ACTIONS:
            print("::endgroup::")


def _annotate(kind: str, style: str, label: str, message: str, title: Optional[str]) -> None:
    if IS_GITHUB_ACTIONS:
        if title:
            print(f"::{kind} title={title}::{message}")
        else:
            print(f"::{kind}::{message}")
    else:
        if title:
            console.print(f"[{style}]{label} ({title}):[/{style}] {escape(message)}")
        else:
            console.print(f"[{style}]{label}:[/{style}] {escape(message)}")


def gha_warning(message: str, title: Optional[str] = None) -> None:
    """Emit a warning that appears in GitHub Actions job summary."""
    _annotate("warning", "warning", "Warning", message, title)


def gha_error(message: str, title: Optional[str] = None) -> None:
    """Emit an error that appears in GitHub Actions job summary."""
    _annotate("error", "error", "Error", message, title)


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    show_if_empty: bool = False,
) -> None:
    """
    Print a two-column summary table.

    Args:
        title: Table title
        data: List of (label, value) tuples
        show_if_empty: Whether to show the table if all values are 0/empty
    """
    if not show_if_empty:
        data = [(label, value) for label, value in data if value]

    if not data:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")

    for label, value in data:
        table.add_row(label, escape(str(value)))

    console.print(table)


def print_matrix_table(
    versions: Sequence[str],
    catalog: Optional[Sequence[CatalogEntry]] = None,
    today: Optional[date] = None,
    title: str = "Python Support Matrix",
) -> None:
    """
    Print the resolved versions with their lifecycle status.

    Args:
        versions: Resolved "major.minor" versions
        catalog: Feed catalog for EOL/latest patch columns; omitted for the fallback list
        today: Reference date for EOL descriptions
    """
    today = today or date.today()

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Version", style="highlight")
    table.add_column("Latest")
    table.add_column("Status")

    for version in versions:
        entry = find_entry(version, catalog) if catalog else None
        if entry is None:
            table.add_row(version, "-", "[info]fallback list[/info]")
            continue
        status = describe_eol(entry, today)
        style = "eol" if status.startswith("EOL") else "supported"
        table.add_row(version, entry.latest_patch or "-", f"[{style}]{status}[/{style}]")

    console.print(table)


def print_tool_status(statuses: Dict[str, Any]) -> None:
    """
    Print locally installed interpreters.

    Args:
        statuses: Mapping of version to ToolStatus (see tool_checks)
    """
    table = Table(title="Local Python Interpreters", show_header=True, header_style="bold")
    table.add_column("Command", style="cyan")
    table.add_column("Available")
    table.add_column("Version")
    table.add_column("Path")

    for status in statuses.values():
        available = "[success]yes[/success]" if status.available else "[warning]no[/warning]"
        table.add_row(status.command, available, escape(status.version or "-"), escape(status.path or "-"))

    console.print(table)
