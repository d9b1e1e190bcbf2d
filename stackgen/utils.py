"""Shared console helpers for the stackgen CLI.

All user-facing output goes through the module-level Rich ``console``; the
catalog, model and generator modules never print.
"""

from __future__ import annotations

import re

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def sanitize_name(name: str) -> str:
    """Convert an arbitrary project name to a safe compose project name.

    * Lowercases the input.
    * Replaces spaces, underscores and other non-alphanumeric characters
      (except hyphens) with hyphens.
    * Collapses consecutive hyphens and strips leading/trailing hyphens.

    Examples::

        sanitize_name("My Shop") -> "my-shop"
        sanitize_name("billing_api") -> "billing-api"
    """
    result = re.sub(r"[^a-z0-9-]", "-", name.strip().lower())
    result = re.sub(r"-+", "-", result)
    return result.strip("-")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_section(title: str) -> None:
    """Print a full-width rule introducing a block of output."""
    console.print()
    console.print(Rule(f"[bold cyan] {escape(title)} [/bold cyan]", style="cyan"))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
