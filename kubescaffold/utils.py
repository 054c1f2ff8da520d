"""Shared console helpers for kubescaffold.

All user-facing output goes through a single Rich console so that every
generated or updated path is reported the same way, and tests can swap in a
recording console.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.text import Text

console = Console()


def print_success(message: str, *, out: Console | None = None) -> None:
    """Print a green success message."""
    (out or console).print(f"[bold green]{escape(message)}[/bold green]", soft_wrap=True)


def print_error(message: str, *, out: Console | None = None) -> None:
    """Print a red error message."""
    (out or console).print(f"[bold red]{escape(message)}[/bold red]", soft_wrap=True)


def print_warning(message: str, *, out: Console | None = None) -> None:
    """Print a yellow warning message."""
    (out or console).print(f"[bold yellow]{escape(message)}[/bold yellow]", soft_wrap=True)


def print_path(path: str, action: str, *, out: Console | None = None) -> None:
    """Report a generated, updated or skipped file path.

    Paths are printed without Rich markup interpretation so that names with
    square brackets come through verbatim.
    """
    (out or console).print(Text.assemble((f"{action:>11} ", "dim"), path), soft_wrap=True)
