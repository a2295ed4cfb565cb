"""Rich console instances and theme for bookscraper CLI output."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

BOOKSCRAPER_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "title": "bold white",
        "dim": "dim",
        "code": "yellow",
        "author": "cyan",
    }
)

# Primary console for normal output
console = Console(theme=BOOKSCRAPER_THEME, stderr=False)

# Error console for stderr output
err_console = Console(theme=BOOKSCRAPER_THEME, stderr=True)


def print_error(message: str, context: dict[str, Any] | None = None) -> None:
    """Print an error line with optional context details."""
    err_console.print(f"[error]❌ {message}[/]")
    if context:
        for key, value in context.items():
            err_console.print(f"  [dim]{key}:[/] {value}")


def print_record_table(fields: dict[str, str]) -> None:
    """Print a two-column field/value table."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="dim", no_wrap=True)
    table.add_column(overflow="fold")
    for name, value in fields.items():
        table.add_row(name, value)
    console.print(table)
