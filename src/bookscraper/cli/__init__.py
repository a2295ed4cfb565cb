"""bookscraper CLI built with Typer and Rich.

Commands:
- validate-code: normalize an ASIN/ISBN
- scrape: print the metadata record for a book
- opf: build the OPF package metadata for a book
- serve: run the HTTP lookup endpoint
"""

from __future__ import annotations

from bookscraper.cli._app import create_main_callback, make_app
from bookscraper.cli.core import register_core_commands

app = make_app()
create_main_callback(app)
register_core_commands(app)


def main() -> None:
    """Main entry point for the CLI."""
    app()


__all__ = ["app", "main"]
