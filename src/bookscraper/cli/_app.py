"""App configuration, callbacks, and shared types for CLI.

This module contains the Typer application factory, main callback and
the option aliases shared by the commands.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from bookscraper import __version__
from bookscraper.console import console, print_error
from bookscraper.env_settings import get_env_settings
from bookscraper.exceptions import ConfigurationError
from bookscraper.logging_setup import setup_logging

logger = logging.getLogger(__name__)

# =============================================================================
# Help Panel Names
# =============================================================================

LOOKUP_COMMANDS = "Lookup"
SERVER_COMMANDS = "Server"


# =============================================================================
# Shared Option Aliases
# =============================================================================

AsinOpt = Annotated[
    str,
    typer.Option("--asin", "-a", help="Kindle edition ASIN (format: BXXXXXXXXX)."),
]

IsbnOpt = Annotated[
    str,
    typer.Option("--isbn", "-i", help="ISBN-10 or ISBN-13, hyphens allowed."),
]

TokenOpt = Annotated[
    str,
    typer.Option(
        "--token",
        "-t",
        envvar="BROWSERLESS_TOKEN",
        help="Browserless access token.",
    ),
]


# =============================================================================
# Version Callback
# =============================================================================


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"bookscraper [bold]{__version__}[/]")
        raise typer.Exit()


# =============================================================================
# Logging Setup Helper
# =============================================================================


def configure_logging(log_level: str | None, log_file: Path | None, quiet: bool) -> None:
    """Configure logging from options, falling back to LOG_LEVEL and LOG_FILE."""
    try:
        app_settings = get_env_settings().app
    except ConfigurationError as e:
        print_error(str(e), {"code": e.code})
        raise typer.Exit(1) from e

    setup_logging(
        log_level or app_settings.log_level,
        log_file=log_file or app_settings.log_file,
        quiet=quiet,
    )


# =============================================================================
# App Factory
# =============================================================================

MAIN_EPILOG = """
[bold cyan]Examples:[/]
  bookscraper validate-code --isbn 85-359-3100-4
  bookscraper scrape --asin B083G6VYBZ --token $TOKEN
  bookscraper opf --asin B083G6VYBZ --output content.opf
"""


def make_app() -> typer.Typer:
    """Create and configure the main Typer application."""
    return typer.Typer(
        name="bookscraper",
        help="Book metadata scraping and OPF package metadata generation",
        epilog=MAIN_EPILOG,
        rich_markup_mode="rich",
        pretty_exceptions_enable=True,
        pretty_exceptions_show_locals=False,
        no_args_is_help=True,
        context_settings={"help_option_names": ["-h", "--help"]},
    )


def create_main_callback(app: typer.Typer) -> None:
    """Register the main callback on the app."""

    @app.callback()
    def main_callback(
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                "-V",
                callback=version_callback,
                is_eager=True,
                help="Show version and exit.",
            ),
        ] = False,
        log_level: Annotated[
            str | None,
            typer.Option(
                "--log-level",
                "-l",
                help="Console logging level (defaults to LOG_LEVEL, then WARNING).",
            ),
        ] = None,
        log_file: Annotated[
            Path | None,
            typer.Option("--log-file", help="Also write DEBUG logs to this file (or LOG_FILE)."),
        ] = None,
        quiet: Annotated[
            bool,
            typer.Option("--quiet", "-q", help="Only show warnings and errors on the console."),
        ] = False,
    ) -> None:
        """Scrape book metadata from product pages and build OPF metadata."""
        configure_logging(log_level, log_file, quiet)
