"""Lookup and server commands.

Commands: validate-code, scrape, opf, serve
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from bookscraper.cli._app import (
    LOOKUP_COMMANDS,
    SERVER_COMMANDS,
    AsinOpt,
    IsbnOpt,
    TokenOpt,
)
from bookscraper.codes import validate_book_code
from bookscraper.console import console, print_error, print_record_table
from bookscraper.env_settings import get_env_settings
from bookscraper.exceptions import BookScraperError
from bookscraper.models import BookMetadataRecord
from bookscraper.opf import PackageDocument
from bookscraper.pipeline import get_book_info

logger = logging.getLogger(__name__)


def _scrape_or_exit(token: str, asin: str, isbn: str) -> BookMetadataRecord:
    try:
        return get_book_info(token, asin, isbn)
    except BookScraperError as e:
        print_error(str(e), {"code": e.code, **e.details})
        raise typer.Exit(1) from e


def register_core_commands(app: typer.Typer) -> None:
    """Register lookup and server commands on the main app."""

    @app.command("validate-code", rich_help_panel=LOOKUP_COMMANDS)
    def validate_code(asin: AsinOpt = "", isbn: IsbnOpt = "") -> None:
        """🔎 Validate an ASIN or ISBN and print the lookup code.

        ISBN-10 codes are converted to ISBN-13.
        """
        try:
            code = validate_book_code(asin, isbn)
        except BookScraperError as e:
            print_error(str(e), {"code": e.code})
            raise typer.Exit(1) from e
        console.print(f"[code]{code.value}[/] [dim]({code.kind.value})[/]")

    @app.command("scrape", rich_help_panel=LOOKUP_COMMANDS)
    def scrape(
        asin: AsinOpt = "",
        isbn: IsbnOpt = "",
        token: TokenOpt = "",
        as_json: Annotated[
            bool,
            typer.Option("--json", help="Print the record as JSON."),
        ] = False,
    ) -> None:
        """📖 Scrape book metadata from its product page."""
        record = _scrape_or_exit(token, asin, isbn)
        if as_json:
            console.print_json(record.to_json())
            return

        code = record.primary_identifier
        print_record_table(
            {
                "Title": record.title,
                "Authors": ", ".join(record.authors),
                "Publisher": record.publisher,
                "Published": record.published_at.isoformat(),
                "Language": record.language.value,
                code.kind.value: code.value,
                "Cover": record.cover_url,
                "Description": record.description,
            }
        )

    @app.command("opf", rich_help_panel=LOOKUP_COMMANDS)
    def opf(
        asin: AsinOpt = "",
        isbn: IsbnOpt = "",
        token: TokenOpt = "",
        output: Annotated[
            Path | None,
            typer.Option("--output", "-o", help="Write the document to this file."),
        ] = None,
        version: Annotated[
            str | None,
            typer.Option("--opf-version", help="Package version (defaults to OPF_VERSION)."),
        ] = None,
    ) -> None:
        """📦 Build the OPF package metadata for a book."""
        record = _scrape_or_exit(token, asin, isbn)
        opf_settings = get_env_settings().opf
        doc = PackageDocument.from_record(
            record,
            version=version or opf_settings.version,
            modified_versions=opf_settings.modified_versions,
        )

        if output is None:
            console.print(doc.to_xml(), markup=False, highlight=False, soft_wrap=True)
            return
        path = doc.write(output)
        console.print(f"[success]✓[/] Wrote {path}")

    @app.command("serve", rich_help_panel=SERVER_COMMANDS)
    def serve(
        host: Annotated[str, typer.Option("--host", help="Bind address.")] = "127.0.0.1",
        port: Annotated[int, typer.Option("--port", "-p", help="Bind port.")] = 8000,
        debug: Annotated[
            bool | None,
            typer.Option(
                "--debug/--no-debug",
                help="Flask debug mode (defaults to on when BOOKSCRAPER_ENV=development).",
            ),
        ] = None,
    ) -> None:
        """🌐 Run the HTTP lookup endpoint."""
        from bookscraper.api import create_app

        if debug is None:
            debug = get_env_settings().app.is_development
        create_app().run(host=host, port=port, debug=debug)
