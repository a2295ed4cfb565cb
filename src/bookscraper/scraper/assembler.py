"""Compose extracted page fields and the validated code into a record."""

from __future__ import annotations

from bookscraper.codes import CodeKind, ValidatedCode
from bookscraper.models import BookMetadataRecord, PartialBookMetadata


def assemble(partial: PartialBookMetadata, code: ValidatedCode) -> BookMetadataRecord:
    """Attach the primary identifier to the extracted fields.

    ASIN codes populate ``asin``; ISBN-13 codes populate ``isbn13``.
    """
    identifier = {"asin": code.value} if code.kind is CodeKind.ASIN else {"isbn13": code.value}
    return BookMetadataRecord(**partial.model_dump(), **identifier)
