"""
Pydantic models for extracted book metadata.

Two-layer architecture:
    1. PartialBookMetadata - Fields extracted from the product page
    2. BookMetadataRecord - Finished, immutable record carrying the
       validated primary identifier

JSON output uses camelCase keys so the record can be returned as-is
from the HTTP endpoint.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from bookscraper.codes import CodeKind, ValidatedCode
from bookscraper.languages import LanguageTag


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


class _BookFields(BaseModel):
    """Page fields shared by the partial and finished records."""

    title: str
    authors: tuple[str, ...]
    cover_url: str
    language: LanguageTag
    publisher: str
    published_at: date
    description: str

    model_config = ConfigDict(frozen=True)

    @field_validator("title", "cover_url", "publisher", "description")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Reject blank text fields."""
        return _require_text(v)

    @field_validator("authors")
    @classmethod
    def authors_not_blank(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Require at least one author and no blank names."""
        if not v:
            raise ValueError("at least one author is required")
        for name in v:
            _require_text(name)
        return v


class PartialBookMetadata(_BookFields):
    """Page fields before the primary identifier is attached."""


class BookMetadataRecord(_BookFields):
    """
    Canonical book metadata record.

    Exactly one of ``asin``/``isbn13`` holds the primary identifier; the
    other is empty. Instances are immutable.
    """

    asin: str = ""
    isbn13: str = ""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @model_validator(mode="after")
    def one_primary_identifier(self) -> BookMetadataRecord:
        """Exactly one of asin/isbn13 must be populated."""
        if bool(self.asin) == bool(self.isbn13):
            raise ValueError("exactly one of asin or isbn13 must be set")
        return self

    @property
    def primary_identifier(self) -> ValidatedCode:
        """The populated identifier, tagged with its kind."""
        if self.asin:
            return ValidatedCode(CodeKind.ASIN, self.asin)
        return ValidatedCode(CodeKind.ISBN13, self.isbn13)

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialize with camelCase keys."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def __str__(self) -> str:
        return self.to_json()
