"""
OPF package metadata generation.

This package builds the metadata section of an EPUB package document:

1. **PackageDocument** - Stateful builder seeded with the unique identifier,
   language and main title/author, grown with append operations.

2. **serializer** - Deterministic XML output and a parser used to read
   documents back.

Example usage:

    from bookscraper.opf import PackageDocument

    doc = PackageDocument.from_record(record)
    xml_str = doc.to_xml()

The element ids follow these rules:
- `pub_id` is the unique identifier (`urn:uuid:...`)
- `title01, title02, ...` for dc:title, each refined by a `title-type` meta
- `creator01, ...` for authors, `contributor01, ...` for other roles, each
  refined by a `role` meta with scheme `marc:relators`
- `identifier01, ...` for secondary identifiers (ISBN/ASIN)
"""

from __future__ import annotations

from bookscraper.opf.document import (
    DEFAULT_VERSION,
    MODIFIED_VERSIONS,
    UNIQUE_IDENTIFIER_ID,
    PackageDocument,
)
from bookscraper.opf.helpers import format_timestamp, name_to_file_as, sanitize_xml_text
from bookscraper.opf.schemas import (
    ContributorElement,
    ContributorRole,
    ElementCategory,
    ElementRef,
    IdentifierElement,
    MetaElement,
    TitleElement,
    TitleType,
)
from bookscraper.opf.serializer import (
    NS_DC,
    NS_OPF,
    ParsedPackage,
    build_package,
    parse_package_document,
    serialize,
)

__all__ = [
    # Builder
    "PackageDocument",
    "DEFAULT_VERSION",
    "MODIFIED_VERSIONS",
    "UNIQUE_IDENTIFIER_ID",
    # Schemas
    "ContributorElement",
    "ContributorRole",
    "ElementCategory",
    "ElementRef",
    "IdentifierElement",
    "MetaElement",
    "TitleElement",
    "TitleType",
    # Serialization
    "NS_DC",
    "NS_OPF",
    "ParsedPackage",
    "build_package",
    "parse_package_document",
    "serialize",
    # Helpers
    "format_timestamp",
    "name_to_file_as",
    "sanitize_xml_text",
]
