"""
OPF package metadata document builder.

A PackageDocument is created once per book and then grown through
append-style operations. Every title, creator and contributor gets a
sequential, category-scoped id (title01, creator01, contributor01, ...)
and a companion meta that refines it. The document never holds a meta
whose refines target is missing.

Usage:
    doc = PackageDocument("3.0", LanguageTag.PORTUGUESE_BR, "O cheiro do ralo",
                          "Lourenço Mutarelli")
    translator = doc.add_contributor("Jane Doe", ContributorRole.TRANSLATOR)
    doc.add_sort_name(translator, "Doe, Jane")
    xml_str = doc.to_xml()
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from datetime import date, datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from bookscraper.codes import CodeKind
from bookscraper.exceptions import UnknownReferenceError
from bookscraper.languages import LanguageTag
from bookscraper.opf.helpers import format_timestamp, name_to_file_as
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

if TYPE_CHECKING:
    from bookscraper.models import BookMetadataRecord

logger = logging.getLogger(__name__)

UNIQUE_IDENTIFIER_ID = "pub_id"
DEFAULT_VERSION = "3.0"

# Versions whose schema defines dcterms:modified
MODIFIED_VERSIONS: frozenset[str] = frozenset({"3.0"})


class PackageDocument:
    """
    Incremental builder for the metadata section of an OPF package.

    The document owns every element. Methods that add an element return an
    ElementRef which later calls resolve by id; refs naming an element the
    document does not hold, or that another document issued, are rejected
    with UnknownReferenceError.
    """

    def __init__(
        self,
        version: str,
        language: LanguageTag | str,
        main_title: str,
        main_author: str,
        *,
        modified_versions: Iterable[str] = MODIFIED_VERSIONS,
        now: datetime | None = None,
    ) -> None:
        """
        Seed the document with its unique identifier, language and main
        title/author pair.

        Args:
            version: Package version attribute (e.g., "3.0")
            language: Primary language of the publication
            main_title: Main title
            main_author: First author
            modified_versions: Versions that get a dcterms:modified meta
            now: Timestamp for dcterms:modified (defaults to current UTC time)
        """
        self.version = version
        self.language = language.value if isinstance(language, LanguageTag) else language
        self.unique_identifier_id = UNIQUE_IDENTIFIER_ID
        self.text_direction = "ltr"

        self.description: str | None = None
        self.publisher: str | None = None
        self.date: str | None = None

        self._owner = f"urn:uuid:{uuid.uuid4()}"
        self._identifiers: list[IdentifierElement] = [
            IdentifierElement(value=self._owner, id=UNIQUE_IDENTIFIER_ID)
        ]
        self._titles: list[TitleElement] = []
        self._creators: list[ContributorElement] = []
        self._contributors: list[ContributorElement] = []
        self._metas: list[MetaElement] = []

        self._append_meta(
            MetaElement(
                value="uuid",
                property="identifier-type",
                refines=f"#{UNIQUE_IDENTIFIER_ID}",
            )
        )

        self.main_title_ref = self.add_title(main_title, TitleType.MAIN)
        self.main_author_ref = self.add_contributor(main_author, ContributorRole.AUTHOR)

        if version in frozenset(modified_versions):
            self.set_modification_date(now or datetime.now(timezone.utc))

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def identifiers(self) -> tuple[IdentifierElement, ...]:
        return tuple(self._identifiers)

    @property
    def titles(self) -> tuple[TitleElement, ...]:
        return tuple(self._titles)

    @property
    def creators(self) -> tuple[ContributorElement, ...]:
        return tuple(self._creators)

    @property
    def contributors(self) -> tuple[ContributorElement, ...]:
        return tuple(self._contributors)

    @property
    def metas(self) -> tuple[MetaElement, ...]:
        return tuple(self._metas)

    def element_ids(self) -> set[str]:
        """Ids of every element a meta may refine."""
        elements: list[IdentifierElement | TitleElement | ContributorElement] = [
            *self._identifiers,
            *self._titles,
            *self._creators,
            *self._contributors,
        ]
        return {element.id for element in elements}

    def metas_for(self, ref: ElementRef) -> tuple[MetaElement, ...]:
        """Metas refining the referenced element."""
        self._resolve(ref)
        return tuple(meta for meta in self._metas if meta.refines == ref.fragment)

    # =========================================================================
    # Append operations
    # =========================================================================

    def add_identifier(self, value: str, identifier_type: str) -> ElementRef:
        """
        Append a secondary dc:identifier with an identifier-type meta.

        Args:
            value: Identifier value (e.g., "urn:isbn:9788535931008")
            identifier_type: Type recorded in the companion meta (e.g., "isbn")

        Returns:
            Reference to the new identifier
        """
        identifier_id = f"identifier{len(self._identifiers):02d}"
        self._identifiers.append(IdentifierElement(value=value, id=identifier_id))
        ref = ElementRef(ElementCategory.IDENTIFIER, identifier_id, self._owner)

        self._append_meta(
            MetaElement(value=identifier_type, property="identifier-type", refines=ref.fragment)
        )
        return ref

    def add_title(self, title: str, title_type: TitleType = TitleType.MAIN) -> ElementRef:
        """
        Append a dc:title and its title-type meta.

        The first title is the main one by convention only.
        """
        title_id = f"title{len(self._titles) + 1:02d}"
        self._titles.append(TitleElement(value=title, id=title_id, title_type=title_type))
        ref = ElementRef(ElementCategory.TITLE, title_id, self._owner)

        self._append_meta(
            MetaElement(value=title_type.value, property="title-type", refines=ref.fragment)
        )
        return ref

    def add_contributor(
        self,
        name: str,
        role: ContributorRole = ContributorRole.AUTHOR,
    ) -> ElementRef:
        """
        Append a person and its MARC relator role meta.

        Authors become dc:creator elements (creator01, ...); every other
        role becomes a dc:contributor (contributor01, ...).

        Returns:
            Reference used to attach alternate-script or file-as metas
        """
        if role is ContributorRole.AUTHOR:
            category, sequence = ElementCategory.CREATOR, self._creators
        else:
            category, sequence = ElementCategory.CONTRIBUTOR, self._contributors

        element_id = f"{category.value}{len(sequence) + 1:02d}"
        sequence.append(ContributorElement(value=name, id=element_id, role=role))
        ref = ElementRef(category, element_id, self._owner)

        self._append_meta(
            MetaElement(
                value=role.code,
                property="role",
                refines=ref.fragment,
                scheme="marc:relators",
            )
        )
        return ref

    def add_alternate_script(
        self,
        ref: ElementRef,
        script: str,
        lang: LanguageTag | str,
    ) -> None:
        """Attach the contributor's name written in another script."""
        self._resolve_person(ref)
        lang_value = lang.value if isinstance(lang, LanguageTag) else lang
        self._append_meta(
            MetaElement(
                value=script,
                property="alternate-script",
                refines=ref.fragment,
                lang=lang_value,
            )
        )

    def add_sort_name(self, ref: ElementRef, sort_name: str) -> None:
        """Attach the contributor's filing name ("Last, First")."""
        self._resolve_person(ref)
        self._append_meta(MetaElement(value=sort_name, property="file-as", refines=ref.fragment))

    # =========================================================================
    # Scalar fields
    # =========================================================================

    def set_description(self, description: str) -> None:
        self.description = description

    def set_publisher(self, publisher: str) -> None:
        self.publisher = publisher

    def set_publication_date(self, published_at: date | datetime) -> None:
        self.date = format_timestamp(published_at)

    def set_modification_date(self, modified_at: datetime) -> None:
        """Append a dcterms:modified meta stamped in UTC."""
        self._append_meta(
            MetaElement(value=format_timestamp(modified_at), property="dcterms:modified")
        )

    def update_book_info(self, record: BookMetadataRecord) -> None:
        """Copy description, publisher and publication date from a record."""
        self.set_description(record.description)
        self.set_publisher(record.publisher)
        self.set_publication_date(record.published_at)

    # =========================================================================
    # Construction from a record
    # =========================================================================

    @classmethod
    def from_record(
        cls,
        record: BookMetadataRecord,
        *,
        version: str = DEFAULT_VERSION,
        modified_versions: Iterable[str] = MODIFIED_VERSIONS,
        now: datetime | None = None,
    ) -> PackageDocument:
        """
        Build a complete document for a scraped book.

        Every author becomes a creator with a file-as meta where a filing
        name can be derived; the record's primary identifier is added as a
        secondary identifier.
        """
        doc = cls(
            version,
            record.language,
            record.title,
            record.authors[0],
            modified_versions=modified_versions,
            now=now,
        )

        author_refs = [doc.main_author_ref]
        author_refs.extend(doc.add_contributor(name) for name in record.authors[1:])
        for name, ref in zip(record.authors, author_refs):
            sort_name = name_to_file_as(name)
            if sort_name:
                doc.add_sort_name(ref, sort_name)

        code = record.primary_identifier
        if code.kind is CodeKind.ISBN13:
            doc.add_identifier(f"urn:isbn:{code.value}", "isbn")
        else:
            doc.add_identifier(code.value, "asin")

        doc.update_book_info(record)
        logger.debug(
            "Built package document for %r (%d creators)", record.title, len(doc.creators)
        )
        return doc

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_xml(self) -> str:
        """Serialize to an indented XML string with declaration."""
        from bookscraper.opf.serializer import serialize

        return serialize(self)

    def write(self, path: Path) -> Path:
        """Write the serialized document to ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_xml(), encoding="utf-8")
        logger.info("Wrote package document to %s", path)
        return path

    # =========================================================================
    # Reference handling
    # =========================================================================

    def _sequence(self, category: ElementCategory) -> list:
        return {
            ElementCategory.IDENTIFIER: self._identifiers,
            ElementCategory.TITLE: self._titles,
            ElementCategory.CREATOR: self._creators,
            ElementCategory.CONTRIBUTOR: self._contributors,
        }[category]

    def _resolve(self, ref: ElementRef) -> IdentifierElement | TitleElement | ContributorElement:
        if ref.owner != self._owner:
            raise UnknownReferenceError(
                f"{ref.category.value} {ref.id!r} was issued by another document",
                ref_id=ref.id,
            )
        for element in self._sequence(ref.category):
            if element.id == ref.id:
                return element
        raise UnknownReferenceError(
            f"{ref.category.value} {ref.id!r} does not belong to this document",
            ref_id=ref.id,
        )

    def _resolve_person(self, ref: ElementRef) -> None:
        if ref.category not in (ElementCategory.CREATOR, ElementCategory.CONTRIBUTOR):
            raise UnknownReferenceError(
                f"{ref.id!r} is not a creator or contributor", ref_id=ref.id
            )
        self._resolve(ref)

    def _append_meta(self, meta: MetaElement) -> None:
        target = meta.refined_id()
        if target is not None and target not in self.element_ids():
            raise UnknownReferenceError(
                f"meta refines unknown element {meta.refines!r}", ref_id=target
            )
        self._metas.append(meta)
