"""
OPF package document XML serialization.

Uses ElementTree for XML generation. Prefixed names (dc:title, xml:lang)
and namespace declarations are written literally so the Dublin Core
declaration sits on the metadata element and element order follows the
document's insertion order exactly.

Output layout:
    <package unique-identifier version xmlns xml:lang dir>
      <metadata xmlns:dc>
        dc:identifier+ dc:title+ dc:language dc:creator* dc:contributor*
        dc:date? dc:description? dc:publisher? meta*
      </metadata>
    </package>
"""

from __future__ import annotations

import contextlib
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

from bookscraper.exceptions import DocumentParseError
from bookscraper.opf.helpers import sanitize_xml_text
from bookscraper.opf.schemas import (
    ContributorElement,
    ContributorRole,
    IdentifierElement,
    MetaElement,
    TitleElement,
    TitleType,
)

if TYPE_CHECKING:
    from bookscraper.opf.document import PackageDocument

# XML namespaces
NS_DC = "http://purl.org/dc/elements/1.1/"
NS_OPF = "http://www.idpf.org/2007/opf"
NS_XML = "http://www.w3.org/XML/1998/namespace"

E = TypeVar("E", bound=Enum)


def _text_element(parent: ET.Element, tag: str, text: str, **attrs: str) -> ET.Element:
    elem = ET.SubElement(parent, tag, attrs)
    elem.text = sanitize_xml_text(text)
    return elem


def build_package(doc: PackageDocument) -> ET.Element:
    """Build the package element tree for a document."""
    package = ET.Element("package")
    package.set("unique-identifier", doc.unique_identifier_id)
    package.set("version", doc.version)
    package.set("xmlns", NS_OPF)
    if doc.language:
        package.set("xml:lang", doc.language)
    if doc.text_direction:
        package.set("dir", doc.text_direction)

    metadata = ET.SubElement(package, "metadata")
    metadata.set("xmlns:dc", NS_DC)

    for identifier in doc.identifiers:
        _text_element(metadata, "dc:identifier", identifier.value, id=identifier.id)
    for title in doc.titles:
        _text_element(metadata, "dc:title", title.value, id=title.id)
    _text_element(metadata, "dc:language", doc.language)
    for creator in doc.creators:
        _text_element(metadata, "dc:creator", creator.value, id=creator.id)
    for contributor in doc.contributors:
        _text_element(metadata, "dc:contributor", contributor.value, id=contributor.id)
    if doc.date:
        _text_element(metadata, "dc:date", doc.date)
    if doc.description:
        _text_element(metadata, "dc:description", doc.description)
    if doc.publisher:
        _text_element(metadata, "dc:publisher", doc.publisher)

    for meta in doc.metas:
        attrs = {"property": meta.property}
        if meta.refines:
            attrs["refines"] = meta.refines
        if meta.scheme:
            attrs["scheme"] = meta.scheme
        if meta.lang:
            attrs["xml:lang"] = meta.lang
        _text_element(metadata, "meta", meta.value, **attrs)

    return package


def serialize(doc: PackageDocument) -> str:
    """
    Convert a document to a formatted XML string.

    Returns properly indented XML with declaration.
    """
    root = build_package(doc)
    with contextlib.suppress(AttributeError):
        ET.indent(root, space="  ")

    xml_body = ET.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{xml_body}'


# =============================================================================
# Parsing
# =============================================================================


@dataclass(frozen=True)
class ParsedPackage:
    """Metadata read back from a serialized package document."""

    unique_identifier: str
    version: str
    language: str
    identifiers: tuple[IdentifierElement, ...]
    titles: tuple[TitleElement, ...]
    creators: tuple[ContributorElement, ...]
    contributors: tuple[ContributorElement, ...]
    metas: tuple[MetaElement, ...]
    date: str | None = None
    description: str | None = None
    publisher: str | None = None

    def meta_tuples(self) -> set[tuple[str | None, str, str]]:
        """(refines, property, value) for every meta."""
        return {(meta.refines, meta.property, meta.value) for meta in self.metas}


def _dc(name: str) -> str:
    return f"{{{NS_DC}}}{name}"


def _opf(name: str) -> str:
    return f"{{{NS_OPF}}}{name}"


def _refined_enum(
    enum_cls: type[E],
    refined: dict[tuple[str, str], str],
    element_id: str | None,
    prop: str,
    default: E,
) -> E:
    value = refined.get((f"#{element_id}", prop))
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError as e:
        raise DocumentParseError(
            f"unsupported {prop} {value!r} for element {element_id!r}"
        ) from e


def parse_package_document(xml_str: str | bytes) -> ParsedPackage:
    """
    Parse a serialized package document.

    Title types and contributor roles are recovered from their refining
    metas.

    Raises:
        DocumentParseError: If the XML is malformed, has no metadata element,
            or uses an unsupported role or title type
    """
    if isinstance(xml_str, str):
        xml_str = xml_str.encode("utf-8")
    try:
        root = ET.fromstring(xml_str)
    except ET.ParseError as e:
        raise DocumentParseError(f"malformed package document: {e}") from e

    metadata = root.find(_opf("metadata"))
    if root.tag != _opf("package") or metadata is None:
        raise DocumentParseError("not an OPF package document")

    metas = tuple(
        MetaElement(
            value=elem.text or "",
            property=elem.get("property", ""),
            refines=elem.get("refines"),
            scheme=elem.get("scheme"),
            lang=elem.get(f"{{{NS_XML}}}lang"),
        )
        for elem in metadata.iter(_opf("meta"))
    )
    refined = {(meta.refines, meta.property): meta.value for meta in metas if meta.refines}

    def _people(tag: str) -> tuple[ContributorElement, ...]:
        return tuple(
            ContributorElement(
                value=elem.text or "",
                id=elem.get("id", ""),
                role=_refined_enum(
                    ContributorRole, refined, elem.get("id"), "role", ContributorRole.AUTHOR
                ),
            )
            for elem in metadata.iter(_dc(tag))
        )

    def _scalar(tag: str) -> str | None:
        elem = metadata.find(_dc(tag))
        return elem.text if elem is not None else None

    return ParsedPackage(
        unique_identifier=root.get("unique-identifier", ""),
        version=root.get("version", ""),
        language=_scalar("language") or "",
        identifiers=tuple(
            IdentifierElement(value=elem.text or "", id=elem.get("id", ""))
            for elem in metadata.iter(_dc("identifier"))
        ),
        titles=tuple(
            TitleElement(
                value=elem.text or "",
                id=elem.get("id", ""),
                title_type=_refined_enum(
                    TitleType, refined, elem.get("id"), "title-type", TitleType.MAIN
                ),
            )
            for elem in metadata.iter(_dc("title"))
        ),
        creators=_people("creator"),
        contributors=_people("contributor"),
        metas=metas,
        date=_scalar("date"),
        description=_scalar("description"),
        publisher=_scalar("publisher"),
    )
