"""
Product page field extraction.

Each metadata field is declared as a FieldRule (CSS selector plus an
optional attribute) and extracted from a BeautifulSoup document:

- title, publisher, publication date, language: single node, trimmed
- authors: every matching node, trimmed, none may be blank
- description: every matching fragment concatenated in document order
- cover image: JSON attribute mapping image URL to [width, height];
  the URL with the greatest height wins

Extraction is fail-fast: the first missing field raises FieldNotFoundError
and no partial result is returned.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

from bookscraper.exceptions import DocumentParseError, FieldNotFoundError
from bookscraper.languages import map_language
from bookscraper.models import PartialBookMetadata
from bookscraper.scraper.dates import Locale, parse_date

logger = logging.getLogger(__name__)

# Bidi marks Amazon pads detail values with
_DIRECTION_MARKS = re.compile(r"[\u200e\u200f\u202a-\u202e]")


@dataclass(frozen=True)
class FieldRule:
    """Location rule for one metadata field."""

    name: str
    selector: str
    attribute: str | None = None


@dataclass(frozen=True)
class ExtractionRules:
    """Location rules for every extracted field.

    Defaults target the amazon.com.br product page layout.
    """

    title: FieldRule = field(default_factory=lambda: FieldRule("title", "#productTitle"))
    authors: FieldRule = field(
        default_factory=lambda: FieldRule("authors", "#bylineInfo .author > a")
    )
    description: FieldRule = field(
        default_factory=lambda: FieldRule(
            "description",
            "#bookDescription_feature_div span:not(.a-expander-prompt)",
        )
    )
    publisher: FieldRule = field(
        default_factory=lambda: FieldRule(
            "publisher",
            "#rpi-attribute-book_details-publisher .rpi-attribute-value span",
        )
    )
    published_at: FieldRule = field(
        default_factory=lambda: FieldRule(
            "publishedAt",
            "#rpi-attribute-book_details-publication_date .rpi-attribute-value span",
        )
    )
    language: FieldRule = field(
        default_factory=lambda: FieldRule(
            "language",
            "#rpi-attribute-language .rpi-attribute-value span",
        )
    )
    cover_image: FieldRule = field(
        default_factory=lambda: FieldRule(
            "coverImage",
            "#imgBlkFront, #landingImage, #ebooksImgBlkFront",
            attribute="data-a-dynamic-image",
        )
    )


def parse_page(content: bytes | str) -> BeautifulSoup:
    """
    Parse rendered page content into a document.

    Args:
        content: Page HTML as bytes or text

    Returns:
        Parsed BeautifulSoup document

    Raises:
        DocumentParseError: If the content is empty or cannot be decoded
    """
    if not content or not content.strip():
        raise DocumentParseError("page content is empty")
    try:
        return BeautifulSoup(content, "html.parser")
    except (TypeError, ValueError, UnicodeDecodeError) as e:
        raise DocumentParseError(f"failed to parse page: {e}") from e


def clean_text(text: str) -> str:
    """Trim whitespace and bidi marks around text."""
    return _DIRECTION_MARKS.sub("", text).strip()


class FieldExtractor:
    """
    Extract book metadata fields from a parsed product page.

    Usage:
        extractor = FieldExtractor()
        partial = extractor.extract(parse_page(html))
    """

    def __init__(
        self,
        rules: ExtractionRules | None = None,
        *,
        locale: Locale = Locale.PT_BR,
    ) -> None:
        self.rules = rules or ExtractionRules()
        self.locale = locale

    def extract(self, document: BeautifulSoup) -> PartialBookMetadata:
        """
        Extract every field from the document.

        Raises:
            FieldNotFoundError: If a field is missing or blank
            InvalidDateFormatError: If the publication date cannot be parsed
            UnknownLanguageError: If the language name is not supported
        """
        rules = self.rules
        title = self.extract_text(document, rules.title)
        authors = self.extract_authors(document)
        description = self.extract_description(document)
        publisher = self.extract_text(document, rules.publisher)
        published_at = parse_date(self.extract_text(document, rules.published_at), self.locale)
        language = map_language(self.extract_text(document, rules.language))
        cover_url = self.extract_cover_url(document)

        logger.debug("Extracted %r by %s", title, ", ".join(authors))
        return PartialBookMetadata(
            title=title,
            authors=authors,
            cover_url=cover_url,
            language=language,
            publisher=publisher,
            published_at=published_at,
            description=description,
        )

    def extract_text(self, document: BeautifulSoup, rule: FieldRule) -> str:
        """Trimmed text of the single node matching the rule."""
        node = document.select_one(rule.selector)
        text = clean_text(node.get_text()) if node is not None else ""
        if not text:
            raise FieldNotFoundError(rule.name)
        return text

    def extract_authors(self, document: BeautifulSoup) -> tuple[str, ...]:
        """Trimmed names of every author node, in page order."""
        rule = self.rules.authors
        authors = tuple(clean_text(node.get_text()) for node in document.select(rule.selector))
        if not authors or not all(authors):
            raise FieldNotFoundError(rule.name)
        return authors

    def extract_description(self, document: BeautifulSoup) -> str:
        """Concatenated description fragments."""
        rule = self.rules.description
        matched = document.select(rule.selector)
        matched_ids = {id(node) for node in matched}
        fragments = []
        for node in matched:
            # Text of a nested match is already part of its outer match
            if any(id(parent) in matched_ids for parent in node.parents):
                continue
            text = clean_text(node.get_text())
            if text:
                fragments.append(text)

        description = " ".join(fragments).strip()
        if not description:
            raise FieldNotFoundError(rule.name)
        return description

    def extract_cover_url(self, document: BeautifulSoup) -> str:
        """URL of the tallest cover image variant."""
        rule = self.rules.cover_image
        node = document.select_one(rule.selector)
        raw = node.get(rule.attribute or "") if isinstance(node, Tag) else None
        if not raw or not isinstance(raw, str):
            raise FieldNotFoundError(rule.name)

        try:
            variants = json.loads(raw)
        except json.JSONDecodeError as e:
            raise FieldNotFoundError(rule.name, f"malformed cover image data: {e}") from e

        best_url = ""
        best_height = -1
        if isinstance(variants, dict):
            for url, size in variants.items():
                if not (isinstance(size, list) and len(size) == 2):
                    raise FieldNotFoundError(rule.name, f"malformed cover image size for {url}")
                height = size[1]
                if isinstance(height, bool) or not isinstance(height, (int, float)):
                    raise FieldNotFoundError(rule.name, f"malformed cover image height for {url}")
                if height > best_height:
                    best_url, best_height = url, height

        if not best_url:
            raise FieldNotFoundError(rule.name)
        return best_url
