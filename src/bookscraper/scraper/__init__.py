"""
Product page scraping.

Turns a rendered product page into a PartialBookMetadata:

- dates: locale month names to calendar dates
- extractor: declared field rules evaluated against the parsed page
- assembler: partial fields + validated code -> BookMetadataRecord

Language display names are mapped by bookscraper.languages.
"""

from __future__ import annotations

from bookscraper.scraper.assembler import assemble
from bookscraper.scraper.dates import MONTH_NAMES_PT_BR, Locale, parse_date, translate_month
from bookscraper.scraper.extractor import (
    ExtractionRules,
    FieldExtractor,
    FieldRule,
    clean_text,
    parse_page,
)

__all__ = [
    # Extraction
    "ExtractionRules",
    "FieldExtractor",
    "FieldRule",
    "clean_text",
    "parse_page",
    "assemble",
    # Dates
    "Locale",
    "parse_date",
    "translate_month",
    "MONTH_NAMES_PT_BR",
]
