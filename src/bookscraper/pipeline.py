"""
Book metadata pipeline.

    validate code -> fetch rendered page -> parse -> extract -> assemble

Every step is fail-fast: the first error aborts the lookup and no partial
record is returned. Nothing is retried at this layer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from bookscraper.browserless.client import build_product_url, fetch_rendered_page
from bookscraper.codes import validate_book_code
from bookscraper.env_settings import get_env_settings
from bookscraper.models import BookMetadataRecord
from bookscraper.scraper.assembler import assemble
from bookscraper.scraper.extractor import FieldExtractor, parse_page

logger = logging.getLogger(__name__)

# (access_token, url) -> rendered page bytes
PageFetcher = Callable[[str, str], bytes]


def get_book_info(
    access_token: str,
    asin: str,
    isbn: str,
    *,
    fetcher: PageFetcher = fetch_rendered_page,
    extractor: FieldExtractor | None = None,
    product_url: str | None = None,
) -> BookMetadataRecord:
    """
    Look up a book's metadata from its product page.

    Args:
        access_token: Token for the page retrieval service
        asin: Amazon ASIN, may be empty
        isbn: ISBN-10/13, may be empty
        fetcher: Page retrieval function
        extractor: Field extractor (defaults to the configured page locale)
        product_url: URL template with a {code} placeholder (defaults to settings)

    Returns:
        Immutable BookMetadataRecord

    Raises:
        BookScraperError: Any validation, retrieval or extraction failure
    """
    code = validate_book_code(asin, isbn)
    logger.debug("Validated %s code %s", code.kind.value, code.value)

    url = product_url.format(code=code.value) if product_url else build_product_url(code)
    page = fetcher(access_token, url)

    document = parse_page(page)
    extractor = extractor or FieldExtractor(locale=get_env_settings().scraper.locale)
    partial = extractor.extract(document)

    record = assemble(partial, code)
    logger.info("Scraped %r (%s %s)", record.title, code.kind.value, code.value)
    return record
