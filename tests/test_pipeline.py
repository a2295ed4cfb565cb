"""Tests for the end-to-end book metadata pipeline."""

from __future__ import annotations

import os
from datetime import date
from unittest import mock

import pytest

from bookscraper.exceptions import (
    FieldNotFoundError,
    InvalidAsinError,
    MissingCodeError,
    UpstreamFetchError,
)
from bookscraper.languages import LanguageTag
from bookscraper.pipeline import get_book_info
from bookscraper.scraper.dates import Locale
from bookscraper.scraper.extractor import FieldExtractor
from tests.conftest import EXPECTED_DESCRIPTION, TALLEST_COVER_URL


class RecordingFetcher:
    """Page fetcher stub that records every request."""

    def __init__(self, page: bytes) -> None:
        self.page = page
        self.calls: list[tuple[str, str]] = []

    def __call__(self, access_token: str, url: str) -> bytes:
        self.calls.append((access_token, url))
        return self.page


class TestGetBookInfo:
    """Tests for get_book_info."""

    def test_asin_lookup(self, product_page: bytes) -> None:
        """An ASIN lookup returns a complete record."""
        fetcher = RecordingFetcher(product_page)
        with mock.patch.dict(os.environ, {}, clear=True):
            record = get_book_info("token", "B083G6VYBZ", "", fetcher=fetcher)

        assert fetcher.calls == [("token", "https://www.amazon.com.br/dp/B083G6VYBZ")]
        assert record.title == "O cheiro do ralo"
        assert record.authors == ("Lourenço Mutarelli", "Jane Doe")
        assert record.description == EXPECTED_DESCRIPTION
        assert record.cover_url == TALLEST_COVER_URL
        assert record.language is LanguageTag.PORTUGUESE_BR
        assert record.published_at == date(2019, 11, 1)
        assert record.asin == "B083G6VYBZ"
        assert record.isbn13 == ""

    def test_isbn_lookup_uses_converted_code(self, product_page: bytes) -> None:
        """ISBN-10 input is converted before the page is requested."""
        fetcher = RecordingFetcher(product_page)
        record = get_book_info(
            "token",
            "",
            "8535931004",
            fetcher=fetcher,
            product_url="https://example.test/dp/{code}",
        )

        assert fetcher.calls == [("token", "https://example.test/dp/9788535931006")]
        assert record.isbn13 == "9788535931006"
        assert record.asin == ""

    def test_product_url_from_env(self, product_page: bytes) -> None:
        """The product URL template is read from SCRAPER_PRODUCT_URL."""
        fetcher = RecordingFetcher(product_page)
        env = {"SCRAPER_PRODUCT_URL": "https://www.amazon.com/dp/{code}"}
        with mock.patch.dict(os.environ, env, clear=True):
            get_book_info("token", "B083G6VYBZ", "", fetcher=fetcher)
        assert fetcher.calls[0][1] == "https://www.amazon.com/dp/B083G6VYBZ"

    def test_invalid_code_skips_fetch(self, product_page: bytes) -> None:
        """Validation failures happen before any retrieval."""
        fetcher = RecordingFetcher(product_page)
        with pytest.raises(InvalidAsinError):
            get_book_info("token", "123", "", fetcher=fetcher)
        with pytest.raises(MissingCodeError):
            get_book_info("token", "", "", fetcher=fetcher)
        assert fetcher.calls == []

    def test_fetch_failure_propagates(self) -> None:
        """Retrieval errors are not retried or wrapped."""

        def failing_fetcher(access_token: str, url: str) -> bytes:
            raise UpstreamFetchError("browserless returned HTTP 503", url=url, status_code=503)

        with pytest.raises(UpstreamFetchError, match="HTTP 503"):
            get_book_info("token", "B083G6VYBZ", "", fetcher=failing_fetcher)

    def test_extraction_failure_propagates(self) -> None:
        """A page without the expected fields fails the lookup."""
        fetcher = RecordingFetcher(b"<html><body><p>Captcha</p></body></html>")
        with pytest.raises(FieldNotFoundError, match="title"):
            get_book_info("token", "B083G6VYBZ", "", fetcher=fetcher)

    def test_custom_extractor(self, product_page: bytes) -> None:
        """A preconfigured extractor is used as-is."""
        page = product_page.replace("1 novembro 2019".encode(), b"1 November 2019")
        record = get_book_info(
            "token",
            "B083G6VYBZ",
            "",
            fetcher=RecordingFetcher(page),
            extractor=FieldExtractor(locale=Locale.EN_US),
        )
        assert record.published_at == date(2019, 11, 1)

    def test_locale_from_env(self, product_page: bytes) -> None:
        """The default extractor uses SCRAPER_LOCALE."""
        page = product_page.replace("1 novembro 2019".encode(), b"1 November 2019")
        with mock.patch.dict(os.environ, {"SCRAPER_LOCALE": "en-US"}, clear=True):
            record = get_book_info("token", "B083G6VYBZ", "", fetcher=RecordingFetcher(page))
        assert record.published_at == date(2019, 11, 1)
