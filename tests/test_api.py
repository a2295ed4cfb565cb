"""Tests for the Flask lookup endpoints."""

from __future__ import annotations

import os
from collections.abc import Iterator
from unittest import mock

import pytest
from flask.testing import FlaskClient

from bookscraper.api import CACHE_CONTROL, create_app
from bookscraper.exceptions import UpstreamFetchError
from bookscraper.opf import parse_package_document

QUERY = {"mobiAsin": "B083G6VYBZ", "browserlessToken": "secret"}


@pytest.fixture
def client(product_page: bytes) -> Iterator[FlaskClient]:
    """Test client whose fetcher serves the fixture page."""
    app = create_app(fetcher=lambda token, url: product_page)
    app.config["TESTING"] = True
    with mock.patch.dict(os.environ, {}, clear=True), app.test_client() as test_client:
        yield test_client


class TestBookInfoEndpoint:
    """Tests for GET /api/amazon."""

    def test_success(self, client: FlaskClient) -> None:
        """A lookup returns the record as JSON with cache headers."""
        response = client.get("/api/amazon", query_string=QUERY)

        assert response.status_code == 200
        assert response.headers["Content-Type"] == "application/json; charset=utf-8"
        assert response.headers["Cache-Control"] == "max-age=0, s-maxage=86400"
        data = response.get_json()
        assert data["title"] == "O cheiro do ralo"
        assert data["asin"] == "B083G6VYBZ"
        assert data["isbn13"] == ""
        assert data["publishedAt"] == "2019-11-01"

    @pytest.mark.parametrize(
        "query",
        [
            {},
            {"mobiAsin": "B083G6VYBZ"},
            {"browserlessToken": "secret"},
        ],
    )
    def test_missing_params(self, client: FlaskClient, query: dict[str, str]) -> None:
        """Both query params are required."""
        response = client.get("/api/amazon", query_string=query)

        assert response.status_code == 400
        assert response.mimetype == "text/plain"
        assert response.get_data(as_text=True) == (
            'the query param "mobiAsin" and "browserlessToken" is required'
        )

    def test_invalid_asin(self, client: FlaskClient) -> None:
        """Validation failures return 500 with the error text."""
        response = client.get(
            "/api/amazon", query_string={"mobiAsin": "8535931004", "browserlessToken": "x"}
        )
        assert response.status_code == 500
        assert response.get_data(as_text=True) == "invalid ASIN code"

    def test_extraction_failure(self) -> None:
        """Extraction failures return 500 with the error text."""
        app = create_app(fetcher=lambda token, url: b"<html><body></body></html>")
        with mock.patch.dict(os.environ, {}, clear=True):
            response = app.test_client().get("/api/amazon", query_string=QUERY)
        assert response.status_code == 500
        assert response.get_data(as_text=True) == "field not found: title"

    def test_upstream_failure(self) -> None:
        """Retrieval failures return 500 with the error text."""

        def failing_fetcher(token: str, url: str) -> bytes:
            raise UpstreamFetchError("browserless returned HTTP 429", status_code=429)

        app = create_app(fetcher=failing_fetcher)
        with mock.patch.dict(os.environ, {}, clear=True):
            response = app.test_client().get("/api/amazon", query_string=QUERY)
        assert response.status_code == 500
        assert response.get_data(as_text=True) == "browserless returned HTTP 429"


class TestBookOpfEndpoint:
    """Tests for GET /api/amazon/opf."""

    def test_success(self, client: FlaskClient) -> None:
        """A lookup returns the package document."""
        response = client.get("/api/amazon/opf", query_string=QUERY)

        assert response.status_code == 200
        assert response.headers["Content-Type"].startswith("application/oebps-package+xml")
        assert response.headers["Cache-Control"] == CACHE_CONTROL

        parsed = parse_package_document(response.get_data())
        assert [t.value for t in parsed.titles] == ["O cheiro do ralo"]
        assert [c.value for c in parsed.creators] == ["Lourenço Mutarelli", "Jane Doe"]
        assert parsed.identifiers[1].value == "B083G6VYBZ"

    def test_version_from_env(self, product_page: bytes) -> None:
        """The package version is read from OPF_VERSION."""
        app = create_app(fetcher=lambda token, url: product_page)
        with mock.patch.dict(os.environ, {"OPF_VERSION": "2.0"}, clear=True):
            response = app.test_client().get("/api/amazon/opf", query_string=QUERY)

        parsed = parse_package_document(response.get_data())
        assert parsed.version == "2.0"
        assert not any(m.property == "dcterms:modified" for m in parsed.metas)

    def test_missing_params(self, client: FlaskClient) -> None:
        """The OPF endpoint validates params the same way."""
        response = client.get("/api/amazon/opf", query_string={"mobiAsin": "B083G6VYBZ"})
        assert response.status_code == 400
