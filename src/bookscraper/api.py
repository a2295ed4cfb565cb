"""Flask application exposing book metadata lookups over HTTP.

Routes:
    GET /api/amazon?mobiAsin=...&browserlessToken=...      -> record JSON
    GET /api/amazon/opf?mobiAsin=...&browserlessToken=...  -> package document XML
"""

from __future__ import annotations

import logging

from flask import Flask, Response, request

from bookscraper.env_settings import get_env_settings
from bookscraper.exceptions import BookScraperError
from bookscraper.models import BookMetadataRecord
from bookscraper.opf import PackageDocument
from bookscraper.pipeline import PageFetcher, get_book_info

logger = logging.getLogger(__name__)

ASIN_PARAM = "mobiAsin"
TOKEN_PARAM = "browserlessToken"

CACHE_CONTROL = "max-age=0, s-maxage=86400"


def create_app(fetcher: PageFetcher | None = None) -> Flask:
    """Create and configure the lookup Flask app.

    Args:
        fetcher: Page retrieval function (defaults to browserless)
    """
    app = Flask(__name__)

    def _lookup() -> BookMetadataRecord | Response:
        params = request.args
        if ASIN_PARAM not in params or TOKEN_PARAM not in params:
            return Response(
                f'the query param "{ASIN_PARAM}" and "{TOKEN_PARAM}" is required',
                status=400,
                mimetype="text/plain",
            )

        kwargs = {"fetcher": fetcher} if fetcher is not None else {}
        try:
            return get_book_info(params[TOKEN_PARAM], params[ASIN_PARAM], "", **kwargs)
        except BookScraperError as e:
            logger.warning("Lookup failed for %s (%s): %s", params[ASIN_PARAM], e.code, e)
            return Response(str(e), status=500, mimetype="text/plain")

    @app.get("/api/amazon")
    def book_info() -> Response:
        result = _lookup()
        if isinstance(result, Response):
            return result

        response = Response(result.to_json(), status=200)
        response.headers["Content-Type"] = "application/json; charset=utf-8"
        response.headers["Cache-Control"] = CACHE_CONTROL
        return response

    @app.get("/api/amazon/opf")
    def book_opf() -> Response:
        result = _lookup()
        if isinstance(result, Response):
            return result

        opf_settings = get_env_settings().opf
        doc = PackageDocument.from_record(
            result,
            version=opf_settings.version,
            modified_versions=opf_settings.modified_versions,
        )
        response = Response(doc.to_xml(), status=200)
        response.headers["Content-Type"] = "application/oebps-package+xml; charset=utf-8"
        response.headers["Cache-Control"] = CACHE_CONTROL
        return response

    return app
