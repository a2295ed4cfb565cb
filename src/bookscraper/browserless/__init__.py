"""Browserless headless-browser client for rendered product pages."""

from __future__ import annotations

from bookscraper.browserless.client import build_product_url, fetch_rendered_page

__all__ = ["build_product_url", "fetch_rendered_page"]
