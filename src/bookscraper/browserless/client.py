"""
Browserless API client for rendered page retrieval.

Browserless API: https://docs.browserless.io
- POST /content?token=... - Render a URL in headless Chrome and return the HTML

Transient network errors are retried with exponential backoff; every
final failure surfaces as UpstreamFetchError.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from bookscraper.env_settings import get_env_settings
from bookscraper.exceptions import UpstreamFetchError
from bookscraper.utils.retry import retry_with_backoff

if TYPE_CHECKING:
    from bookscraper.codes import ValidatedCode
    from bookscraper.env_settings import BrowserlessEnvSettings, ScraperEnvSettings

logger = logging.getLogger(__name__)


def build_product_url(
    code: ValidatedCode | str,
    settings: ScraperEnvSettings | None = None,
) -> str:
    """Fill the product page URL template with a product code."""
    settings = settings or get_env_settings().scraper
    return settings.product_url.format(code=str(code))


def fetch_rendered_page(
    access_token: str,
    url: str,
    *,
    settings: BrowserlessEnvSettings | None = None,
) -> bytes:
    """
    Fetch the fully rendered HTML of a page through browserless.

    Args:
        access_token: Browserless token (falls back to BROWSERLESS_TOKEN)
        url: Page to render
        settings: Browserless settings (defaults to environment settings)

    Returns:
        Rendered page HTML

    Raises:
        UpstreamFetchError: If no token is available, the service answers
            with an error status, the body is empty, or the request still
            fails after retries
    """
    settings = settings or get_env_settings().browserless
    token = access_token or settings.token
    if not token:
        raise UpstreamFetchError("browserless access token is required", url=url)

    endpoint = f"{settings.url}/content"
    payload = {"url": url, "gotoOptions": {"waitUntil": "networkidle2"}}

    @retry_with_backoff(
        max_retries=settings.max_retries,
        base_delay=settings.retry_base_delay,
        jitter=settings.retry_base_delay,
        logger_instance=logger,
    )
    def _post() -> httpx.Response:
        with httpx.Client(timeout=settings.timeout_seconds) as client:
            return client.post(endpoint, params={"token": token}, json=payload)

    logger.debug("Fetching rendered page: %s", url)

    try:
        response = _post()
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise UpstreamFetchError(
            f"browserless returned HTTP {status} for {url}",
            url=url,
            status_code=status,
        ) from e
    except httpx.HTTPError as e:
        raise UpstreamFetchError(f"failed to fetch {url}: {e}", url=url) from e

    content = response.content
    if not content:
        raise UpstreamFetchError(f"browserless returned an empty page for {url}", url=url)

    logger.info("Fetched rendered page %s (%d bytes)", url, len(content))
    return content
