"""Shared pytest fixtures and helpers for bookscraper tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

from bookscraper.env_settings import clear_env_settings_cache
from bookscraper.languages import LanguageTag
from bookscraper.models import BookMetadataRecord

FIXTURES_DIR = Path(__file__).parent / "fixtures"

TALLEST_COVER_URL = "https://m.media-amazon.com/images/I/51ZQYQZQJNL._SY466_.jpg"
EXPECTED_DESCRIPTION = (
    "Lourenço Mutarelli em seu romance de estreia. "
    "Um comprador de objetos usados se vê obcecado por um cheiro."
)

FIXED_NOW = datetime(2024, 5, 17, 12, 30, 45, tzinfo=timezone.utc)


def make_record(**overrides: object) -> BookMetadataRecord:
    """Create a BookMetadataRecord for tests.

    Args:
        **overrides: Field values replacing the defaults.

    Returns:
        Record for "O cheiro do ralo" identified by ASIN unless overridden.
    """
    fields: dict[str, object] = {
        "title": "O cheiro do ralo",
        "authors": ("Lourenço Mutarelli",),
        "cover_url": TALLEST_COVER_URL,
        "language": LanguageTag.PORTUGUESE_BR,
        "publisher": "Companhia das Letras",
        "published_at": date(2019, 11, 1),
        "description": EXPECTED_DESCRIPTION,
        "asin": "B083G6VYBZ",
    }
    fields.update(overrides)
    return BookMetadataRecord(**fields)


@pytest.fixture
def product_page() -> bytes:
    """Rendered amazon.com.br product page."""
    return (FIXTURES_DIR / "product_page.html").read_bytes()


@pytest.fixture
def record() -> BookMetadataRecord:
    """ASIN-identified record for "O cheiro do ralo"."""
    return make_record()


@pytest.fixture(autouse=True)
def _fresh_env_settings() -> Iterator[None]:
    """Drop cached environment settings around every test."""
    clear_env_settings_cache()
    yield
    clear_env_settings_cache()


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    """The bookscraper logger, with its handlers and level restored afterwards."""
    logger = logging.getLogger("bookscraper")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
