"""Product code validation and ISBN normalization.

A book is looked up either by its ASIN (digital edition, always starting
with "B") or by its ISBN. ISBN-10 codes are converted to ISBN-13 so that
the returned code is always one of:

- ``ASIN``: returned unchanged
- ``ISBN13``: 13 digits, hyphens removed

Examples:
    >>> validate_book_code("", "0-306-40615-2")
    ValidatedCode(kind=<CodeKind.ISBN13: 'ISBN13'>, value='9780306406157')
    >>> isbn10_to_isbn13("030640615X")
    '9780306406157'
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from bookscraper.exceptions import InvalidAsinError, InvalidIsbnError, MissingCodeError

logger = logging.getLogger(__name__)

# Digits and hyphens only, with an optional trailing check character X
_ISBN_SHAPE = re.compile(r"^[0-9-]*[0-9Xx]$")
_ISBN10_DIGITS = re.compile(r"^[0-9]{9}[0-9Xx]$")
_ISBN13_DIGITS = re.compile(r"^[0-9]{13}$")

ISBN13_PREFIX = "978"


class CodeKind(str, Enum):
    """Kind of primary identifier."""

    ASIN = "ASIN"
    ISBN13 = "ISBN13"


@dataclass(frozen=True)
class ValidatedCode:
    """A product code that passed validation."""

    kind: CodeKind
    value: str

    def __str__(self) -> str:
        return self.value


def isbn13_check_digit(first12: str) -> str:
    """Compute the ISBN-13 check digit for the 12 leading digits.

    Weights alternate 1, 3 from the left; the check digit is
    ``(10 - sum % 10) % 10``.
    """
    total = sum(int(char) * (3 if i % 2 else 1) for i, char in enumerate(first12))
    return str((10 - total % 10) % 10)


def isbn10_to_isbn13(isbn10: str) -> str:
    """
    Convert an ISBN-10 to its ISBN-13 form.

    The ISBN-10 check character is dropped, "978" is prefixed to the nine
    leading digits and a new ISBN-13 check digit is appended.

    Args:
        isbn10: ISBN-10, hyphens allowed

    Returns:
        13-digit ISBN

    Raises:
        InvalidIsbnError: If the input does not hold exactly 10 digits
    """
    digits = isbn10.replace("-", "")
    if not _ISBN10_DIGITS.match(digits):
        raise InvalidIsbnError(value=isbn10)

    first12 = ISBN13_PREFIX + digits[:9]
    return first12 + isbn13_check_digit(first12)


def validate_book_code(asin: str, isbn: str) -> ValidatedCode:
    """
    Validate the product code used to look up a book.

    The ASIN wins when both codes are given.

    Args:
        asin: Amazon ASIN, may be empty
        isbn: ISBN-10 or ISBN-13, may be empty, hyphens allowed

    Returns:
        ValidatedCode tagged ASIN or ISBN13

    Raises:
        MissingCodeError: If both codes are empty
        InvalidAsinError: If the ASIN does not start with "B"
        InvalidIsbnError: If the ISBN is not 10 or 13 digits
    """
    asin = asin.strip() if asin else ""
    isbn = isbn.strip() if isbn else ""

    if not asin and not isbn:
        raise MissingCodeError()

    if asin:
        if not asin.lower().startswith("b"):
            raise InvalidAsinError(value=asin)
        return ValidatedCode(CodeKind.ASIN, asin)

    if not _ISBN_SHAPE.match(isbn):
        raise InvalidIsbnError(value=isbn)

    digits = isbn.replace("-", "")
    if _ISBN10_DIGITS.match(digits):
        converted = isbn10_to_isbn13(digits)
        logger.debug("Converted ISBN-10 %s to ISBN-13 %s", isbn, converted)
        return ValidatedCode(CodeKind.ISBN13, converted)
    if _ISBN13_DIGITS.match(digits):
        return ValidatedCode(CodeKind.ISBN13, digits)

    raise InvalidIsbnError(value=isbn)
