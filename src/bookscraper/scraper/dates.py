"""
Locale-aware publication date parsing.

Product pages print the publication date as ``<day> <month-name> <year>``
with the month spelled in the page locale ("1 novembro 2019"). The month
is translated to its English name and the result parsed against the
``D Month YYYY`` grammar.
"""

from __future__ import annotations

import re
from datetime import date
from enum import Enum
from types import MappingProxyType

from bookscraper.exceptions import InvalidDateFormatError


class Locale(str, Enum):
    """Source locales with a month-name table."""

    PT_BR = "pt-BR"
    EN_US = "en-US"


MONTH_NAMES_PT_BR: MappingProxyType[str, str] = MappingProxyType(
    {
        "janeiro": "January",
        "fevereiro": "February",
        "março": "March",
        "abril": "April",
        "maio": "May",
        "junho": "June",
        "julho": "July",
        "agosto": "August",
        "setembro": "September",
        "outubro": "October",
        "novembro": "November",
        "dezembro": "December",
    }
)

_ENGLISH_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_ENGLISH_MONTHS: MappingProxyType[str, int] = MappingProxyType(
    {name: number for number, name in enumerate(_ENGLISH_MONTH_NAMES, start=1)}
)

_MONTH_TABLES: MappingProxyType[Locale, MappingProxyType[str, str]] = MappingProxyType(
    {
        Locale.PT_BR: MONTH_NAMES_PT_BR,
        Locale.EN_US: MappingProxyType({name.lower(): name for name in _ENGLISH_MONTH_NAMES}),
    }
)

_DATE_PATTERN = re.compile(r"^(\d{1,2}) ([A-Za-z]+) (\d{4})$", re.ASCII)

# "1 de novembro de 2019" is printed on some pages
_CONNECTIVES = frozenset({"de"})


def translate_month(text: str, locale: Locale = Locale.PT_BR) -> str:
    """Replace a locale month name with its English name.

    Tokens missing from the table are left untouched.
    """
    table = _MONTH_TABLES[locale]
    tokens = [token for token in text.split() if token.lower() not in _CONNECTIVES]
    return " ".join(table.get(token.lower(), token) for token in tokens)


def parse_date(text: str, locale: Locale = Locale.PT_BR) -> date:
    """
    Parse a locale publication date into a calendar date.

    Args:
        text: Date text, e.g. "1 novembro 2019"
        locale: Locale the month name is written in

    Returns:
        Calendar date

    Raises:
        InvalidDateFormatError: If the text is not ``D Month YYYY`` after
            translation or names a day outside the month
    """
    translated = translate_month(text.strip(), locale)
    match = _DATE_PATTERN.match(translated)
    if not match or match.group(2) not in _ENGLISH_MONTHS:
        raise InvalidDateFormatError(f"invalid date format: {text!r}", text=text)

    day, month_name, year = match.groups()
    try:
        return date(int(year), _ENGLISH_MONTHS[month_name], int(day))
    except ValueError as e:
        raise InvalidDateFormatError(f"invalid date format: {text!r} ({e})", text=text) from e
