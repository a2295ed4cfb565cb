"""
Helper utilities for OPF generation.

Centralizes name and timestamp formatting shared by the document builder.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

# RFC 3339 in UTC, e.g. 2019-11-01T00:00:00Z
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# XML 1.0: #x9 | #xA | #xD | [#x20-#xD7FF] | [#xE000-#xFFFD] | [#x10000-#x10FFFF]
_XML_INVALID_CHARS = re.compile(r"[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def format_timestamp(value: date | datetime) -> str:
    """
    Format a date or datetime as an RFC 3339 UTC timestamp.

    Naive datetimes are taken as UTC; plain dates as midnight UTC.

    Examples:
        >>> format_timestamp(date(2019, 11, 1))
        '2019-11-01T00:00:00Z'
    """
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def sanitize_xml_text(text: str | None) -> str:
    """Remove control characters that are invalid in XML 1.0."""
    if not text:
        return ""
    return _XML_INVALID_CHARS.sub("", text)


def name_to_file_as(name: str) -> str | None:
    """
    Convert author name to "Last, First" filing format.

    Simple heuristic: assumes last word is surname.
    Returns None for single-word names or names already in filing form.

    Args:
        name: Author name (e.g., "Lourenço Mutarelli")

    Returns:
        Filing format (e.g., "Mutarelli, Lourenço") or None

    Examples:
        >>> name_to_file_as("Lourenço Mutarelli")
        'Mutarelli, Lourenço'
        >>> name_to_file_as("Pelé")
    """
    parts = name.strip().split()

    if len(parts) < 2:
        return None

    if "," in name:
        return None

    # Simple heuristic: last word is surname
    surname = parts[-1]
    given = " ".join(parts[:-1])

    return f"{surname}, {given}"
