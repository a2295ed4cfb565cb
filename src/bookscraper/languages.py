"""
Language display name to language tag mapping.

Product pages print the book language as a display name in the page
locale ("Português", "Inglês"). Lookup is exact and case-sensitive.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from bookscraper.exceptions import UnknownLanguageError


class LanguageTag(str, Enum):
    """BCP 47 tags for the supported book languages."""

    PORTUGUESE_BR = "pt-BR"
    ENGLISH = "en"
    SPANISH = "es"
    FRENCH = "fr"
    GERMAN = "de"
    ITALIAN = "it"
    UNRESOLVED = "und"


LANGUAGE_NAMES: MappingProxyType[str, LanguageTag] = MappingProxyType(
    {
        # pt-BR page labels
        "Português": LanguageTag.PORTUGUESE_BR,
        "Inglês": LanguageTag.ENGLISH,
        "Espanhol": LanguageTag.SPANISH,
        "Francês": LanguageTag.FRENCH,
        "Alemão": LanguageTag.GERMAN,
        "Italiano": LanguageTag.ITALIAN,
        # English labels
        "Portuguese": LanguageTag.PORTUGUESE_BR,
        "English": LanguageTag.ENGLISH,
        "Spanish": LanguageTag.SPANISH,
        "French": LanguageTag.FRENCH,
        "German": LanguageTag.GERMAN,
        "Italian": LanguageTag.ITALIAN,
        # Endonyms
        "Español": LanguageTag.SPANISH,
        "Français": LanguageTag.FRENCH,
        "Deutsch": LanguageTag.GERMAN,
    }
)


def map_language(text: str) -> LanguageTag:
    """
    Map a language display name to its tag.

    Args:
        text: Display name as printed on the page

    Returns:
        LanguageTag for the name

    Raises:
        UnknownLanguageError: If the name is not in the table
    """
    try:
        return LANGUAGE_NAMES[text]
    except KeyError:
        raise UnknownLanguageError(f"unknown language: {text!r}", language=text) from None
