"""Tests for language display name mapping."""

from __future__ import annotations

import pytest

from bookscraper.exceptions import UnknownLanguageError
from bookscraper.languages import LANGUAGE_NAMES, LanguageTag, map_language


class TestMapLanguage:
    """Tests for map_language."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Português", LanguageTag.PORTUGUESE_BR),
            ("Inglês", LanguageTag.ENGLISH),
            ("Espanhol", LanguageTag.SPANISH),
            ("Alemão", LanguageTag.GERMAN),
            ("English", LanguageTag.ENGLISH),
            ("Français", LanguageTag.FRENCH),
        ],
    )
    def test_known_names(self, name: str, expected: LanguageTag) -> None:
        """Known display names map to their tag."""
        assert map_language(name) is expected

    def test_tag_values(self) -> None:
        """Tags use BCP 47 values."""
        assert map_language("Português").value == "pt-BR"
        assert LanguageTag.UNRESOLVED.value == "und"

    @pytest.mark.parametrize("name", ["Klingon", "", "português", "PORTUGUÊS", " Português"])
    def test_unknown_names_rejected(self, name: str) -> None:
        """Lookup is exact and case-sensitive."""
        with pytest.raises(UnknownLanguageError) as exc_info:
            map_language(name)
        assert exc_info.value.language == name
        assert exc_info.value.code == "unknown_language"

    def test_unresolved_never_returned(self) -> None:
        """No display name maps to the unresolved tag."""
        assert LanguageTag.UNRESOLVED not in LANGUAGE_NAMES.values()
