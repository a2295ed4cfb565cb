"""Tests for locale-aware publication date parsing."""

from __future__ import annotations

from datetime import date

import pytest

from bookscraper.exceptions import ExtractionError, InvalidDateFormatError
from bookscraper.scraper.dates import MONTH_NAMES_PT_BR, Locale, parse_date, translate_month


class TestTranslateMonth:
    """Tests for month name translation."""

    def test_translates_portuguese_month(self) -> None:
        """Portuguese month names become English names."""
        assert translate_month("1 novembro 2019") == "1 November 2019"

    def test_drops_connectives(self) -> None:
        """The "de" connective is removed."""
        assert translate_month("1 de novembro de 2019") == "1 November 2019"

    def test_case_insensitive_lookup(self) -> None:
        """Capitalized month names are translated too."""
        assert translate_month("15 Março 2020") == "15 March 2020"

    def test_unknown_tokens_untouched(self) -> None:
        """Tokens without a translation pass through."""
        assert translate_month("1 brumário 2019") == "1 brumário 2019"

    def test_table_covers_every_month(self) -> None:
        """The pt-BR table has twelve distinct English targets."""
        assert len(MONTH_NAMES_PT_BR) == 12
        assert len(set(MONTH_NAMES_PT_BR.values())) == 12


class TestParseDate:
    """Tests for parse_date."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1 novembro 2019", date(2019, 11, 1)),
            ("31 dezembro 1999", date(1999, 12, 31)),
            ("7 março 2021", date(2021, 3, 7)),
            ("  29 fevereiro 2020  ", date(2020, 2, 29)),
            ("1 de novembro de 2019", date(2019, 11, 1)),
        ],
    )
    def test_parses_portuguese_dates(self, text: str, expected: date) -> None:
        """pt-BR dates parse to calendar dates."""
        assert parse_date(text) == expected

    def test_parses_english_dates(self) -> None:
        """en-US pages use English month names directly."""
        assert parse_date("1 November 2019", Locale.EN_US) == date(2019, 11, 1)

    def test_english_month_case_normalized(self) -> None:
        """English month names are matched case-insensitively."""
        assert parse_date("1 november 2019", Locale.EN_US) == date(2019, 11, 1)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "novembro 2019",
            "2019-11-01",
            "1 novembro",
            "1 novembro 19",
            "1 brumário 2019",
            "123 novembro 2019",
            "\u0661 novembro \u0662\u0660\u0661\u0669",  # Arabic-Indic digits
        ],
    )
    def test_invalid_format(self, text: str) -> None:
        """Text not matching D Month YYYY raises InvalidDateFormatError."""
        with pytest.raises(InvalidDateFormatError) as exc_info:
            parse_date(text)
        assert exc_info.value.text == text
        assert exc_info.value.code == "invalid_date_format"

    def test_day_out_of_range(self) -> None:
        """Days outside the month are rejected."""
        with pytest.raises(InvalidDateFormatError):
            parse_date("30 fevereiro 2019")

    def test_portuguese_names_rejected_for_english_locale(self) -> None:
        """Month names are only translated for the page locale."""
        with pytest.raises(InvalidDateFormatError):
            parse_date("1 novembro 2019", Locale.EN_US)

    def test_is_extraction_error(self) -> None:
        """Date errors belong to the extraction family."""
        with pytest.raises(ExtractionError):
            parse_date("not a date")
