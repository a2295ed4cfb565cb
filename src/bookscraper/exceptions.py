"""
Bookscraper exception hierarchy.

Provides typed exceptions for better error handling and clearer error messages.
Every concrete error carries a stable machine-readable ``code``.

Exception Hierarchy:
    BookScraperError (base)
    ├── ConfigurationError - Missing or invalid settings
    ├── CodeValidationError - Product code validation failures
    │   ├── MissingCodeError - Neither ASIN nor ISBN supplied
    │   ├── InvalidAsinError - ASIN not in digital-edition form
    │   └── InvalidIsbnError - ISBN not 10 or 13 digits
    ├── ExtractionError - Product page extraction failures
    │   ├── InvalidDateFormatError - Publication date not parseable
    │   ├── UnknownLanguageError - Language name not in the table
    │   ├── FieldNotFoundError - Required field missing from the page
    │   └── DocumentParseError - Page content could not be parsed
    ├── PackageDocumentError - OPF document construction failures
    │   └── UnknownReferenceError - refines target not in the document
    └── NetworkError - External service communication failures
        └── UpstreamFetchError - Browserless page retrieval failures
"""

from __future__ import annotations

from typing import Any


class BookScraperError(Exception):
    """Base exception for all bookscraper errors."""

    code: str = "bookscraper_error"

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """
        Initialize bookscraper exception.

        Args:
            message: Human-readable error message
            details: Optional structured error details for logging/debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(BookScraperError):
    """Settings error."""

    code = "configuration_error"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details=details)
        self.field = field


# =============================================================================
# Code Validation Errors
# =============================================================================


class CodeValidationError(BookScraperError):
    """Product code (ASIN/ISBN) validation failure."""

    code = "invalid_code"

    def __init__(
        self,
        message: str,
        *,
        value: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if value:
            details["value"] = value
        super().__init__(message, details=details)
        self.value = value


class MissingCodeError(CodeValidationError):
    """Neither ASIN nor ISBN was supplied."""

    code = "missing_code"

    def __init__(self, message: str = "ASIN or ISBN-13 codes are mandatory", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class InvalidAsinError(CodeValidationError):
    """ASIN does not denote a digital edition."""

    code = "invalid_asin"

    def __init__(self, message: str = "invalid ASIN code", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class InvalidIsbnError(CodeValidationError):
    """ISBN is not a 10 or 13 digit code."""

    code = "invalid_isbn"

    def __init__(self, message: str = "invalid ISBN code", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


# =============================================================================
# Extraction Errors
# =============================================================================


class ExtractionError(BookScraperError):
    """Product page extraction failure."""

    code = "extraction_error"


class InvalidDateFormatError(ExtractionError):
    """Publication date text does not match ``D Month YYYY``."""

    code = "invalid_date_format"

    def __init__(self, message: str, *, text: str | None = None, **kwargs: Any) -> None:
        details = kwargs.pop("details", None) or {}
        if text is not None:
            details["text"] = text
        super().__init__(message, details=details, **kwargs)
        self.text = text


class UnknownLanguageError(ExtractionError):
    """Language display name is not in the supported table."""

    code = "unknown_language"

    def __init__(self, message: str, *, language: str | None = None, **kwargs: Any) -> None:
        details = kwargs.pop("details", None) or {}
        if language is not None:
            details["language"] = language
        super().__init__(message, details=details, **kwargs)
        self.language = language


class FieldNotFoundError(ExtractionError):
    """A required field could not be located on the page."""

    code = "field_not_found"

    def __init__(self, field_name: str, message: str | None = None, **kwargs: Any) -> None:
        details = kwargs.pop("details", None) or {}
        details["field"] = field_name
        super().__init__(message or f"field not found: {field_name}", details=details, **kwargs)
        self.field_name = field_name


class DocumentParseError(ExtractionError):
    """Fetched page content could not be parsed."""

    code = "document_parse_failed"


# =============================================================================
# Package Document Errors
# =============================================================================


class PackageDocumentError(BookScraperError):
    """OPF package document construction failure."""

    code = "package_document_error"


class UnknownReferenceError(PackageDocumentError):
    """Element reference does not belong to the document."""

    code = "unknown_reference"

    def __init__(self, message: str, *, ref_id: str | None = None, **kwargs: Any) -> None:
        details = kwargs.pop("details", None) or {}
        if ref_id:
            details["ref_id"] = ref_id
        super().__init__(message, details=details, **kwargs)
        self.ref_id = ref_id


# =============================================================================
# Network Errors
# =============================================================================


class NetworkError(BookScraperError):
    """External service communication failure."""

    code = "network_error"

    def __init__(
        self,
        message: str,
        *,
        service: str | None = None,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if service:
            details["service"] = service
        if url:
            details["url"] = url
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, details=details)
        self.service = service
        self.url = url
        self.status_code = status_code


class UpstreamFetchError(NetworkError):
    """Rendered page retrieval through browserless failed."""

    code = "upstream_fetch_failed"

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("service", "browserless")
        super().__init__(message, **kwargs)

