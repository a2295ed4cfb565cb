"""bookscraper - Book metadata scraping and OPF package metadata generation."""

from bookscraper.exceptions import (
    BookScraperError,
    CodeValidationError,
    ConfigurationError,
    DocumentParseError,
    ExtractionError,
    FieldNotFoundError,
    InvalidAsinError,
    InvalidDateFormatError,
    InvalidIsbnError,
    MissingCodeError,
    NetworkError,
    PackageDocumentError,
    UnknownLanguageError,
    UnknownReferenceError,
    UpstreamFetchError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BookScraperError",
    "CodeValidationError",
    "ConfigurationError",
    "DocumentParseError",
    "ExtractionError",
    "FieldNotFoundError",
    "InvalidAsinError",
    "InvalidDateFormatError",
    "InvalidIsbnError",
    "MissingCodeError",
    "NetworkError",
    "PackageDocumentError",
    "UnknownLanguageError",
    "UnknownReferenceError",
    "UpstreamFetchError",
]
