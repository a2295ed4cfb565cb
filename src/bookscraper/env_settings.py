"""Environment-based settings using pydantic-settings.

This module provides type-safe environment variable loading with validation.

Usage:
    from bookscraper.env_settings import get_env_settings

    env = get_env_settings()
    print(env.browserless.url)  # From BROWSERLESS_URL env var

Environment Variables:
    Browserless:
        BROWSERLESS_URL - Headless browser service URL (default: "https://chrome.browserless.io")
        BROWSERLESS_TOKEN - Access token (optional, usually passed per request)
        BROWSERLESS_TIMEOUT_SECONDS - Request timeout (default: 30)
        BROWSERLESS_MAX_RETRIES - Retries after the first attempt (default: 2)
        BROWSERLESS_RETRY_BASE_DELAY - Initial retry delay in seconds (default: 1.0)

    Scraper:
        SCRAPER_PRODUCT_URL - Product page template with {code} placeholder
        SCRAPER_LOCALE - Locale of the product page (default: "pt-BR")

    OPF:
        OPF_VERSION - Package document version (default: "3.0")
        OPF_MODIFIED_VERSIONS - Comma-separated versions stamped with dcterms:modified

    Application:
        BOOKSCRAPER_ENV - Environment name; "development" enables Flask debug mode
        LOG_LEVEL - Console logging level (default: "WARNING")
        LOG_FILE - Optional file receiving DEBUG logs
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from bookscraper.exceptions import ConfigurationError
from bookscraper.scraper.dates import Locale


def _validate_url_field(v: str, field_name: str) -> str:
    """Validate URL format (shared validator).

    Args:
        v: The URL value to validate.
        field_name: Name of the field for error messages.

    Returns:
        The validated URL with trailing slash stripped.

    Raises:
        ValueError: If URL doesn't start with http:// or https://.
    """
    if v and not v.startswith(("http://", "https://")):
        raise ValueError(f"{field_name} must start with http:// or https://, got: {v}")
    return v.rstrip("/") if v else v


class BrowserlessEnvSettings(BaseSettings):
    """Headless browser service settings from environment variables.

    Reads from BROWSERLESS_URL, BROWSERLESS_TOKEN, BROWSERLESS_TIMEOUT_SECONDS,
    BROWSERLESS_MAX_RETRIES env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="BROWSERLESS_",
        extra="ignore",
    )

    url: str = Field(
        default="https://chrome.browserless.io",
        description="Browserless service URL",
    )
    token: str = Field(default="", description="Browserless access token")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Request timeout")
    max_retries: int = Field(default=2, ge=0, description="Retries after the first attempt")
    retry_base_delay: float = Field(default=1.0, ge=0, description="Initial retry delay")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate browserless URL format."""
        return _validate_url_field(v, "BROWSERLESS_URL")


class ScraperEnvSettings(BaseSettings):
    """Product page settings from environment variables.

    Reads from SCRAPER_PRODUCT_URL, SCRAPER_LOCALE env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCRAPER_",
        extra="ignore",
    )

    product_url: str = Field(
        default="https://www.amazon.com.br/dp/{code}",
        description="Product page URL template",
    )
    locale: Locale = Field(default=Locale.PT_BR, description="Product page locale")

    @field_validator("product_url")
    @classmethod
    def validate_product_url(cls, v: str) -> str:
        """Require the {code} placeholder in the template."""
        _validate_url_field(v, "SCRAPER_PRODUCT_URL")
        if "{code}" not in v:
            raise ValueError(f"SCRAPER_PRODUCT_URL must contain {{code}}, got: {v}")
        return v


class OpfEnvSettings(BaseSettings):
    """Package document settings from environment variables.

    Reads from OPF_VERSION, OPF_MODIFIED_VERSIONS env vars.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPF_",
        extra="ignore",
    )

    version: str = Field(default="3.0", description="Package document version")
    modified_versions: Annotated[frozenset[str], NoDecode] = Field(
        default=frozenset({"3.0"}),
        description="Versions that receive a dcterms:modified meta",
    )

    @field_validator("modified_versions", mode="before")
    @classmethod
    def split_versions(cls, v: str | frozenset[str] | list[str]) -> frozenset[str]:
        """Accept a comma-separated string."""
        if isinstance(v, str):
            return frozenset(part.strip() for part in v.split(",") if part.strip())
        return frozenset(v)


class AppEnvSettings(BaseSettings):
    """Application-level settings from environment variables.

    Reads from BOOKSCRAPER_ENV, LOG_LEVEL, LOG_FILE env vars.
    """

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    env: str = Field(
        default="production",
        validation_alias="BOOKSCRAPER_ENV",
        description="Environment name (development/production)",
    )
    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Logging level",
    )
    log_file: Path | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File receiving DEBUG logs",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}, got: {v}")
        return upper

    @field_validator("log_file", mode="before")
    @classmethod
    def empty_log_file_is_none(cls, v: object) -> object:
        """Treat an empty LOG_FILE as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_development(self) -> bool:
        """Whether BOOKSCRAPER_ENV names a development environment."""
        return self.env.strip().lower() in {"dev", "development"}


class EnvSettings(BaseSettings):
    """Combined environment settings.

    Use get_env_settings() to get a cached instance.

    Example:
        env = get_env_settings()
        print(env.browserless.url)
        print(env.scraper.product_url)
        print(env.opf.version)
        print(env.app.log_level)
    """

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    browserless: BrowserlessEnvSettings = Field(default_factory=BrowserlessEnvSettings)
    scraper: ScraperEnvSettings = Field(default_factory=ScraperEnvSettings)
    opf: OpfEnvSettings = Field(default_factory=OpfEnvSettings)
    app: AppEnvSettings = Field(default_factory=AppEnvSettings)


@lru_cache(maxsize=1)
def get_env_settings() -> EnvSettings:
    """Get cached environment settings.

    Returns:
        EnvSettings instance with all environment-based configuration.

    Raises:
        ConfigurationError: If an environment variable fails validation.
    """
    try:
        return EnvSettings()
    except PydanticValidationError as e:
        raise ConfigurationError(f"invalid environment settings: {e}") from e


def clear_env_settings_cache() -> None:
    """Clear the cached environment settings.

    Useful for testing to ensure fresh settings are loaded.
    """
    get_env_settings.cache_clear()


def load_env_settings_from_file(env_file: Path) -> EnvSettings:
    """Load environment settings from a specific .env file.

    Args:
        env_file: Path to .env file to load.

    Returns:
        EnvSettings instance with configuration from the file.
    """
    from dotenv import load_dotenv

    load_dotenv(env_file, override=True)

    clear_env_settings_cache()
    return get_env_settings()
