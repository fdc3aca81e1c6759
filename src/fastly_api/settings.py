"""Fastly API configuration settings.

Environment-based configuration for Fastly API authentication and defaults.
"""


from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.fastly.com"
MAX_PAGE_SIZE = 100


class FastlyAPISettings(BaseSettings):
    """Configuration for Fastly API client.

    All settings can be configured via environment variables or .env file.

    Attributes:
        fastly_api_key: API token sent in the Fastly-Key header
        fastly_api_url: Base URL of the Fastly API
        fastly_service_id: Optional default service identifier
        request_timeout: HTTP request timeout in seconds
        default_page_size: Page size used by paginators when none is given
        user_agent: User-Agent header sent with every request
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # Required authentication
    fastly_api_key: SecretStr = Field(
        ...,
        alias="FASTLY_API_KEY",
        description="Fastly API token with required permissions",
    )

    fastly_api_url: str = Field(
        default=DEFAULT_API_URL,
        alias="FASTLY_API_URL",
        description="Base URL of the Fastly API",
    )
    fastly_service_id: str | None = Field(
        default=None,
        alias="FASTLY_SERVICE_ID",
        description="Default service ID for service-scoped operations",
    )

    # Client configuration
    request_timeout: int = Field(
        default=30,
        alias="FASTLY_REQUEST_TIMEOUT",
        description="HTTP request timeout in seconds",
    )
    default_page_size: int = Field(
        default=MAX_PAGE_SIZE,
        alias="FASTLY_DEFAULT_PAGE_SIZE",
        description="Page size for paginated list endpoints",
    )
    user_agent: str = Field(
        default="fastly-api-python/0.1.0",
        alias="FASTLY_USER_AGENT",
        description="User-Agent header value",
    )

    @field_validator("fastly_api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an http(s) URL and strip any trailing slash."""
        if not v.startswith(("http://", "https://")):
            msg = f"Invalid API URL: {v}. Must start with http:// or https://"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("default_page_size")
    @classmethod
    def validate_page_size(cls, v: int) -> int:
        """Validate page size is within the API limit."""
        if not 1 <= v <= MAX_PAGE_SIZE:
            msg = f"default_page_size must be between 1 and {MAX_PAGE_SIZE}"
            raise ValueError(msg)
        return v

    def get_key_value(self) -> str:
        """Get the API key as a plain string.

        Returns:
            The API key value.
        """
        return self.fastly_api_key.get_secret_value()


_settings_instance: FastlyAPISettings | None = None


def get_fastly_api_settings() -> FastlyAPISettings:
    """Get default settings (singleton, reads from environment).

    Returns:
        FastlyAPISettings instance.

    Raises:
        ValidationError: If required environment variables are missing.
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = FastlyAPISettings()
    return _settings_instance


def reset_settings() -> None:
    """Reset singleton (for testing)."""
    global _settings_instance
    _settings_instance = None
