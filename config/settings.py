"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


# Public key-value store record holding the observed user agent corpus
USER_AGENTS_URL = (
    "https://api.apify.com/v2/key-value-stores/z1V7YjyftOYIqNsww/records/USER-AGENTS"
    "?disableRedirect=true"
)


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="BROWSER_HEADERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Corpus source
    user_agents_url: str = USER_AGENTS_URL
    fetch_timeout: float | None = None  # None leaves the fetch unbounded

    # Default filter criteria for the header composer
    operating_systems: list[str] = ["windows", "linux", "mac"]
    browsers: list[str] = ["chrome", "firefox"]
    min_times_seen: int = 300

    # Caller-side retries around initialize() (CLI only)
    max_retries: int = 3

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None


# Global settings instance
settings = Settings()
