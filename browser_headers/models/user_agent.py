"""User agent corpus models."""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from browser_headers.exceptions import ConfigurationError


DEFAULT_OPERATING_SYSTEMS = ("windows", "linux", "mac")
DEFAULT_BROWSERS = ("chrome", "firefox")


class UserAgentRecord(BaseModel):
    """
    One observed user agent from the corpus.

    Field names follow the corpus wire format through aliases, so records can be
    built straight from the fetched JSON objects.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    user_agent: str = Field(..., alias="userAgent", min_length=1)
    software_name_code: str = Field(..., alias="softwareNameCode")
    operating_system_code: str = Field(..., alias="operatingSystemCode")
    software_version: float | None = Field(default=None, alias="softwareVersion")
    time_seen: int = Field(default=0, alias="timeSeen", ge=0)

    def to_wire_dict(self) -> dict[str, Any]:
        """Convert back to the corpus wire format."""
        return self.model_dump(by_alias=True)


class FilterCriteria(BaseModel):
    """Which corpus records are eligible for the pool."""

    model_config = ConfigDict(frozen=True)

    operating_systems: frozenset[str] = frozenset(DEFAULT_OPERATING_SYSTEMS)
    browsers: frozenset[str] = frozenset(DEFAULT_BROWSERS)
    min_times_seen: int = Field(default=0, ge=0)

    @field_validator("operating_systems", "browsers")
    @classmethod
    def check_tokens(cls, v: frozenset[str]) -> frozenset[str]:
        # An empty set would match nothing and always leave an empty pool
        if not v:
            raise ValueError("at least one token is required")
        if any(not token.strip() for token in v):
            raise ValueError("tokens must not be blank")
        return v

    @classmethod
    def from_options(
        cls,
        operating_systems: Iterable[str] | None = None,
        browsers: Iterable[str] | None = None,
        min_times_seen: int | None = None,
    ) -> "FilterCriteria":
        """
        Build criteria from loose caller options.

        Args:
            operating_systems: Accepted OS code substrings (default: windows, linux, mac)
            browsers: Accepted browser code substrings (default: chrome, firefox)
            min_times_seen: Minimum observation count (default: 0)

        Raises:
            ConfigurationError: If any option is invalid
        """
        data: dict[str, Any] = {}
        if operating_systems is not None:
            data["operating_systems"] = _as_token_set(operating_systems)
        if browsers is not None:
            data["browsers"] = _as_token_set(browsers)
        if min_times_seen is not None:
            data["min_times_seen"] = min_times_seen

        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid filter criteria: {e}") from e


def _as_token_set(tokens: Iterable[str]) -> frozenset[str]:
    # A bare string would otherwise be split into characters
    if isinstance(tokens, str):
        return frozenset([tokens])
    return frozenset(tokens)
