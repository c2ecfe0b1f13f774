"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SERVER_URL = "http://localhost:6070"


class SearchConfig(BaseModel):
    """Search options owned by the embedding layer.

    The core only ever reads a :meth:`snapshot` taken when a search is built,
    so the owner may replace fields at any time.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    query_prefix: str = ""
    server_url: str = Field(
        default=DEFAULT_SERVER_URL,
        description="Base URL of the Zoekt web server; /api/search is appended.",
    )
    shard_max_match_count: int = 100
    max_wall_time_millis: int = 10_000

    def merged(self, overrides: Mapping[str, Any] | None = None) -> SearchConfig:
        """Return a copy with the given fields replaced."""

        if not overrides:
            return self.model_copy()
        return SearchConfig.model_validate({**self.model_dump(), **dict(overrides)})

    def with_query_prefix(self, prefix: str | None) -> SearchConfig:
        return self.merged({"query_prefix": prefix or ""})

    def snapshot(self) -> SearchConfigSnapshot:
        return SearchConfigSnapshot(**self.model_dump())

    def display_items(self) -> list[tuple[str, str]]:
        return [(key, str(value)) for key, value in self.model_dump().items()]


class SearchConfigSnapshot(SearchConfig):
    model_config = ConfigDict(extra="forbid", frozen=True)

    def snapshot(self) -> SearchConfigSnapshot:
        return self


class SearchSettings(SearchConfig):
    """Environment-loaded variant; stray ``ZOEKT_SEARCH__*`` variables are ignored."""

    model_config = ConfigDict(extra="ignore", validate_assignment=True)


class TransportSettings(BaseModel):
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Connection/read bound enforced by the HTTP transport itself.",
    )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ZOEKT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    search: SearchSettings = Field(default_factory=SearchSettings)
    transport: TransportSettings = Field(default_factory=TransportSettings)


@lru_cache
def get_settings() -> AppSettings:
    """Return cached settings instance."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_SERVER_URL",
    "SearchConfig",
    "SearchConfigSnapshot",
    "SearchSettings",
    "TransportSettings",
    "get_settings",
]
