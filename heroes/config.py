"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="http://localhost:8000/",
        description="Root URL of the remote hero data service.",
    )
    heroes_path: str = Field(default="api/heroes", min_length=1)
    request_timeout_seconds: int = Field(default=10, ge=1, le=60)

    @field_validator("heroes_path", mode="before")
    @classmethod
    def _strip_slashes(cls, value):
        if isinstance(value, str):
            return value.strip().strip("/")
        return value

    def collection_url(self) -> str:
        return f"{str(self.base_url).rstrip('/')}/{self.heroes_path}"


class SearchSettings(BaseModel):
    debounce_seconds: float = Field(default=0.3, ge=0, le=5)


class HeroSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="HEROES_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__"
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    max_messages: int | None = Field(default=None, ge=1)
    use_in_memory_backend: bool = True

    api: ApiSettings = Field(default_factory=ApiSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)


@lru_cache
def get_settings() -> HeroSettings:
    """Return cached settings instance."""

    return HeroSettings()


__all__ = [
    "ApiSettings",
    "HeroSettings",
    "SearchSettings",
    "get_settings",
]
