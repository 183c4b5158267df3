"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FeedSettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="https://api.flickr.com/services/",
        description="Host serving the public photo feed.",
    )
    path: str = Field(default="feeds/photos_public.gne", min_length=1)
    request_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Override for the transport timeout; httpx default when unset.",
    )

    @field_validator("path")
    @classmethod
    def _strip_leading_slash(cls, value: str) -> str:
        return value.lstrip("/")


class SearchSettings(BaseModel):
    debounce_seconds: float = Field(default=0.5, ge=0)


class LayoutSettings(BaseModel):
    portrait_columns: int = Field(default=3, ge=1)
    landscape_rows: int = Field(default=2, ge=1)
    screen_width: float = Field(default=360, gt=0)
    screen_height: float = Field(default=800, gt=0)
    detail_image_width: int = Field(default=400, ge=1)
    detail_image_height: int = Field(default=300, ge=1)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PHOTOFEED_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__"
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    default_language: str = "en"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    feed: FeedSettings = Field(default_factory=FeedSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)


@lru_cache
def get_settings() -> AppSettings:
    """Return cached settings instance."""

    return AppSettings()


__all__ = [
    "AppSettings",
    "FeedSettings",
    "LayoutSettings",
    "SearchSettings",
    "get_settings",
]
