"""Pydantic models for photo feed payloads."""

from __future__ import annotations

from pydantic import AliasPath, BaseModel, ConfigDict, Field


class PhotoItem(BaseModel):
    """One entry of the public photo feed.

    The feed nests the image URL under ``media.m`` and ships the description
    as an HTML fragment; both are flattened here.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    title: str
    image_url: str = Field(validation_alias=AliasPath("media", "m"))
    author: str
    tags: str
    description_html: str = Field(validation_alias="description")

    @property
    def tag_list(self) -> list[str]:
        return self.tags.split()


class SearchResult(BaseModel):
    """Ordered batch of photos returned by a single successful fetch."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    items: tuple[PhotoItem, ...]

    def __len__(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items


__all__ = ["PhotoItem", "SearchResult"]
