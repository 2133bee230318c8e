"""Playlist generation request/response schemas."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from dynamicplaylist.schema.library import Image, as_list


class FilterMode(str, enum.Enum):
    """How include/exclude predicates combine: conjunctively or disjunctively."""

    ALL = "ALL"
    ANY = "ANY"


class GenerateRequest(BaseModel):
    """Parameters for one playlist generation call."""
    user_id: str = Field(min_length=1)
    include: set[int] = Field(default_factory=set)
    exclude: set[int] = Field(default_factory=set)
    mode: FilterMode
    name: str = Field(min_length=1)
    description: str | None = None

    @field_validator("user_id", "name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Value cannot be blank")
        return value


class GenerateResponse(BaseModel):
    """Web link and artwork of the generated playlist."""
    url: str
    image: Image


class CreatePlaylistPayload(BaseModel):
    name: str
    description: str | None = None
    public: bool = False


class CreatedPlaylist(BaseModel):
    id: str


class AddTracksPayload(BaseModel):
    uris: list[str]


class PlaylistDetails(BaseModel):
    """Playlist metadata reduced to its external URL and first image."""
    url: str
    image: Image

    @model_validator(mode="before")
    @classmethod
    def _from_catalog(cls, data: Any) -> Any:
        if isinstance(data, dict) and "external_urls" in data:
            external_urls = data.get("external_urls")
            if not isinstance(external_urls, dict):
                raise ValueError("Playlist external_urls must be an object")
            images = as_list(data, "images")
            if not images:
                raise ValueError("Playlist has no images")
            return {"url": external_urls.get("spotify"), "image": images[0]}
        return data
