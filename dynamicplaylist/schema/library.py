"""Catalog library shapes decoded from saved-track and profile responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


def as_list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{key} must be a list")
    return value


class Image(BaseModel):
    """Artwork reference; the catalog may omit dimensions."""
    url: str
    width: int | None = None
    height: int | None = None


class Album(BaseModel):
    name: str
    image: Image | None = None

    @model_validator(mode="before")
    @classmethod
    def _first_image(cls, data: Any) -> Any:
        if isinstance(data, dict) and "images" in data:
            images = as_list(data, "images")
            return {"name": data.get("name"), "image": images[0] if images else None}
        return data


class Track(BaseModel):
    id: str
    name: str
    album: Album
    artists: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _artist_names(cls, data: Any) -> Any:
        if isinstance(data, dict):
            artists = as_list(data, "artists")
            names = [artist.get("name") if isinstance(artist, dict) else artist for artist in artists]
            return {**data, "artists": names}
        return data


class SavedTracksResponse(BaseModel):
    """A page of the user's saved tracks."""
    count: int
    tracks: list[Track]

    @model_validator(mode="before")
    @classmethod
    def _unwrap_items(cls, data: Any) -> Any:
        if isinstance(data, dict) and "items" in data:
            items = as_list(data, "items")
            if not all(isinstance(item, dict) for item in items):
                raise ValueError("Saved track items must be objects")
            return {"count": data.get("total"), "tracks": [item.get("track") for item in items]}
        return data


class UserProfileResponse(BaseModel):
    id: str
    display_name: str | None = None
