"""Tagging-related request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from dynamicplaylist.models.tag import TAG_COLORS
from dynamicplaylist.schema.base import ORMModel


def _check_name(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("Tag name cannot be blank")
    return value


def _check_color(value: int | None) -> int | None:
    if value is not None and value not in TAG_COLORS:
        raise ValueError(f"Color must be one of {sorted(TAG_COLORS)}")
    return value


class TagCreate(BaseModel):
    """Payload for creating a new tag."""
    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1, max_length=64)
    color: int
    description: str = ""

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        return _check_name(value)

    @field_validator("color")
    @classmethod
    def _color_in_palette(cls, value: int) -> int:
        return _check_color(value)


class TagUpdate(BaseModel):
    """Partial tag update; omitted or null fields are left unchanged."""
    name: str | None = Field(default=None, min_length=1, max_length=64)
    color: int | None = None
    description: str | None = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str | None) -> str | None:
        return _check_name(value)

    @field_validator("color")
    @classmethod
    def _color_in_palette(cls, value: int | None) -> int | None:
        return _check_color(value)


class TagRead(ORMModel):
    """Tag representation returned by the API."""
    id: int
    user_id: str
    name: str
    color: int
    description: str = ""
    tracks: list[str] = Field(default_factory=list)


class TagCreated(BaseModel):
    tag_id: int


class TagIDList(BaseModel):
    """Tag identifiers for a user or a track, in storage order."""
    tag_ids: list[int]


class TrackTagPayload(BaseModel):
    """Payload for attaching or detaching a tag on a track."""
    tag_id: int = Field(gt=0)
