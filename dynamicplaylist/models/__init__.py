"""SQLAlchemy ORM models for the Dynamic Playlist API."""

from dynamicplaylist.models.tag import TAG_COLORS, Tag, TagTrack

__all__ = ["TAG_COLORS", "Tag", "TagTrack"]
