"""Tag model and its track membership table."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dynamicplaylist.db.base_class import Base

TRACK_ID_MAX_LENGTH = 64

# Keys are stored on the tag; names are what the client renders.
TAG_COLORS: dict[int, str] = {
    1: "gray",
    2: "red",
    3: "orange",
    4: "yellow",
    5: "green",
    6: "teal",
    7: "blue",
    8: "purple",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Tag(Base):
    """A user-defined label attachable to catalog tracks."""
    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_user_tag_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    color: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    track_links: Mapped[list["TagTrack"]] = relationship(
        back_populates="tag",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="TagTrack.id",
    )

    @property
    def tracks(self) -> list[str]:
        """Track identifiers attached to this tag, in insertion order."""
        return [link.track_id for link in self.track_links]


class TagTrack(Base):
    __tablename__ = "tag_tracks"
    __table_args__ = (UniqueConstraint("tag_id", "track_id", name="uq_tag_track"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tag_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False, index=True
    )
    track_id: Mapped[str] = mapped_column(String(TRACK_ID_MAX_LENGTH), nullable=False, index=True)

    tag: Mapped[Tag] = relationship(back_populates="track_links")
