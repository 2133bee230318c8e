"""Tag CRUD and track membership services."""

from __future__ import annotations

import enum
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dynamicplaylist.models.tag import Tag, TagTrack
from dynamicplaylist.schema.tag import TagCreate, TagUpdate

logger = logging.getLogger("dynamicplaylist.services.tag")


class TagErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    NAME_ALREADY_EXISTS = "name_already_exists"
    TRACK_ALREADY_TAGGED = "track_already_tagged"
    TRACK_NOT_TAGGED = "track_not_tagged"


class TagError(Exception):
    """Failure of a tag store operation, tagged with its kind."""

    def __init__(
        self,
        kind: TagErrorKind,
        *,
        tag_id: int | None = None,
        user_id: str | None = None,
        name: str | None = None,
        track_id: str | None = None,
    ) -> None:
        self.kind = kind
        self.tag_id = tag_id
        self.user_id = user_id
        self.name = name
        self.track_id = track_id
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.kind is TagErrorKind.NOT_FOUND:
            return f"Tag {self.tag_id} not found"
        if self.kind is TagErrorKind.NAME_ALREADY_EXISTS:
            return f"Tag name {self.name!r} already exists for user {self.user_id}"
        if self.kind is TagErrorKind.TRACK_ALREADY_TAGGED:
            return f"Track {self.track_id} already has tag {self.tag_id}"
        return f"Track {self.track_id} does not have tag {self.tag_id}"


async def _require_tag(session: AsyncSession, tag_id: int) -> Tag:
    tag = await session.get(Tag, tag_id)
    if not tag:
        raise TagError(TagErrorKind.NOT_FOUND, tag_id=tag_id)
    return tag


async def _name_taken(session: AsyncSession, user_id: str, name: str, *, exclude_id: int | None = None) -> bool:
    stmt = select(Tag.id).where(Tag.user_id == user_id, Tag.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Tag.id != exclude_id)
    result = await session.execute(stmt)
    return result.first() is not None


async def get_tag(session: AsyncSession, tag_id: int) -> Tag:
    """Return a tag with its tracks loaded."""
    return await _require_tag(session, tag_id)


async def create_tag(session: AsyncSession, payload: TagCreate) -> Tag:
    """Create a tag; names are unique per user (case-sensitive)."""
    name = payload.name.strip()
    if not name:
        raise ValueError("Tag name cannot be blank")
    if await _name_taken(session, payload.user_id, name):
        raise TagError(TagErrorKind.NAME_ALREADY_EXISTS, user_id=payload.user_id, name=name)
    tag = Tag(
        user_id=payload.user_id,
        name=name,
        color=payload.color,
        description=payload.description,
        track_links=[],
    )
    session.add(tag)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise TagError(TagErrorKind.NAME_ALREADY_EXISTS, user_id=payload.user_id, name=name) from exc
    logger.info("Created tag %s (%r) for user %s", tag.id, name, payload.user_id)
    return tag


async def delete_tag(session: AsyncSession, tag_id: int) -> None:
    """Delete a tag together with its track associations."""
    tag = await _require_tag(session, tag_id)
    await session.delete(tag)
    await session.commit()
    logger.info("Deleted tag %s", tag_id)


async def update_tag(session: AsyncSession, tag_id: int, payload: TagUpdate) -> Tag:
    """Apply the supplied fields; a rename must keep the name unique for the owner."""
    tag = await _require_tag(session, tag_id)
    owner_id = tag.user_id
    name = payload.name.strip() if payload.name is not None else None
    if name is not None and name != tag.name:
        if await _name_taken(session, owner_id, name, exclude_id=tag_id):
            raise TagError(TagErrorKind.NAME_ALREADY_EXISTS, user_id=owner_id, name=name)
        tag.name = name
    if payload.color is not None:
        tag.color = payload.color
    if payload.description is not None:
        tag.description = payload.description
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise TagError(TagErrorKind.NAME_ALREADY_EXISTS, user_id=owner_id, name=name) from exc
    return tag


async def list_tag_ids_for_user(session: AsyncSession, user_id: str) -> list[int]:
    result = await session.execute(select(Tag.id).where(Tag.user_id == user_id).order_by(Tag.id.asc()))
    return list(result.scalars().all())


async def list_tags_for_user(session: AsyncSession, user_id: str) -> list[Tag]:
    """Return every tag owned by a user with tracks hydrated."""
    result = await session.execute(select(Tag).where(Tag.user_id == user_id).order_by(Tag.id.asc()))
    return list(result.scalars().all())


async def list_tag_ids_for_track(session: AsyncSession, user_id: str, track_id: str) -> list[int]:
    """List the user's tags attached to a track."""
    stmt = (
        select(Tag.id)
        .join(TagTrack, TagTrack.tag_id == Tag.id)
        .where(Tag.user_id == user_id, TagTrack.track_id == track_id)
        .order_by(Tag.id.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def add_track(session: AsyncSession, tag_id: int, track_id: str) -> None:
    """Attach a track to a tag."""
    tag = await _require_tag(session, tag_id)
    if track_id in tag.tracks:
        raise TagError(TagErrorKind.TRACK_ALREADY_TAGGED, tag_id=tag_id, track_id=track_id)
    tag.track_links.append(TagTrack(track_id=track_id))
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise TagError(TagErrorKind.TRACK_ALREADY_TAGGED, tag_id=tag_id, track_id=track_id) from exc


async def remove_track(session: AsyncSession, tag_id: int, track_id: str) -> None:
    """Detach a track from a tag."""
    tag = await _require_tag(session, tag_id)
    link = next((link for link in tag.track_links if link.track_id == track_id), None)
    if link is None:
        raise TagError(TagErrorKind.TRACK_NOT_TAGGED, tag_id=tag_id, track_id=track_id)
    tag.track_links.remove(link)
    await session.commit()
