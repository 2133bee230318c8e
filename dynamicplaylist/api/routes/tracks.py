from __future__ import annotations

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from dynamicplaylist.api.deps import get_db
from dynamicplaylist.api.errors import tag_http_error
from dynamicplaylist.models.tag import TRACK_ID_MAX_LENGTH
from dynamicplaylist.schema.tag import TagIDList, TrackTagPayload
from dynamicplaylist.services import tag_service
from dynamicplaylist.services.tag_service import TagError

router = APIRouter()


@router.get("/{track_id}", response_model=TagIDList)
async def list_tags_for_track(
    track_id: str = Path(min_length=1, max_length=TRACK_ID_MAX_LENGTH),
    user_id: str = Query(alias="user", min_length=1),
    session: AsyncSession = Depends(get_db),
) -> TagIDList:
    return TagIDList(tag_ids=await tag_service.list_tag_ids_for_track(session, user_id, track_id))


@router.post("/{track_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, response_model=None)
async def add_tag_to_track(
    payload: TrackTagPayload,
    track_id: str = Path(min_length=1, max_length=TRACK_ID_MAX_LENGTH),
    session: AsyncSession = Depends(get_db),
) -> None:
    try:
        await tag_service.add_track(session, payload.tag_id, track_id)
    except TagError as exc:
        raise tag_http_error(exc) from exc


@router.delete("/{track_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, response_model=None)
async def remove_tag_from_track(
    payload: TrackTagPayload,
    track_id: str = Path(min_length=1, max_length=TRACK_ID_MAX_LENGTH),
    session: AsyncSession = Depends(get_db),
) -> None:
    try:
        await tag_service.remove_track(session, payload.tag_id, track_id)
    except TagError as exc:
        raise tag_http_error(exc) from exc
