from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from dynamicplaylist.api.deps import get_db
from dynamicplaylist.api.errors import tag_http_error
from dynamicplaylist.schema.tag import TagCreate, TagCreated, TagIDList, TagRead, TagUpdate
from dynamicplaylist.services import tag_service
from dynamicplaylist.services.tag_service import TagError

router = APIRouter()


@router.get("", response_model=TagIDList)
async def list_tags_for_user(
    user_id: str = Query(alias="user", min_length=1),
    session: AsyncSession = Depends(get_db),
) -> TagIDList:
    return TagIDList(tag_ids=await tag_service.list_tag_ids_for_user(session, user_id))


@router.get("/{tag_id}", response_model=TagRead)
async def get_tag_endpoint(tag_id: int, session: AsyncSession = Depends(get_db)) -> TagRead:
    try:
        tag = await tag_service.get_tag(session, tag_id)
    except TagError as exc:
        raise tag_http_error(exc) from exc
    return TagRead.model_validate(tag)


@router.post("", response_model=TagCreated)
async def create_tag_endpoint(payload: TagCreate, session: AsyncSession = Depends(get_db)) -> TagCreated:
    try:
        tag = await tag_service.create_tag(session, payload)
    except TagError as exc:
        raise tag_http_error(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return TagCreated(tag_id=tag.id)


@router.put("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response, response_model=None)
async def update_tag_endpoint(
    tag_id: int,
    payload: TagUpdate,
    session: AsyncSession = Depends(get_db),
) -> None:
    try:
        await tag_service.update_tag(session, tag_id, payload)
    except TagError as exc:
        raise tag_http_error(exc) from exc


@router.delete(
    "/{tag_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    response_model=None,
)
async def delete_tag_endpoint(tag_id: int, session: AsyncSession = Depends(get_db)) -> None:
    try:
        await tag_service.delete_tag(session, tag_id)
    except TagError as exc:
        raise tag_http_error(exc) from exc
