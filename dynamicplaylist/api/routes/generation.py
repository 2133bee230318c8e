from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dynamicplaylist.api.deps import get_access_token, get_db
from dynamicplaylist.api.errors import generation_http_error
from dynamicplaylist.schema.generation import GenerateRequest, GenerateResponse
from dynamicplaylist.services import generation_service
from dynamicplaylist.services.generation_service import GenerationError

router = APIRouter()


@router.post("", response_model=GenerateResponse)
async def generate_playlist(
    payload: GenerateRequest,
    access_token: str = Depends(get_access_token),
    session: AsyncSession = Depends(get_db),
) -> GenerateResponse:
    """Create a playlist from the user's tracks matching the tag filter."""
    try:
        return await generation_service.generate(session, payload, access_token=access_token)
    except GenerationError as exc:
        raise generation_http_error(exc) from exc
