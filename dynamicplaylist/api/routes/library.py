from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from dynamicplaylist.api.deps import get_access_token
from dynamicplaylist.api.errors import catalog_http_error
from dynamicplaylist.schema.library import SavedTracksResponse, UserProfileResponse
from dynamicplaylist.services import library_service
from dynamicplaylist.services.catalog_client import CatalogError

router = APIRouter()


@router.get("/tracks", response_model=SavedTracksResponse)
async def get_saved_tracks(
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=50),
    access_token: str = Depends(get_access_token),
) -> SavedTracksResponse:
    """Proxy one page of the user's saved tracks."""
    try:
        return await library_service.get_saved_tracks(access_token, offset=offset, limit=limit)
    except CatalogError as exc:
        raise catalog_http_error(exc) from exc


@router.get("/profile", response_model=UserProfileResponse)
async def get_user_profile(access_token: str = Depends(get_access_token)) -> UserProfileResponse:
    try:
        return await library_service.get_user_profile(access_token)
    except CatalogError as exc:
        raise catalog_http_error(exc) from exc
