"""Read-only views of the user's catalog library."""

from __future__ import annotations

from dynamicplaylist.schema.library import SavedTracksResponse, UserProfileResponse
from dynamicplaylist.services import catalog_client


async def get_saved_tracks(access_token: str, *, offset: int = 0, limit: int = 20) -> SavedTracksResponse:
    """Return one page of the user's saved tracks."""
    return await catalog_client.get(
        "/me/tracks",
        access_token=access_token,
        params={"offset": offset, "limit": limit},
        response_model=SavedTracksResponse,
    )


async def get_user_profile(access_token: str) -> UserProfileResponse:
    return await catalog_client.get("/me", access_token=access_token, response_model=UserProfileResponse)
