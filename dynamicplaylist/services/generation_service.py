"""Playlist generation: filter tagged tracks and materialize them as a catalog playlist.

Implementation notes:
- Steps run strictly in order (index, filter, create, add, fetch); the first
  failure ends the call and later steps never start.
- A playlist created before a failed add step is left in place.
- The tag-to-tracks index is rebuilt for every call and never shared.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from sqlalchemy.ext.asyncio import AsyncSession

from dynamicplaylist.core.config import settings
from dynamicplaylist.models.tag import Tag
from dynamicplaylist.schema.generation import (
    AddTracksPayload,
    CreatedPlaylist,
    CreatePlaylistPayload,
    GenerateRequest,
    GenerateResponse,
    PlaylistDetails,
)
from dynamicplaylist.services import catalog_client, tag_service, track_filter
from dynamicplaylist.services.catalog_client import CatalogError, CatalogErrorKind

logger = logging.getLogger("dynamicplaylist.services.generation")

TRACK_URI_PREFIX = "spotify:track:"


class GenerationErrorKind(str, enum.Enum):
    BAD_TOKEN = "bad_token"
    BAD_OAUTH_REQUEST = "bad_oauth_request"
    RATE_LIMITED = "rate_limited"
    NO_TRACKS = "no_tracks"
    UNKNOWN = "unknown"


class GenerationError(Exception):
    def __init__(self, kind: GenerationErrorKind) -> None:
        self.kind = kind
        super().__init__(f"Playlist generation failed: {kind.value}")


_CATALOG_TO_GENERATION: dict[CatalogErrorKind, GenerationErrorKind] = {
    CatalogErrorKind.BAD_TOKEN: GenerationErrorKind.BAD_TOKEN,
    CatalogErrorKind.BAD_OAUTH_REQUEST: GenerationErrorKind.BAD_OAUTH_REQUEST,
    CatalogErrorKind.RATE_LIMITED: GenerationErrorKind.RATE_LIMITED,
    CatalogErrorKind.UNKNOWN: GenerationErrorKind.UNKNOWN,
}


def map_catalog_error(error: CatalogError) -> GenerationError:
    """Translate a catalog failure into the generation error of the same kind."""
    return GenerationError(_CATALOG_TO_GENERATION[error.kind])


def build_tag_to_tracks(tags: Iterable[Tag]) -> Mapping[int, tuple[str, ...]]:
    """Fold a user's tags into an immutable tag id -> track ids mapping."""
    return MappingProxyType({tag.id: tuple(tag.tracks) for tag in tags})


def track_uri(track_id: str) -> str:
    return f"{TRACK_URI_PREFIX}{track_id}"


def _batches(uris: list[str]) -> list[list[str]]:
    size = settings.catalog_add_tracks_batch_size
    if not size:
        return [uris]
    return [uris[i : i + size] for i in range(0, len(uris), size)]


async def create_playlist(
    access_token: str, *, user_id: str, name: str, description: str | None
) -> CreatedPlaylist:
    """Create a private playlist owned by ``user_id``."""
    payload = CreatePlaylistPayload(name=name, description=description, public=False)
    return await catalog_client.post(
        f"/users/{user_id}/playlists",
        access_token=access_token,
        body=payload,
        response_model=CreatedPlaylist,
    )


async def add_tracks(access_token: str, *, playlist_id: str, track_ids: list[str]) -> None:
    """Add tracks to a playlist, in one request unless a batch size is configured."""
    uris = [track_uri(track_id) for track_id in track_ids]
    for batch in _batches(uris):
        await catalog_client.post(
            f"/playlists/{playlist_id}/tracks",
            access_token=access_token,
            body=AddTracksPayload(uris=batch),
        )


async def get_playlist(access_token: str, *, playlist_id: str) -> PlaylistDetails:
    return await catalog_client.get(
        f"/playlists/{playlist_id}",
        access_token=access_token,
        response_model=PlaylistDetails,
    )


async def generate(session: AsyncSession, request: GenerateRequest, *, access_token: str) -> GenerateResponse:
    """Filter the user's tagged tracks and build a new private playlist from them."""
    tags = await tag_service.list_tags_for_user(session, request.user_id)
    tag_to_tracks = build_tag_to_tracks(tags)
    try:
        tracks = track_filter.filter_tracks(tag_to_tracks, request.include, request.exclude, request.mode)
    except track_filter.NoTracksError as exc:
        logger.info("No tracks matched for user %s (mode=%s)", request.user_id, request.mode.value)
        raise GenerationError(GenerationErrorKind.NO_TRACKS) from exc

    logger.info(
        "Generating playlist %r for user %s from %d tracks (mode=%s)",
        request.name,
        request.user_id,
        len(tracks),
        request.mode.value,
    )
    try:
        created = await create_playlist(
            access_token, user_id=request.user_id, name=request.name, description=request.description
        )
        await add_tracks(access_token, playlist_id=created.id, track_ids=tracks)
        details = await get_playlist(access_token, playlist_id=created.id)
    except CatalogError as exc:
        logger.warning("Playlist generation for user %s stopped: %s", request.user_id, exc)
        raise map_catalog_error(exc) from exc

    logger.info("Generated playlist %s for user %s", created.id, request.user_id)
    return GenerateResponse(url=details.url, image=details.image)
