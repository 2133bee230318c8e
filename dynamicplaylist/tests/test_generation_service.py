"""Playlist generation pipeline against a simulated catalog."""

from __future__ import annotations

import pytest

from dynamicplaylist.core.config import settings
from dynamicplaylist.schema.generation import FilterMode, GenerateRequest
from dynamicplaylist.services import generation_service
from dynamicplaylist.services.generation_service import GenerationError, GenerationErrorKind
from dynamicplaylist.tests.utils import FakeCatalog, make_tag

PLAYLIST = {
    "id": "pl1",
    "external_urls": {"spotify": "https://open.spotify.com/playlist/pl1"},
    "images": [
        {"url": "https://i.scdn.co/image/large", "width": 640, "height": 640},
        {"url": "https://i.scdn.co/image/small", "width": 60, "height": 60},
    ],
}


def _request(**overrides) -> GenerateRequest:
    values = {"user_id": "alice", "mode": FilterMode.ALL, "name": "Tagged Mix", "description": "generated"}
    values.update(overrides)
    return GenerateRequest(**values)


def _happy_catalog(monkeypatch) -> FakeCatalog:
    catalog = FakeCatalog().install(monkeypatch)
    catalog.add("POST", "/users/alice/playlists", 201, {"id": "pl1"})
    catalog.add("POST", "/playlists/pl1/tracks", 201, {"snapshot_id": "snap"})
    catalog.add("GET", "/playlists/pl1", 200, PLAYLIST)
    return catalog


async def _seed(session) -> tuple[int, int]:
    first = await make_tag(session, "alice", "Upbeat", tracks=["t1", "t2"])
    second = await make_tag(session, "alice", "Vocal", tracks=["t2", "t3"])
    await make_tag(session, "bob", "Upbeat", tracks=["b1"])
    return first.id, second.id


@pytest.mark.asyncio
async def test_generate_runs_create_add_fetch_in_order(session, monkeypatch):
    upbeat, vocal = await _seed(session)
    catalog = _happy_catalog(monkeypatch)

    result = await generation_service.generate(
        session, _request(include={upbeat}, exclude={vocal}), access_token="tok"
    )

    assert result.url == "https://open.spotify.com/playlist/pl1"
    assert result.image.url == "https://i.scdn.co/image/large"
    assert (result.image.width, result.image.height) == (640, 640)
    assert catalog.paths() == [
        ("POST", "/users/alice/playlists"),
        ("POST", "/playlists/pl1/tracks"),
        ("GET", "/playlists/pl1"),
    ]
    _, _, create_body = catalog.calls[0]
    assert create_body == {"name": "Tagged Mix", "description": "generated", "public": False}
    _, _, add_body = catalog.calls[1]
    assert add_body == {"uris": ["spotify:track:t1"]}


@pytest.mark.asyncio
async def test_generate_ignores_other_users_tags(session, monkeypatch):
    await _seed(session)
    catalog = _happy_catalog(monkeypatch)

    await generation_service.generate(session, _request(), access_token="tok")

    _, _, add_body = catalog.calls[1]
    assert add_body == {"uris": ["spotify:track:t1", "spotify:track:t2", "spotify:track:t3"]}


@pytest.mark.asyncio
async def test_no_tracks_short_circuits_before_network(session, monkeypatch):
    await make_tag(session, "alice", "Empty")
    catalog = FakeCatalog().install(monkeypatch)

    with pytest.raises(GenerationError) as excinfo:
        await generation_service.generate(session, _request(), access_token="tok")

    assert excinfo.value.kind is GenerationErrorKind.NO_TRACKS
    assert catalog.calls == []


@pytest.mark.asyncio
async def test_any_mode_without_filters_reports_no_tracks(session, monkeypatch):
    await _seed(session)
    catalog = FakeCatalog().install(monkeypatch)

    with pytest.raises(GenerationError) as excinfo:
        await generation_service.generate(session, _request(mode=FilterMode.ANY), access_token="tok")

    assert excinfo.value.kind is GenerationErrorKind.NO_TRACKS
    assert catalog.calls == []


@pytest.mark.asyncio
async def test_bad_token_on_create_stops_pipeline(session, monkeypatch):
    await _seed(session)
    catalog = FakeCatalog().install(monkeypatch)
    catalog.add("POST", "/users/alice/playlists", 401, {"error": {"status": 401}})

    with pytest.raises(GenerationError) as excinfo:
        await generation_service.generate(session, _request(), access_token="expired")

    assert excinfo.value.kind is GenerationErrorKind.BAD_TOKEN
    assert catalog.paths() == [("POST", "/users/alice/playlists")]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status_code", "kind"),
    [
        (403, GenerationErrorKind.BAD_OAUTH_REQUEST),
        (429, GenerationErrorKind.RATE_LIMITED),
        (500, GenerationErrorKind.UNKNOWN),
    ],
)
async def test_add_tracks_failure_leaves_playlist_and_skips_fetch(session, monkeypatch, status_code, kind):
    await _seed(session)
    catalog = FakeCatalog().install(monkeypatch)
    catalog.add("POST", "/users/alice/playlists", 201, {"id": "pl1"})
    catalog.add("POST", "/playlists/pl1/tracks", status_code, {"error": {"status": status_code}})

    with pytest.raises(GenerationError) as excinfo:
        await generation_service.generate(session, _request(), access_token="tok")

    assert excinfo.value.kind is kind
    assert catalog.paths() == [("POST", "/users/alice/playlists"), ("POST", "/playlists/pl1/tracks")]


@pytest.mark.asyncio
async def test_playlist_without_images_is_unknown(session, monkeypatch):
    await _seed(session)
    catalog = _happy_catalog(monkeypatch)
    catalog.add("GET", "/playlists/pl1", 200, {**PLAYLIST, "images": []})

    with pytest.raises(GenerationError) as excinfo:
        await generation_service.generate(session, _request(), access_token="tok")

    assert excinfo.value.kind is GenerationErrorKind.UNKNOWN


@pytest.mark.asyncio
async def test_optional_batching_splits_add_requests(session, monkeypatch):
    await _seed(session)
    catalog = _happy_catalog(monkeypatch)
    monkeypatch.setattr(settings, "catalog_add_tracks_batch_size", 2)

    await generation_service.generate(session, _request(), access_token="tok")

    add_bodies = [body for method, path, body in catalog.calls if path == "/playlists/pl1/tracks"]
    assert add_bodies == [
        {"uris": ["spotify:track:t1", "spotify:track:t2"]},
        {"uris": ["spotify:track:t3"]},
    ]


def test_every_catalog_error_kind_has_a_generation_kind():
    from dynamicplaylist.services.catalog_client import CatalogError, CatalogErrorKind

    for kind in CatalogErrorKind:
        mapped = generation_service.map_catalog_error(CatalogError(kind, 418))
        assert mapped.kind.value == kind.value


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"external_urls": "https://open.spotify.com/playlist/pl1"},
        {"images": {"url": "https://i.scdn.co/image/large"}},
        {"images": ["https://i.scdn.co/image/large"]},
    ],
)
async def test_malformed_playlist_details_are_unknown(session, monkeypatch, overrides):
    await _seed(session)
    catalog = _happy_catalog(monkeypatch)
    catalog.add("GET", "/playlists/pl1", 200, {**PLAYLIST, **overrides})

    with pytest.raises(GenerationError) as excinfo:
        await generation_service.generate(session, _request(), access_token="tok")

    assert excinfo.value.kind is GenerationErrorKind.UNKNOWN
