"""Shared helpers for API tests."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from dynamicplaylist.models.tag import Tag
from dynamicplaylist.schema.tag import TagCreate
from dynamicplaylist.services import catalog_client, tag_service

CATALOG_BASE = "https://catalog.test/v1"


@dataclass
class FakeCatalog:
    """Routes catalog requests to canned responses and records what was sent."""

    routes: dict[tuple[str, str], httpx.Response | Exception] = field(default_factory=dict)
    calls: list[tuple[str, str, Any]] = field(default_factory=list)

    def add(self, method: str, path: str, status_code: int = 200, payload: Any = None) -> None:
        if payload is None:
            self.routes[(method, path)] = httpx.Response(status_code)
        else:
            self.routes[(method, path)] = httpx.Response(status_code, json=payload)

    def fail(self, method: str, path: str, exc: Exception) -> None:
        self.routes[(method, path)] = exc

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/v1")
        body = json.loads(request.content) if request.content else None
        self.calls.append((request.method, path, body))
        outcome = self.routes.get((request.method, path))
        if outcome is None:
            return httpx.Response(404, json={"error": "unrouted"})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def install(self, monkeypatch) -> "FakeCatalog":
        def _client() -> httpx.AsyncClient:
            return httpx.AsyncClient(base_url=CATALOG_BASE, transport=httpx.MockTransport(self.handler))

        monkeypatch.setattr(catalog_client, "_build_client", _client)
        return self

    def paths(self) -> list[tuple[str, str]]:
        return [(method, path) for method, path, _ in self.calls]


async def make_tag(session, user_id: str, name: str, tracks: list[str] = (), color: int = 1) -> Tag:
    """Create a tag and attach tracks to it."""
    tag = await tag_service.create_tag(session, TagCreate(user_id=user_id, name=name, color=color))
    for track_id in tracks:
        await tag_service.add_track(session, tag.id, track_id)
    return tag
