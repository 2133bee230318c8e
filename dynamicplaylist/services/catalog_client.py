"""Authenticated JSON exchanges with the remote catalog (Spotify Web API).

Invariants:
- One call is one HTTP exchange; nothing is retried here.
- Every failure surfaces as a ``CatalogError`` whose ``kind`` is derived from
  the response status, or ``UNKNOWN`` for transport and decode failures.
- Access tokens are never written to logs.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from dynamicplaylist.core.config import settings

logger = logging.getLogger("dynamicplaylist.services.catalog_client")

ModelT = TypeVar("ModelT", bound=BaseModel)


class CatalogErrorKind(str, enum.Enum):
    BAD_TOKEN = "bad_token"
    BAD_OAUTH_REQUEST = "bad_oauth_request"
    RATE_LIMITED = "rate_limited"
    UNKNOWN = "unknown"


_STATUS_KINDS: dict[int, CatalogErrorKind] = {
    401: CatalogErrorKind.BAD_TOKEN,
    403: CatalogErrorKind.BAD_OAUTH_REQUEST,
    429: CatalogErrorKind.RATE_LIMITED,
}


class CatalogError(Exception):
    """A failed catalog exchange; ``status_code`` is None when no usable response arrived."""

    def __init__(self, kind: CatalogErrorKind, status_code: int | None = None, detail: str | None = None) -> None:
        self.kind = kind
        self.status_code = status_code
        message = f"Catalog API error {kind.value}"
        if status_code is not None:
            message = f"{message} ({status_code})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


def classify_status(status_code: int) -> CatalogErrorKind:
    """Map a non-2xx status to its error kind."""
    return _STATUS_KINDS.get(status_code, CatalogErrorKind.UNKNOWN)


def _build_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.catalog_api_base,
        timeout=httpx.Timeout(settings.catalog_http_timeout_seconds),
    )


async def request(
    method: str,
    path: str,
    *,
    access_token: str,
    params: dict[str, Any] | None = None,
    json: dict[str, Any] | None = None,
    response_model: type[ModelT] | None = None,
) -> ModelT | Any:
    """Issue one catalog request and decode its JSON body.

    When ``response_model`` is given the body is validated into it; otherwise the
    decoded JSON (or None for an empty body) is returned.
    """
    headers = {"Authorization": f"Bearer {access_token}"}
    try:
        async with _build_client() as client:
            response = await client.request(method, path, headers=headers, params=params, json=json)
    except httpx.HTTPError as exc:
        logger.warning("Catalog %s %s failed in transport: %s", method, path, type(exc).__name__)
        raise CatalogError(CatalogErrorKind.UNKNOWN, detail=str(exc)) from exc

    if not response.is_success:
        kind = classify_status(response.status_code)
        logger.warning("Catalog %s %s returned %s (%s)", method, path, response.status_code, kind.value)
        raise CatalogError(kind, response.status_code)

    if not response.content:
        if response_model is not None:
            raise CatalogError(CatalogErrorKind.UNKNOWN, response.status_code, "empty response body")
        return None
    try:
        payload = response.json()
    except ValueError as exc:
        logger.warning("Catalog %s %s returned undecodable JSON", method, path)
        raise CatalogError(CatalogErrorKind.UNKNOWN, response.status_code, "invalid JSON") from exc
    if response_model is None:
        return payload
    try:
        return response_model.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Catalog %s %s returned an unexpected shape for %s", method, path, response_model.__name__)
        raise CatalogError(CatalogErrorKind.UNKNOWN, response.status_code, "unexpected response shape") from exc


async def get(
    path: str,
    *,
    access_token: str,
    params: dict[str, Any] | None = None,
    response_model: type[ModelT] | None = None,
) -> ModelT | Any:
    return await request("GET", path, access_token=access_token, params=params, response_model=response_model)


async def post(
    path: str,
    *,
    access_token: str,
    body: BaseModel | dict[str, Any],
    response_model: type[ModelT] | None = None,
) -> ModelT | Any:
    payload = body.model_dump() if isinstance(body, BaseModel) else body
    return await request("POST", path, access_token=access_token, json=payload, response_model=response_model)
