"""Spotify authorization-code flow helpers.

Invariants:
- Every authorization attempt gets its own unpredictable state nonce, carried
  in a short-lived signed cookie and consumed on callback.
- The callback is accepted only when the returned state equals that nonce.
"""

from __future__ import annotations

import base64
import enum
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import urlencode

import httpx
from jose import JWTError, jwt
from pydantic import BaseModel
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from dynamicplaylist.core.config import settings
from dynamicplaylist.utils.redaction import redact_secrets

logger = logging.getLogger("dynamicplaylist.services.authorization")

STATE_COOKIE_NAME = "oauth_state"
_STATE_TOKEN_TYPE = "oauth_state"


class AuthorizationErrorKind(str, enum.Enum):
    INVALID_OAUTH_STATE = "invalid_oauth_state"
    ACCESS_DENIED = "access_denied"
    AUTHORIZATION_FAILED = "authorization_failed"
    NOT_CONFIGURED = "not_configured"
    UNKNOWN = "unknown"


class AuthorizationError(Exception):
    def __init__(self, kind: AuthorizationErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(detail or kind.value)


class AccessTokenResponse(BaseModel):
    """Token endpoint response; ``refresh_token`` may be absent on refresh grants."""
    access_token: str
    expires_in: int
    refresh_token: str | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_client_credentials() -> tuple[str, str]:
    if not settings.spotify_client_id or not settings.spotify_client_secret:
        raise AuthorizationError(AuthorizationErrorKind.NOT_CONFIGURED, "Spotify credentials missing")
    return settings.spotify_client_id, settings.spotify_client_secret


def new_state() -> tuple[str, str]:
    """Return a fresh state nonce and the signed cookie value that carries it."""
    nonce = secrets.token_urlsafe(32)
    now = _utcnow()
    payload = {
        "nonce": nonce,
        "type": _STATE_TOKEN_TYPE,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.state_ttl_minutes)).timestamp()),
    }
    cookie = jwt.encode(payload, settings.state_secret_key, algorithm=settings.state_algorithm)
    return nonce, cookie


def verify_state(state: str | None, cookie: str | None) -> None:
    """Check the callback state against the nonce stored in the signed cookie."""
    if not state or not cookie:
        raise AuthorizationError(AuthorizationErrorKind.INVALID_OAUTH_STATE, "Missing OAuth state")
    try:
        payload = jwt.decode(cookie, settings.state_secret_key, algorithms=[settings.state_algorithm])
    except JWTError as exc:
        raise AuthorizationError(AuthorizationErrorKind.INVALID_OAUTH_STATE, "Invalid OAuth state") from exc
    nonce = payload.get("nonce")
    if payload.get("type") != _STATE_TOKEN_TYPE or not isinstance(nonce, str):
        raise AuthorizationError(AuthorizationErrorKind.INVALID_OAUTH_STATE, "Invalid OAuth state")
    if not secrets.compare_digest(nonce, state):
        raise AuthorizationError(AuthorizationErrorKind.INVALID_OAUTH_STATE, "OAuth state mismatch")


def build_authorize_url(state: str) -> str:
    """Compose the catalog authorization URL for the user to approve the app."""
    client_id, _ = _require_client_credentials()
    params = {
        "response_type": "code",
        "client_id": client_id,
        "scope": " ".join(settings.spotify_scopes),
        "redirect_uri": settings.spotify_redirect_uri,
        "state": state,
    }
    return f"{settings.catalog_accounts_base.rstrip('/')}/authorize?{urlencode(params)}"


def build_client_redirect_url(tokens: AccessTokenResponse) -> str:
    """Hand the granted tokens to the client as query parameters."""
    params: dict[str, Any] = {"access_token": tokens.access_token, "expires_in": tokens.expires_in}
    if tokens.refresh_token:
        params["refresh_token"] = tokens.refresh_token
    separator = "&" if "?" in settings.client_redirect_uri else "?"
    return f"{settings.client_redirect_uri}{separator}{urlencode(params)}"


def check_callback_error(error: str) -> AuthorizationError:
    """Classify an ``error`` returned by the authorize endpoint."""
    if error == "access_denied":
        return AuthorizationError(AuthorizationErrorKind.ACCESS_DENIED, "User denied authorization")
    return AuthorizationError(AuthorizationErrorKind.AUTHORIZATION_FAILED, f"Authorization failed: {error}")


async def _post_token_request(data: dict[str, str], headers: dict[str, str]) -> httpx.Response:
    url = f"{settings.catalog_accounts_base.rstrip('/')}/api/token"
    # Only connection failures are retried; the request never reached the server.
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(3),
        wait=wait_exponential_jitter(initial=0.5, max=4),
        retry=retry_if_exception_type(httpx.ConnectError),
        reraise=True,
    ):
        with attempt:
            async with httpx.AsyncClient(timeout=15) as client:
                return await client.post(url, data=data, headers=headers)


async def exchange_code_for_token(code: str) -> AccessTokenResponse:
    """Exchange an authorization code for access and refresh tokens."""
    client_id, client_secret = _require_client_credentials()
    auth = base64.b64encode(f"{client_id}:{client_secret}".encode("utf-8")).decode("utf-8")
    data = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": settings.spotify_redirect_uri,
    }
    headers = {"Authorization": f"Basic {auth}"}
    try:
        response = await _post_token_request(data, headers)
    except httpx.HTTPError as exc:
        logger.warning("Token exchange failed in transport: %s", redact_secrets(str(exc)))
        raise AuthorizationError(AuthorizationErrorKind.UNKNOWN, "Token exchange failed") from exc
    if not response.is_success:
        logger.warning("Token exchange returned %s", response.status_code)
        raise AuthorizationError(AuthorizationErrorKind.UNKNOWN, f"Token exchange failed ({response.status_code})")
    try:
        return AccessTokenResponse.model_validate(response.json())
    except ValueError as exc:
        raise AuthorizationError(AuthorizationErrorKind.UNKNOWN, "Malformed token response") from exc
