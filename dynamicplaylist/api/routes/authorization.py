"""Spotify authorization-code flow endpoints.

The first visit redirects to the catalog's consent page with a fresh state
nonce; the catalog then redirects back here with either ``code`` or ``error``.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Cookie, Query, status
from fastapi.responses import RedirectResponse, Response

from dynamicplaylist.api.errors import authorization_error_response, authorization_http_error
from dynamicplaylist.core.config import settings
from dynamicplaylist.services import authorization_service
from dynamicplaylist.services.authorization_service import STATE_COOKIE_NAME, AuthorizationError
from dynamicplaylist.utils.redaction import redact_secrets

logger = logging.getLogger("dynamicplaylist.api.authorization")

router = APIRouter()


def _set_state_cookie(response: RedirectResponse, value: str) -> None:
    response.set_cookie(
        STATE_COOKIE_NAME,
        value,
        max_age=settings.state_ttl_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.environment.lower() == "production",
        path="/authorize",
    )


def _clear_state_cookie(response: Response) -> None:
    response.delete_cookie(STATE_COOKIE_NAME, path="/authorize")


@router.get("/authorize")
async def authorize(
    code: str | None = Query(default=None),
    error: str | None = Query(default=None),
    state: str | None = Query(default=None),
    state_cookie: str | None = Cookie(default=None, alias=STATE_COOKIE_NAME),
) -> Response:
    """Start the authorization flow, or finish it when the catalog redirects back.

    Every callback outcome clears the state cookie, so a nonce is never accepted twice.
    """
    if code is None and error is None:
        try:
            nonce, cookie_value = authorization_service.new_state()
            target = authorization_service.build_authorize_url(nonce)
        except AuthorizationError as exc:
            logger.warning("Authorization could not start (%s): %s", exc.kind.value, exc)
            raise authorization_http_error(exc) from exc
        response = RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
        _set_state_cookie(response, cookie_value)
        return response

    try:
        authorization_service.verify_state(state, state_cookie)
        if error is not None:
            raise authorization_service.check_callback_error(error)
        tokens = await authorization_service.exchange_code_for_token(code)
    except AuthorizationError as exc:
        logger.warning("Authorization failed (%s): %s", exc.kind.value, redact_secrets(str(exc)))
        failure = authorization_error_response(exc)
        _clear_state_cookie(failure)
        return failure

    target = authorization_service.build_client_redirect_url(tokens)
    logger.info("Authorization complete; redirecting to %s", redact_secrets(target))
    response = RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
    _clear_state_cookie(response)
    return response
