"""Status codes for each service error kind."""

from __future__ import annotations

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from dynamicplaylist.services.authorization_service import AuthorizationError, AuthorizationErrorKind
from dynamicplaylist.services.catalog_client import CatalogError, CatalogErrorKind
from dynamicplaylist.services.generation_service import GenerationError, GenerationErrorKind
from dynamicplaylist.services.tag_service import TagError, TagErrorKind

TAG_ERROR_STATUS: dict[TagErrorKind, int] = {
    TagErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    TagErrorKind.NAME_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    TagErrorKind.TRACK_ALREADY_TAGGED: status.HTTP_409_CONFLICT,
    TagErrorKind.TRACK_NOT_TAGGED: status.HTTP_404_NOT_FOUND,
}

CATALOG_ERROR_STATUS: dict[CatalogErrorKind, int] = {
    CatalogErrorKind.BAD_TOKEN: status.HTTP_401_UNAUTHORIZED,
    CatalogErrorKind.BAD_OAUTH_REQUEST: status.HTTP_403_FORBIDDEN,
    CatalogErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    CatalogErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERATION_ERROR_STATUS: dict[GenerationErrorKind, int] = {
    GenerationErrorKind.BAD_TOKEN: status.HTTP_401_UNAUTHORIZED,
    GenerationErrorKind.BAD_OAUTH_REQUEST: status.HTTP_403_FORBIDDEN,
    GenerationErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
    GenerationErrorKind.NO_TRACKS: status.HTTP_400_BAD_REQUEST,
    GenerationErrorKind.UNKNOWN: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

AUTHORIZATION_ERROR_STATUS: dict[AuthorizationErrorKind, int] = {
    AuthorizationErrorKind.INVALID_OAUTH_STATE: status.HTTP_400_BAD_REQUEST,
    AuthorizationErrorKind.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    AuthorizationErrorKind.AUTHORIZATION_FAILED: status.HTTP_502_BAD_GATEWAY,
    AuthorizationErrorKind.NOT_CONFIGURED: status.HTTP_503_SERVICE_UNAVAILABLE,
    AuthorizationErrorKind.UNKNOWN: status.HTTP_502_BAD_GATEWAY,
}


def tag_http_error(exc: TagError) -> HTTPException:
    return HTTPException(status_code=TAG_ERROR_STATUS[exc.kind], detail=str(exc))


def catalog_http_error(exc: CatalogError) -> HTTPException:
    return HTTPException(status_code=CATALOG_ERROR_STATUS[exc.kind], detail=exc.kind.value)


def generation_http_error(exc: GenerationError) -> HTTPException:
    return HTTPException(status_code=GENERATION_ERROR_STATUS[exc.kind], detail=exc.kind.value)


def authorization_http_error(exc: AuthorizationError) -> HTTPException:
    return HTTPException(status_code=AUTHORIZATION_ERROR_STATUS[exc.kind], detail=str(exc))


def authorization_error_response(exc: AuthorizationError) -> JSONResponse:
    """Same body as ``authorization_http_error``, as a response that can still carry cookies."""
    return JSONResponse(status_code=AUTHORIZATION_ERROR_STATUS[exc.kind], content={"detail": str(exc)})
