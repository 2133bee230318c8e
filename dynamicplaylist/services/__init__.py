"""Service-layer helpers for API operations."""

from . import (
    authorization_service,
    catalog_client,
    generation_service,
    library_service,
    tag_service,
    track_filter,
)

__all__ = [
    "authorization_service",
    "catalog_client",
    "generation_service",
    "library_service",
    "tag_service",
    "track_filter",
]
