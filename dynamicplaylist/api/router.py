"""API router composition for all route groups."""

from fastapi import APIRouter

from .routes import generation, library, tags, tracks

api_router = APIRouter()
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
api_router.include_router(tracks.router, prefix="/tracks", tags=["tracks"])
api_router.include_router(library.router, prefix="/library", tags=["library"])
api_router.include_router(generation.router, prefix="/generate", tags=["generate"])
