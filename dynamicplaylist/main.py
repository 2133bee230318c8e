"""FastAPI application entrypoint."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dynamicplaylist.api.router import api_router
from dynamicplaylist.api.routes import authorization
from dynamicplaylist.core.config import settings
from dynamicplaylist.core.logging_config import configure_logging

configure_logging()

app = FastAPI(title=settings.app_name)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router, prefix=settings.api_prefix)
app.include_router(authorization.router, tags=["authorization"])


@app.get("/health", tags=["internal"])
@app.get(f"{settings.api_prefix}/health", tags=["internal"])
async def health() -> dict[str, str]:
    return {"status": "ok"}
