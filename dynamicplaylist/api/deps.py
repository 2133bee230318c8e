from collections.abc import AsyncIterator

from fastapi import Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from dynamicplaylist.db.session import get_session


async def get_db() -> AsyncIterator[AsyncSession]:
    async for session in get_session():
        yield session


async def get_access_token(authorization: str | None = Header(default=None)) -> str:
    """Take the catalog access token from the last word of the Authorization header."""
    token = authorization.split(" ")[-1].strip() if authorization else ""
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing access token")
    return token
