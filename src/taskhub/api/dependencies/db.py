"""Database session dependency."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.taskhub.core.db import Database


def get_database(request: Request) -> Database:
    """The Database handle created by the application lifespan."""
    return request.app.state.db  # type: ignore[no-any-return]


async def get_db_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession]:
    """One session per request, returned to the pool on every exit path."""
    async with database.session() as session:
        yield session


DatabaseDep = Annotated[Database, Depends(get_database)]
DBSession = Annotated[AsyncSession, Depends(get_db_session)]
