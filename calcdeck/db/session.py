"""Scoped Session Factory — explicitly owned engine for scripts outside FastAPI.

Invariants:
    - The engine created here is disposed when the scope exits, even on error
    - Nothing here touches the web app's db_manager singleton

Design Decisions:
    - Seed scripts and one-off jobs get their own engine so they can run while
      the API is up, and tests can point them at an in-memory database
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker


@asynccontextmanager
async def scoped_session_factory(
    database_url: str,
) -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """Yield a session factory bound to a fresh engine; dispose the engine on exit."""
    engine = create_async_engine(database_url, echo=False)
    try:
        yield async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )
    finally:
        await engine.dispose()
