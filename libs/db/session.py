from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """
    Yield a session wrapped in a single transaction.

    Commits when the block exits cleanly and rolls back on error.
    """
    async with session_factory() as session:
        async with session.begin():
            yield session
