"""Database infrastructure.

Exposes:
  - metadata:          SQLAlchemy MetaData instance shared across all table
                       definitions and Alembic autogenerate.
  - create_engine():   Builds the async engine for a database URL.
  - get_connection():  Async context manager that yields a transactional
                       AsyncConnection from an engine.

The engine is created once in the application lifespan and handed to the
repository explicitly; nothing in this module holds a process-wide handle.

Usage in repositories:
    async with get_connection(self._engine) as conn:
        result = await conn.execute(stmt)
        # Connection is committed on clean exit.
        # Rolled back automatically on exception.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine

# Shared MetaData instance. All SQLAlchemy Table objects must be constructed
# with this metadata so that Alembic's autogenerate can discover them.
metadata: MetaData = MetaData()


def create_engine(database_url: str) -> AsyncEngine:
    """Return a new async engine for ``database_url``.

    Args:
        database_url: An async SQLAlchemy URL, e.g.
            ``sqlite+aiosqlite:///db.sqlite``.
    """
    return create_async_engine(database_url, echo=False)


@asynccontextmanager
async def get_connection(engine: AsyncEngine) -> AsyncGenerator[AsyncConnection, None]:
    """Yield a transactional AsyncConnection from ``engine``.

    The connection is automatically committed on clean exit and rolled back
    if an exception is raised, then returned to the pool in both cases.

    Raises:
        Any SQLAlchemy exception propagated from the driver. Callers
        (services) are responsible for mapping these to domain exceptions.
    """
    async with engine.begin() as conn:
        yield conn
