from __future__ import annotations

import os
import sys
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from partner_portal.config import settings


def _engine_options() -> dict:
    options: dict = {"pool_pre_ping": True}
    # The sync TestClient drives each request on its own event loop; pooled
    # asyncpg connections are bound to the loop that opened them.
    if os.getenv("PYTEST_CURRENT_TEST") or "pytest" in sys.modules:
        options["poolclass"] = NullPool
    return options


engine = create_async_engine(settings.database_url, **_engine_options())
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request; the store commits or rolls back."""

    async with SessionLocal() as session:
        yield session
