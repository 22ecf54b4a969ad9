"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from sesame.core.config import DatabaseSettings
from sesame.infrastructure.database.base import Base


def build_engine(settings: DatabaseSettings) -> AsyncEngine:
    engine_kwargs: dict[str, Any] = {"echo": settings.echo}
    if not settings.url.startswith("sqlite"):
        engine_kwargs["pool_pre_ping"] = True
    return create_async_engine(settings.url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create database tables in development mode (migrations preferred)."""
    from sesame.db import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
