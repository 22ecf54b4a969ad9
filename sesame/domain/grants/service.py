"""Grant store: the durable record of paid, not yet used door openings."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sesame.infrastructure.database.repositories.grant_repository import SqlGrantRepository

from .exceptions import StoreUnavailable
from .models import Grant
from .repository import GrantRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GrantStore:
    """Keyed set of access grants.

    Every call runs in its own short transaction taken from ``session_factory``
    so the store can be shared by request handlers and background watchers.
    Database and driver connection failures surface as :class:`StoreUnavailable`.
    """

    session_factory: async_sessionmaker[AsyncSession]
    repository_factory: Callable[[AsyncSession], GrantRepository] = field(default=SqlGrantRepository)

    @asynccontextmanager
    async def _repository(self) -> AsyncIterator[GrantRepository]:
        try:
            async with self.session_factory() as session:
                try:
                    yield self.repository_factory(session)
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailable(f"grant store unavailable: {exc}") from exc

    async def count_pending(self) -> int:
        async with self._repository() as repository:
            return await repository.count_pending()

    async def list_pending(self) -> list[str]:
        async with self._repository() as repository:
            return list(await repository.list_pending_ids())

    async def mark_consumed(self, grant_ids: Iterable[str]) -> int:
        ids = set(grant_ids)
        if not ids:
            return 0
        async with self._repository() as repository:
            updated = await repository.mark_consumed(ids, datetime.now(timezone.utc))
        logger.info("Grants consumed", extra={"grant_ids": sorted(ids), "count": updated})
        return updated

    async def create(self, invoice_id: str) -> Grant:
        async with self._repository() as repository:
            existing = await repository.get_by_invoice(invoice_id)
            if existing is not None:
                logger.warning("Grant already exists for invoice", extra={"invoice_id": invoice_id})
                return Grant.from_orm(existing)
            model = await repository.create(invoice_id)
            grant = Grant.from_orm(model)
        logger.info("Grant created", extra={"invoice_id": invoice_id, "grant_id": grant.id})
        return grant

    async def get_by_invoice(self, invoice_id: str) -> Grant | None:
        async with self._repository() as repository:
            model = await repository.get_by_invoice(invoice_id)
            return Grant.from_orm(model) if model else None
