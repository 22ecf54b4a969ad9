"""SQLAlchemy implementation for the access grant repository"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sesame.db.models import AccessGrant


class SqlGrantRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def count_pending(self) -> int:
        stmt = select(func.count()).select_from(AccessGrant).where(AccessGrant.consumed_at.is_(None))
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def list_pending_ids(self) -> Sequence[str]:
        stmt = select(AccessGrant.id).where(AccessGrant.consumed_at.is_(None))
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def mark_consumed(self, grant_ids: Collection[str], consumed_at: datetime) -> int:
        if not grant_ids:
            return 0
        stmt = (
            update(AccessGrant)
            .where(AccessGrant.id.in_(list(grant_ids)), AccessGrant.consumed_at.is_(None))
            .values(consumed_at=consumed_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def get_by_invoice(self, invoice_id: str) -> AccessGrant | None:
        stmt = select(AccessGrant).where(AccessGrant.invoice_id == invoice_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create(self, invoice_id: str) -> AccessGrant:
        grant = AccessGrant(invoice_id=invoice_id)
        self.session.add(grant)
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            grant = await self.get_by_invoice(invoice_id)
            if grant is None:
                raise
            return grant
        await self.session.refresh(grant)
        return grant
