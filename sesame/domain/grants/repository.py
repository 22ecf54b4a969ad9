"""Repository interface for access grants."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import Protocol, Sequence

from sesame.db.models import AccessGrant as AccessGrantModel


class GrantRepository(Protocol):
    async def count_pending(self) -> int:
        ...

    async def list_pending_ids(self) -> Sequence[str]:
        ...

    async def mark_consumed(self, grant_ids: Collection[str], consumed_at: datetime) -> int:
        ...

    async def get_by_invoice(self, invoice_id: str) -> AccessGrantModel | None:
        ...

    async def create(self, invoice_id: str) -> AccessGrantModel:
        ...
