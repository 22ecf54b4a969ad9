"""Door-side consumption of pending grants."""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass, field

from sesame.domain.grants import GrantStore

logger = logging.getLogger(__name__)


class DoorSignal(str, enum.Enum):
    """Values are the plain-text bodies the door controller understands."""

    OPEN = "1"
    CLOSED = "0"


@dataclass(slots=True)
class GrantConsumer:
    grants: GrantStore
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def consume_pending(self) -> DoorSignal:
        async with self._lock:
            pending = await self.grants.list_pending()
            logger.info("Pending open sesame requests", extra={"count": len(pending)})
            if not pending:
                return DoorSignal.CLOSED
            updated = await self.grants.mark_consumed(pending)

        # zero means another process consumed them between the read and the update
        if updated == 0:
            return DoorSignal.CLOSED
        logger.info("Opening the door", extra={"grant_ids": pending})
        return DoorSignal.OPEN
