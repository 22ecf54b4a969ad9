"""Grant domain models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sesame.db import models as orm


@dataclass(slots=True)
class Grant:
    id: str
    invoice_id: str
    created_at: datetime
    consumed_at: Optional[datetime]

    @property
    def is_pending(self) -> bool:
        return self.consumed_at is None

    @classmethod
    def from_orm(cls, instance: orm.AccessGrant) -> "Grant":
        return cls(
            id=str(instance.id),
            invoice_id=instance.invoice_id,
            created_at=instance.created_at,
            consumed_at=instance.consumed_at,
        )
