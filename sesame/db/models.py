"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from sesame.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class AccessGrant(Base):
    """A paid door opening. ``consumed_at`` is null until the door takes it."""

    __tablename__ = "access_grants"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    invoice_id = Column(String(64), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    consumed_at = Column(DateTime(timezone=True), nullable=True, index=True)
