"""SQLAlchemy-backed repository implementations."""

from .grant_repository import SqlGrantRepository

__all__ = [
    "SqlGrantRepository",
]
