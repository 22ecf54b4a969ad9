"""Shared abstractions used across domain modules."""

from .exceptions import SesameError

__all__ = ["SesameError"]
