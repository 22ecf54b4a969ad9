"""Lightning Network payment backends."""

from .client import LndRestClient

__all__ = ["LndRestClient"]
