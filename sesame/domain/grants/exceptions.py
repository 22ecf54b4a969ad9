"""Grant store specific exceptions."""

from sesame.domain.common import SesameError


class GrantError(SesameError):
    """Base class for grant store errors."""


class StoreUnavailable(GrantError):
    """Raised when the underlying database cannot be reached or fails."""
