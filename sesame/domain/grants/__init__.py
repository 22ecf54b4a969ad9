"""Grant domain exports"""

from .exceptions import GrantError, StoreUnavailable
from .models import Grant
from .service import GrantStore

__all__ = [
    "Grant",
    "GrantStore",
    "GrantError",
    "StoreUnavailable",
]
