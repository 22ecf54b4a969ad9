"""Access coordination exceptions."""

from sesame.domain.common import SesameError


class AccessError(SesameError):
    """Base class for invoice and door access errors."""


class InvoiceAlreadyPending(AccessError):
    """Raised when an invoice or an unused grant is still outstanding."""


class InvoiceCreationFailed(AccessError):
    """Raised when the payment network could not mint an invoice."""
