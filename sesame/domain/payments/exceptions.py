"""Payment network exceptions."""

from sesame.domain.common import SesameError


class PaymentNetworkError(SesameError):
    """Raised by payment network clients on transport, status or payload errors."""
