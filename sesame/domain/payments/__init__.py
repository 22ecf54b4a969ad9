"""Payment network domain exports"""

from .exceptions import PaymentNetworkError
from .models import InvoiceEvent, IssuedInvoice
from .network import PaymentNetwork

__all__ = [
    "InvoiceEvent",
    "IssuedInvoice",
    "PaymentNetwork",
    "PaymentNetworkError",
]
