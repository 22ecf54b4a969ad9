"""Interface of the payment network the coordinator talks to."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Protocol

from .models import InvoiceEvent, IssuedInvoice


class PaymentNetwork(Protocol):
    async def create_invoice(self, tokens: int) -> IssuedInvoice:
        """Mint an invoice for ``tokens`` base units.

        Raises :class:`PaymentNetworkError` on any failure.
        """
        ...

    def subscribe_to_invoice(self, invoice_id: str) -> AsyncGenerator[InvoiceEvent, None]:
        """Stream state updates for one invoice.

        Closing the iterator ends the subscription. The stream may finish or
        raise :class:`PaymentNetworkError` before the invoice settles.
        """
        ...
