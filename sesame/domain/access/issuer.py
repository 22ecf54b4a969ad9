"""Invoice issuance against the payment network."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sesame.domain.payments import IssuedInvoice, PaymentNetwork, PaymentNetworkError

from .exceptions import InvoiceCreationFailed

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class InvoiceIssuer:
    """Mints invoices. Callers must have checked that nothing is pending."""

    network: PaymentNetwork

    async def request_invoice(self, price_tokens: int) -> IssuedInvoice:
        if isinstance(price_tokens, bool) or not isinstance(price_tokens, int) or price_tokens <= 0:
            raise ValueError("price_tokens must be a positive integer")

        logger.info("Creating invoice", extra={"count": price_tokens})
        try:
            invoice = await self.network.create_invoice(price_tokens)
        except PaymentNetworkError as exc:
            logger.error("Failed to create invoice", extra={"error": str(exc)})
            raise InvoiceCreationFailed("Failed to create invoice") from exc

        logger.info("Invoice created", extra={"invoice_id": invoice.id})
        return invoice
