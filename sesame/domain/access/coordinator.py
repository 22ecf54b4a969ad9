"""Access coordinator: invoice requests and door polls."""

from __future__ import annotations

import asyncio
import logging
from functools import partial

from sesame.domain.grants import GrantStore
from sesame.domain.payments import IssuedInvoice, PaymentNetwork

from .consumer import DoorSignal, GrantConsumer
from .exceptions import InvoiceAlreadyPending
from .issuer import InvoiceIssuer
from .watcher import PaymentWatcher, WatcherState

logger = logging.getLogger(__name__)

PENDING_MESSAGE = "There is already a pending open sesame request"


class AccessCoordinator:
    """Owns the single-outstanding-invoice rule and the watcher tasks.

    An invoice may be issued only when no grant is waiting for the door and no
    earlier invoice is still being watched. The check and the issuance happen
    under one lock, and the watcher is registered before the lock is released.
    """

    def __init__(
        self,
        grants: GrantStore,
        network: PaymentNetwork,
        *,
        price_tokens: int,
        resubscribe_delay: float = 5.0,
        max_failures: int = 12,
    ) -> None:
        self.grants = grants
        self.network = network
        self.issuer = InvoiceIssuer(network)
        self.consumer = GrantConsumer(grants)
        self.price_tokens = price_tokens
        self.resubscribe_delay = resubscribe_delay
        self.max_failures = max_failures
        self.watchers: dict[str, asyncio.Task[WatcherState]] = {}
        self._invoice_lock = asyncio.Lock()

    @property
    def pending_invoices(self) -> list[str]:
        return list(self.watchers)

    async def request_invoice(self) -> IssuedInvoice:
        async with self._invoice_lock:
            if self.watchers:
                logger.info("Invoice still awaiting payment", extra={"invoice_id": next(iter(self.watchers))})
                raise InvoiceAlreadyPending(PENDING_MESSAGE)

            count = await self.grants.count_pending()
            logger.info("Pending open sesame requests", extra={"count": count})
            if count > 0:
                raise InvoiceAlreadyPending(PENDING_MESSAGE)

            invoice = await self.issuer.request_invoice(self.price_tokens)
            self._spawn_watcher(invoice.id)
        return invoice

    async def poll_door(self) -> DoorSignal:
        return await self.consumer.consume_pending()

    async def drain(self) -> None:
        """Wait until every watcher has reached a terminal state or failed."""
        tasks = list(self.watchers.values())
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def shutdown(self) -> None:
        tasks = list(self.watchers.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self.watchers.clear()

    def _spawn_watcher(self, invoice_id: str) -> None:
        watcher = PaymentWatcher(
            invoice_id=invoice_id,
            network=self.network,
            grants=self.grants,
            resubscribe_delay=self.resubscribe_delay,
            max_failures=self.max_failures,
        )
        task = asyncio.create_task(watcher.run(), name=f"payment-watcher-{invoice_id}")
        self.watchers[invoice_id] = task
        task.add_done_callback(partial(self._on_watcher_done, invoice_id))

    def _on_watcher_done(self, invoice_id: str, task: asyncio.Task[WatcherState]) -> None:
        if self.watchers.get(invoice_id) is task:
            del self.watchers[invoice_id]
        if task.cancelled():
            logger.info("Payment watcher cancelled", extra={"invoice_id": invoice_id})
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Payment watcher failed",
                extra={"invoice_id": invoice_id, "error": str(exc)},
                exc_info=exc,
            )
            return
        logger.info("Payment watcher finished", extra={"invoice_id": invoice_id, "state": task.result().value})
