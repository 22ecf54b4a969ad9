"""Per-invoice payment watcher."""

from __future__ import annotations

import asyncio
import enum
import logging
from contextlib import aclosing
from dataclasses import dataclass
from typing import Optional

from sesame.domain.grants import Grant, GrantStore, StoreUnavailable
from sesame.domain.payments import InvoiceEvent, PaymentNetwork, PaymentNetworkError

logger = logging.getLogger(__name__)


class WatcherState(str, enum.Enum):
    WATCHING = "WATCHING"
    CONFIRMED = "CONFIRMED"
    CANCELED = "CANCELED"


@dataclass(slots=True)
class PaymentWatcher:
    """Follows one invoice until it settles or is canceled.

    A settlement creates exactly one grant. Once terminal, the watcher ignores
    further events, so duplicate deliveries from the node are harmless. If the
    subscription drops before a terminal state, it is reopened after
    ``resubscribe_delay`` seconds; the node replays the current invoice state.

    A grant that cannot be stored is retried the same way. Subscriptions that
    deliver nothing count as failures; after ``max_failures`` of them in a row
    the watcher gives up with :class:`PaymentNetworkError`.
    """

    invoice_id: str
    network: PaymentNetwork
    grants: GrantStore
    resubscribe_delay: float = 5.0
    max_failures: int = 12
    state: WatcherState = WatcherState.WATCHING
    grant: Optional[Grant] = None

    @property
    def is_terminal(self) -> bool:
        return self.state is not WatcherState.WATCHING

    async def run(self) -> WatcherState:
        logger.info("Waiting for payment", extra={"invoice_id": self.invoice_id})
        failures = 0
        while not self.is_terminal:
            received = False
            try:
                async with aclosing(self.network.subscribe_to_invoice(self.invoice_id)) as events:
                    async for event in events:
                        received = True
                        await self.handle(event)
                        if self.is_terminal:
                            break
            except PaymentNetworkError as exc:
                logger.warning(
                    "Invoice subscription interrupted",
                    extra={"invoice_id": self.invoice_id, "error": str(exc), "count": failures + 1},
                )
            except StoreUnavailable as exc:
                # create is idempotent and the node replays SETTLED on resubscribe
                logger.error(
                    "Grant could not be stored, retrying",
                    extra={"invoice_id": self.invoice_id, "error": str(exc)},
                )
            if self.is_terminal:
                break

            failures = 0 if received else failures + 1
            if failures >= self.max_failures:
                raise PaymentNetworkError(f"invoice subscription failed {failures} times in a row")
            await asyncio.sleep(self.resubscribe_delay)
        return self.state

    async def handle(self, event: InvoiceEvent) -> WatcherState:
        if self.is_terminal:
            logger.debug(
                "Ignoring event for finished invoice",
                extra={"invoice_id": self.invoice_id, "state": self.state.value},
            )
            return self.state
        if event.id != self.invoice_id:
            return self.state

        if event.is_confirmed:
            logger.info("Payment received", extra={"invoice_id": self.invoice_id})
            self.grant = await self.grants.create(self.invoice_id)
            self.state = WatcherState.CONFIRMED
        elif event.is_canceled:
            logger.info("Payment expired or canceled", extra={"invoice_id": self.invoice_id})
            self.state = WatcherState.CANCELED
        return self.state
