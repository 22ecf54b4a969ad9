"""Value objects exchanged with the payment network."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class IssuedInvoice:
    id: str
    request: str


@dataclass(slots=True, frozen=True)
class InvoiceEvent:
    id: str
    is_confirmed: bool = False
    is_canceled: bool = False

    @property
    def is_terminal(self) -> bool:
        return self.is_confirmed or self.is_canceled
