"""Access coordination: invoice issuance, payment watching and door polling."""

from .consumer import DoorSignal, GrantConsumer
from .coordinator import AccessCoordinator
from .exceptions import AccessError, InvoiceAlreadyPending, InvoiceCreationFailed
from .issuer import InvoiceIssuer
from .watcher import PaymentWatcher, WatcherState

__all__ = [
    "AccessCoordinator",
    "AccessError",
    "DoorSignal",
    "GrantConsumer",
    "InvoiceAlreadyPending",
    "InvoiceCreationFailed",
    "InvoiceIssuer",
    "PaymentWatcher",
    "WatcherState",
]
