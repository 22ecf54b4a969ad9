"""Shared fixtures: a temporary SQLite database and an in-memory payment network."""
import asyncio
from collections import Counter

import pytest

from sesame.core.config import DatabaseSettings
from sesame.domain.access import AccessCoordinator
from sesame.domain.grants import GrantStore
from sesame.domain.payments import InvoiceEvent, IssuedInvoice, PaymentNetworkError
from sesame.infrastructure.database import build_engine, build_session_factory, init_db

_END = object()


class FakePaymentNetwork:
    """Payment network driven from the test through per-invoice queues."""

    def __init__(self) -> None:
        self.created: list[IssuedInvoice] = []
        self.tokens: list[int] = []
        self.subscriptions: Counter[str] = Counter()
        self.closed: Counter[str] = Counter()
        self.error: Exception | None = None
        self.subscribe_error: Exception | None = None
        self._queues: dict[str, asyncio.Queue] = {}

    async def create_invoice(self, tokens: int) -> IssuedInvoice:
        if self.error is not None:
            raise self.error
        number = len(self.created) + 1
        invoice = IssuedInvoice(id=f"{number:064x}", request=f"lnbc{tokens}n1fake{number}")
        self.created.append(invoice)
        self.tokens.append(tokens)
        return invoice

    def _queue(self, invoice_id: str) -> asyncio.Queue:
        return self._queues.setdefault(invoice_id, asyncio.Queue())

    async def subscribe_to_invoice(self, invoice_id: str):
        self.subscriptions[invoice_id] += 1
        if self.subscribe_error is not None:
            raise self.subscribe_error
        queue = self._queue(invoice_id)
        try:
            while True:
                item = await queue.get()
                if item is _END:
                    return
                if isinstance(item, Exception):
                    raise item
                yield item
        finally:
            self.closed[invoice_id] += 1

    def push(self, event: InvoiceEvent, invoice_id: str | None = None) -> None:
        self._queue(invoice_id or event.id).put_nowait(event)

    def confirm(self, invoice_id: str, times: int = 1) -> None:
        for _ in range(times):
            self.push(InvoiceEvent(id=invoice_id, is_confirmed=True))

    def cancel(self, invoice_id: str) -> None:
        self.push(InvoiceEvent(id=invoice_id, is_canceled=True))

    def end_stream(self, invoice_id: str) -> None:
        self._queue(invoice_id).put_nowait(_END)

    def break_stream(self, invoice_id: str) -> None:
        self._queue(invoice_id).put_nowait(PaymentNetworkError("connection reset"))


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'sesame.db'}"


@pytest.fixture
def unreachable_database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nested' / 'sesame.db'}"


@pytest.fixture
async def engine(database_url):
    engine = build_engine(DatabaseSettings(url=database_url))
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def grant_store(engine):
    return GrantStore(build_session_factory(engine))


@pytest.fixture
async def broken_grant_store(unreachable_database_url):
    engine = build_engine(DatabaseSettings(url=unreachable_database_url))
    yield GrantStore(build_session_factory(engine))
    await engine.dispose()


@pytest.fixture
def network():
    return FakePaymentNetwork()


@pytest.fixture
async def coordinator(grant_store, network):
    coordinator = AccessCoordinator(grant_store, network, price_tokens=21_000, resubscribe_delay=0)
    yield coordinator
    await coordinator.shutdown()
