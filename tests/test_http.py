"""HTTP contract of /open-sesame and /invoice."""
import httpx
import pytest

from sesame.core.config import DatabaseSettings, LightningSettings, Settings, WatcherSettings
from sesame.core.container import ApplicationContainer
from sesame.domain.payments import PaymentNetworkError
from sesame.main import create_app, lifespan


def _settings(database_url: str) -> Settings:
    return Settings(
        _env_file=None,
        database=DatabaseSettings(url=database_url),
        lightning=LightningSettings(rest_url="https://lnd.test:8080", cert="unused", macaroon="0201"),
        watcher=WatcherSettings(resubscribe_delay=0),
    )


@pytest.fixture
async def container(database_url, network):
    container = ApplicationContainer.from_settings(_settings(database_url), network=network)
    await container.startup()
    yield container
    await container.shutdown()


@pytest.fixture
async def client(container):
    app = create_app(container)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://door.test") as client:
        yield client


async def test_door_closed_without_payment(client):
    response = await client.get("/open-sesame", headers={"User-Agent": "door-controller/1.0"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "0"


async def test_invoice_then_open_once(client, container, network):
    response = await client.get("/invoice")
    assert response.status_code == 200
    assert response.json() == {"invoice": "lnbc21000n1fake1"}

    network.confirm(network.created[0].id)
    await container.coordinator.drain()

    assert (await client.get("/open-sesame")).text == "1"
    assert (await client.get("/open-sesame")).text == "0"


async def test_second_invoice_is_rejected(client):
    await client.get("/invoice")

    response = await client.get("/invoice")

    assert response.status_code == 400
    assert response.json() == {"error": "There is already a pending open sesame request"}


async def test_invoice_creation_failure(client, network):
    network.error = PaymentNetworkError("node offline")

    response = await client.get("/invoice")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create invoice"}


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_storage_outage(unreachable_database_url, network):
    container = ApplicationContainer.from_settings(_settings(unreachable_database_url), network=network)
    transport = httpx.ASGITransport(app=create_app(container))
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://door.test") as client:
            door = await client.get("/open-sesame")
            invoice = await client.get("/invoice")
    finally:
        await container.shutdown()

    assert door.status_code == 200
    assert door.text == "0"
    assert invoice.status_code == 500
    assert invoice.json() == {"error": "Storage unavailable"}
    assert network.created == []


async def test_lifespan_stops_watchers(database_url, network):
    container = ApplicationContainer.from_settings(_settings(database_url), network=network)
    app = create_app(container)

    async with lifespan(app):
        invoice = await container.coordinator.request_invoice()
        task = container.coordinator.watchers[invoice.id]

    assert task.cancelled()
    assert app.state.container is container
