"""Tests for GrantStore against a real SQLite database."""
import pytest

from sesame.domain.grants import GrantStore, StoreUnavailable


async def test_empty_store_has_nothing_pending(grant_store):
    assert await grant_store.count_pending() == 0
    assert await grant_store.list_pending() == []


async def test_create_adds_pending_grant(grant_store):
    grant = await grant_store.create("invoice-1")

    assert grant.invoice_id == "invoice-1"
    assert grant.consumed_at is None
    assert grant.is_pending
    assert await grant_store.count_pending() == 1
    assert await grant_store.list_pending() == [grant.id]


async def test_create_is_idempotent_per_invoice(grant_store):
    first = await grant_store.create("invoice-1")
    second = await grant_store.create("invoice-1")

    assert second.id == first.id
    assert await grant_store.count_pending() == 1


async def test_mark_consumed_updates_only_given_ids(grant_store):
    first = await grant_store.create("invoice-1")
    second = await grant_store.create("invoice-2")

    updated = await grant_store.mark_consumed({first.id})

    assert updated == 1
    assert await grant_store.list_pending() == [second.id]
    consumed = await grant_store.get_by_invoice("invoice-1")
    assert consumed.consumed_at is not None


async def test_mark_consumed_twice_keeps_first_timestamp(grant_store):
    grant = await grant_store.create("invoice-1")

    assert await grant_store.mark_consumed([grant.id]) == 1
    first_timestamp = (await grant_store.get_by_invoice("invoice-1")).consumed_at

    assert await grant_store.mark_consumed([grant.id]) == 0
    second_timestamp = (await grant_store.get_by_invoice("invoice-1")).consumed_at

    assert first_timestamp is not None
    assert second_timestamp == first_timestamp


async def test_mark_consumed_with_no_ids(grant_store):
    await grant_store.create("invoice-1")

    assert await grant_store.mark_consumed([]) == 0
    assert await grant_store.count_pending() == 1


async def test_mark_consumed_skips_unknown_ids(grant_store):
    assert await grant_store.mark_consumed(["does-not-exist"]) == 0


async def test_get_by_invoice_missing(grant_store):
    assert await grant_store.get_by_invoice("nope") is None


async def test_unreachable_store_raises_store_unavailable(broken_grant_store):
    with pytest.raises(StoreUnavailable):
        await broken_grant_store.count_pending()
    with pytest.raises(StoreUnavailable):
        await broken_grant_store.list_pending()
    with pytest.raises(StoreUnavailable):
        await broken_grant_store.mark_consumed(["grant-1"])
    with pytest.raises(StoreUnavailable):
        await broken_grant_store.create("invoice-1")


class RefusedConnection:
    """Session whose driver fails to connect without SQLAlchemy wrapping the error."""

    async def __aenter__(self):
        raise ConnectionRefusedError(111, "Connection refused")

    async def __aexit__(self, *exc_info):
        return False


async def test_driver_connection_error_raises_store_unavailable():
    store = GrantStore(RefusedConnection)

    with pytest.raises(StoreUnavailable):
        await store.count_pending()
    with pytest.raises(StoreUnavailable):
        await store.create("invoice-1")
