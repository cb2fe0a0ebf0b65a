import pytest

from interview_navigator.storage import (
    DocumentExistsError,
    DocumentNotFoundError,
    InMemoryDocumentStore,
)


@pytest.mark.asyncio
async def test_create_and_get():
    store = InMemoryDocumentStore()
    await store.create("things", "a", {"id": "a", "value": 1})

    assert await store.get("things", "a") == {"id": "a", "value": 1}
    assert await store.get("things", "missing") is None


@pytest.mark.asyncio
async def test_create_rejects_existing_id():
    store = InMemoryDocumentStore()
    await store.create("things", "a", {"value": 1})

    with pytest.raises(DocumentExistsError) as exc_info:
        await store.create("things", "a", {"value": 2})

    assert exc_info.value.field is None
    assert (await store.get("things", "a"))["value"] == 1


@pytest.mark.asyncio
async def test_create_rejects_unique_field_collision():
    store = InMemoryDocumentStore()
    await store.ensure_unique("reviews", "booking_id")
    await store.create("reviews", "r1", {"booking_id": "b1"})

    with pytest.raises(DocumentExistsError) as exc_info:
        await store.create("reviews", "r2", {"booking_id": "b1"})

    assert exc_info.value.field == "booking_id"
    assert await store.get("reviews", "r2") is None


@pytest.mark.asyncio
async def test_set_replaces_document():
    store = InMemoryDocumentStore()
    await store.set("things", "a", {"value": 1, "extra": True})
    await store.set("things", "a", {"value": 2})

    assert await store.get("things", "a") == {"value": 2}


@pytest.mark.asyncio
async def test_update_merges_fields():
    store = InMemoryDocumentStore()
    await store.create("things", "a", {"value": 1, "name": "x"})

    updated = await store.update("things", "a", {"value": 5})

    assert updated == {"value": 5, "name": "x"}


@pytest.mark.asyncio
async def test_update_missing_document_raises():
    store = InMemoryDocumentStore()

    with pytest.raises(DocumentNotFoundError):
        await store.update("things", "nope", {"value": 1})


@pytest.mark.asyncio
async def test_delete():
    store = InMemoryDocumentStore()
    await store.create("things", "a", {"value": 1})

    assert await store.delete("things", "a") is True
    assert await store.delete("things", "a") is False


@pytest.mark.asyncio
async def test_delete_only_when_fields_match():
    store = InMemoryDocumentStore()
    await store.create("claims", "slot", {"owner": "b1"})

    assert await store.delete("claims", "slot", expected={"owner": "b2"}) is False
    assert await store.get("claims", "slot") == {"owner": "b1"}

    assert await store.delete("claims", "slot", expected={"owner": "b1"}) is True
    assert await store.get("claims", "slot") is None


@pytest.mark.asyncio
async def test_find_filters_orders_and_limits():
    store = InMemoryDocumentStore()
    await store.create("bookings", "1", {"owner": "u1", "status": "pending", "at": "2024-01-03"})
    await store.create("bookings", "2", {"owner": "u1", "status": "cancelled", "at": "2024-01-01"})
    await store.create("bookings", "3", {"owner": "u1", "status": "confirmed", "at": "2024-01-02"})
    await store.create("bookings", "4", {"owner": "u2", "status": "pending", "at": "2024-01-04"})

    active = await store.find(
        "bookings",
        {"owner": "u1", "status": ["pending", "confirmed"]},
        order_by="at",
    )
    assert [doc["at"] for doc in active] == ["2024-01-02", "2024-01-03"]

    latest = await store.find("bookings", order_by="at", descending=True, limit=2)
    assert [doc["at"] for doc in latest] == ["2024-01-04", "2024-01-03"]


@pytest.mark.asyncio
async def test_documents_are_copied():
    store = InMemoryDocumentStore()
    data = {"tags": ["a"]}
    await store.create("things", "a", data)
    data["tags"].append("b")

    fetched = await store.get("things", "a")
    fetched["tags"].append("c")

    assert (await store.get("things", "a"))["tags"] == ["a"]
