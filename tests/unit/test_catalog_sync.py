"""Tests for the live service catalog."""

from collections.abc import Iterator

import pytest

from storefront.application.dtos.service import ServiceCreate, ServicePatch
from storefront.application.services.catalog_sync import CatalogSynchronizer
from storefront.domain.exceptions import NotFoundException
from storefront.infrastructure.memory import InMemoryDocumentStore
from tests.helpers import wait_for_value


def _clock(values: list[int]):
    ticks: Iterator[int] = iter(values)
    return lambda: next(ticks)


def _service(name: str, slug: str) -> ServiceCreate:
    return ServiceCreate(name=name, slug=slug, price="10", sample_images=["a.png"])


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


async def test_catalog_is_newest_first(store: InMemoryDocumentStore) -> None:
    catalog = CatalogSynchronizer(store, clock=_clock([100, 300, 200]))
    catalog.start()
    sub = catalog.subscribe()
    for name in ("first", "second", "third"):
        await catalog.create(_service(name, name))

    services = await wait_for_value(sub, lambda v: len(v) == 3)
    assert [s.created_at for s in services] == [300, 200, 100]
    assert [s.name for s in services] == ["second", "third", "first"]
    assert catalog.current == services
    await catalog.aclose()


async def test_create_stores_camel_case_document(store: InMemoryDocumentStore) -> None:
    catalog = CatalogSynchronizer(store, clock=_clock([42]))
    service_id = await catalog.create(_service("Logo design", "logo-design"))
    stored = store.get_document(f"services/{service_id}")
    assert stored == {
        "name": "Logo design",
        "price": "10",
        "slug": "logo-design",
        "logo": "",
        "sampleImages": ["a.png"],
        "createdAt": 42,
    }


async def test_find_by_slug_returns_first_match(store: InMemoryDocumentStore) -> None:
    """Duplicate slugs are tolerated; the newest one wins lookups."""
    catalog = CatalogSynchronizer(store, clock=_clock([100, 200]))
    catalog.start()
    sub = catalog.subscribe()
    await catalog.create(_service("Old", "dup"))
    newer_id = await catalog.create(_service("New", "dup"))
    await wait_for_value(sub, lambda v: len(v) == 2)

    found = catalog.find_by_slug("dup")
    assert found is not None
    assert found.id == newer_id
    assert catalog.find_by_slug("missing") is None
    assert catalog.get(newer_id) == found
    await catalog.aclose()


async def test_update_merges_fields(store: InMemoryDocumentStore) -> None:
    catalog = CatalogSynchronizer(store, clock=_clock([7]))
    service_id = await catalog.create(_service("Name", "slug"))
    await catalog.update(service_id, ServicePatch(price="25"))
    stored = store.get_document(f"services/{service_id}")
    assert stored["price"] == "25"
    assert stored["name"] == "Name"
    assert stored["createdAt"] == 7


async def test_update_missing_service_raises_not_found(store: InMemoryDocumentStore) -> None:
    catalog = CatalogSynchronizer(store)
    with pytest.raises(NotFoundException):
        await catalog.update("nope", ServicePatch(name="x"))


async def test_empty_update_is_skipped(store: InMemoryDocumentStore) -> None:
    """An empty patch never reaches the store, so even a missing id is fine."""
    catalog = CatalogSynchronizer(store)
    await catalog.update("nope", ServicePatch())


async def test_remove_is_idempotent(store: InMemoryDocumentStore) -> None:
    catalog = CatalogSynchronizer(store, clock=_clock([1]))
    service_id = await catalog.create(_service("Gone", "gone"))
    await catalog.remove(service_id)
    await catalog.remove(service_id)
    assert store.get_document(f"services/{service_id}") is None


async def test_malformed_documents_are_skipped(store: InMemoryDocumentStore) -> None:
    await store.set_document("services/bad", {"createdAt": 5, "name": ["not", "text"]})
    await store.set_document("services/good", {"createdAt": 6, "name": "Good", "slug": "good"})
    catalog = CatalogSynchronizer(store)
    catalog.start()
    services = await wait_for_value(catalog.subscribe(), lambda v: True)
    assert [s.id for s in services] == ["good"]
    await catalog.aclose()


async def test_denied_catalog_stays_empty() -> None:
    store = InMemoryDocumentStore(denied_paths=["services"])
    catalog = CatalogSynchronizer(store)
    catalog.start()
    sub = catalog.subscribe()
    await catalog.aclose()
    assert catalog.current == []
    assert not catalog.confirmed
    assert sub.closed
