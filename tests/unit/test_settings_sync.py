"""Tests for the site and payment settings synchronizers."""

import asyncio

import pytest

from storefront.application.dtos.settings import (
    PaymentSettings,
    SiteSettings,
    SiteSettingsPatch,
)
from storefront.application.services.settings_sync import (
    PaymentSettingsSynchronizer,
    SiteSettingsSynchronizer,
)
from storefront.domain.exceptions import (
    PermissionDeniedException,
    ValidationException,
    WriteFailedException,
)
from storefront.infrastructure.memory import InMemoryDocumentStore
from tests.helpers import next_value, wait_for_value


class _HangingStore(InMemoryDocumentStore):
    """Store whose writes never complete."""

    async def set_document(self, path, data) -> None:
        await asyncio.Event().wait()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


async def test_defaults_until_confirmed(store: InMemoryDocumentStore) -> None:
    sync = SiteSettingsSynchronizer(store)
    assert sync.current == SiteSettings()
    assert not sync.confirmed
    await sync.aclose()


async def test_missing_document_confirms_defaults(store: InMemoryDocumentStore) -> None:
    sync = PaymentSettingsSynchronizer(store)
    sync.start()
    sub = sync.subscribe()
    assert await next_value(sub) == PaymentSettings()
    assert sync.confirmed
    await sync.aclose()


async def test_partial_remote_document_keeps_other_fields(
    store: InMemoryDocumentStore,
) -> None:
    """A remote document with one field only overrides that field."""
    await store.set_document("settings/site", {"websiteName": "Acme", "unknownKey": 1})
    sync = SiteSettingsSynchronizer(store)
    sync.start()
    value = await next_value(sync.subscribe())
    assert value.website_name == "Acme"
    assert value.footer_text == SiteSettings().footer_text
    assert value.whatsapp_number == SiteSettings().whatsapp_number
    await sync.aclose()


async def test_update_writes_full_merged_record(store: InMemoryDocumentStore) -> None:
    await store.set_document("settings/site", {"websiteName": "Acme"})
    sync = SiteSettingsSynchronizer(store)
    sync.start()
    sub = sync.subscribe()
    await next_value(sub)

    written = await sync.update({"supportGmail": "help@acme.test"})

    assert written.website_name == "Acme"
    assert written.support_gmail == "help@acme.test"
    assert store.get_document("settings/site") == written.model_dump(by_alias=True)
    confirmed = await wait_for_value(sub, lambda v: v.support_gmail == "help@acme.test")
    assert confirmed == written
    await sync.aclose()


async def test_update_accepts_typed_patch(store: InMemoryDocumentStore) -> None:
    sync = SiteSettingsSynchronizer(store)
    written = await sync.update(SiteSettingsPatch(website_name="Typed"))
    assert written.website_name == "Typed"
    assert store.get_document("settings/site")["websiteName"] == "Typed"


async def test_empty_patch_rewrites_current_value(store: InMemoryDocumentStore) -> None:
    """An empty patch writes the current record unchanged."""
    sync = PaymentSettingsSynchronizer(store)
    first = await sync.update({})
    second = await sync.update({})
    assert first == second == PaymentSettings()
    assert store.get_document("settings/payment") == PaymentSettings().model_dump(by_alias=True)


async def test_none_in_patch_does_not_clear(store: InMemoryDocumentStore) -> None:
    await store.set_document("settings/payment", {"iban": "PK00TEST"})
    sync = PaymentSettingsSynchronizer(store)
    sync.start()
    await next_value(sync.subscribe())
    written = await sync.update({"iban": None, "accountName": "Foxo"})
    assert written.iban == "PK00TEST"
    assert written.account_name == "Foxo"
    await sync.aclose()


async def test_unknown_patch_field_is_rejected(store: InMemoryDocumentStore) -> None:
    sync = SiteSettingsSynchronizer(store)
    with pytest.raises(ValidationException):
        await sync.update({"websiteColour": "red"})
    assert store.get_document("settings/site") is None


async def test_permission_denied_keeps_last_known_value() -> None:
    store = InMemoryDocumentStore(denied_paths=["settings/site"])
    sync = SiteSettingsSynchronizer(store)
    sync.start()
    await asyncio.sleep(0)
    assert not sync.confirmed
    assert sync.current == SiteSettings()
    with pytest.raises(PermissionDeniedException) as exc_info:
        await sync.update({"websiteName": "Nope"})
    assert "security rules" in exc_info.value.message
    await sync.aclose()


async def test_write_timeout_raises_write_failed() -> None:
    sync = SiteSettingsSynchronizer(_HangingStore(), timeout=0.01)
    with pytest.raises(WriteFailedException) as exc_info:
        await sync.update({"websiteName": "Slow"})
    assert exc_info.value.reason == "timeout"


async def test_aclose_disposes_consumer_subscriptions(store: InMemoryDocumentStore) -> None:
    sync = SiteSettingsSynchronizer(store)
    sync.start()
    sub = sync.subscribe()
    await sync.aclose()
    assert sub.closed


async def test_subscribe_after_aclose_is_already_ended(store: InMemoryDocumentStore) -> None:
    sync = SiteSettingsSynchronizer(store)
    sync.start()
    await next_value(sync.subscribe())
    await sync.aclose()
    late = sync.subscribe()
    assert late.closed
    assert [v async for v in late] == []
