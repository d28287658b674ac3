"""Tests for the Firestore REST document store against a mocked transport."""

import json

import httpx
import pytest

from storefront.domain.enums import SortDirection
from storefront.domain.exceptions import (
    NotFoundException,
    PermissionDeniedException,
    WriteFailedException,
)
from storefront.infrastructure.firebase import FirestoreDocumentStore
from storefront.infrastructure.firebase._rest_client import FirestoreRESTClient
from storefront.infrastructure.firebase._rest_encoding import encode_document
from tests.helpers import next_value

PREFIX = "projects/demo/databases/(default)/documents"


def _store(handler) -> tuple[FirestoreDocumentStore, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    client = FirestoreRESTClient("demo", api_key="web-key", http_client=http)
    return FirestoreDocumentStore(client, poll_interval=0.01), requests


def _doc(path: str, data: dict) -> dict:
    return {"name": f"{PREFIX}/{path}", **encode_document(data)}


async def test_set_document_patches_with_api_key() -> None:
    store, requests = _store(lambda r: httpx.Response(200, json=_doc("settings/site", {})))
    await store.set_document("settings/site", {"websiteName": "Acme"})

    request = requests[0]
    assert request.method == "PATCH"
    assert request.url.path == f"/v1/{PREFIX}/settings/site"
    assert request.url.params["key"] == "web-key"
    assert json.loads(request.content) == {"fields": {"websiteName": {"stringValue": "Acme"}}}


@pytest.mark.parametrize("status", [401, 403])
async def test_denied_write_raises_permission_denied(status: int) -> None:
    store, _ = _store(
        lambda r: httpx.Response(status, json={"error": {"message": "Missing or insufficient permissions."}})
    )
    with pytest.raises(PermissionDeniedException):
        await store.set_document("settings/site", {"websiteName": "x"})


async def test_other_write_errors_raise_write_failed() -> None:
    store, _ = _store(lambda r: httpx.Response(500, json={"error": {"message": "boom"}}))
    with pytest.raises(WriteFailedException) as exc_info:
        await store.add("services", {"name": "x"})
    assert exc_info.value.reason == "HTTP 500"


async def test_network_error_raises_write_failed() -> None:
    def fail(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    store, _ = _store(fail)
    with pytest.raises(WriteFailedException):
        await store.delete("services", "abc")


async def test_add_returns_server_assigned_id() -> None:
    store, requests = _store(lambda r: httpx.Response(200, json=_doc("services/srv42", {})))
    assert await store.add("services", {"name": "x", "createdAt": 1}) == "srv42"
    assert requests[0].method == "POST"


async def test_update_uses_mask_and_exists_precondition() -> None:
    store, requests = _store(lambda r: httpx.Response(200, json=_doc("services/a", {})))
    await store.update("services", "a", {"price": "5"})
    params = requests[0].url.params
    assert params.get_list("updateMask.fieldPaths") == ["price"]
    assert params["currentDocument.exists"] == "true"


async def test_update_missing_document_raises_not_found() -> None:
    store, _ = _store(lambda r: httpx.Response(404, json={"error": {"message": "NOT_FOUND"}}))
    with pytest.raises(NotFoundException):
        await store.update("services", "ghost", {"price": "5"})


async def test_document_subscription_emits_on_change_only() -> None:
    versions = iter(["A", "A", "B"])

    def handler(request: httpx.Request) -> httpx.Response:
        name = next(versions, "B")
        return httpx.Response(200, json=_doc("settings/site", {"websiteName": name}))

    store, _ = _store(handler)
    sub = store.subscribe_document("settings/site")
    assert (await next_value(sub)).data == {"websiteName": "A"}
    assert (await next_value(sub)).data == {"websiteName": "B"}
    await store.aclose()
    assert sub.closed


async def test_missing_document_snapshot() -> None:
    store, _ = _store(lambda r: httpx.Response(404))
    sub = store.subscribe_document("settings/payment")
    snapshot = await next_value(sub)
    assert not snapshot.exists
    assert snapshot.data == {}
    sub.dispose()


async def test_collection_subscription_runs_ordered_query() -> None:
    rows = [
        {"document": _doc("services/new", {"createdAt": 300})},
        {"document": _doc("services/old", {"createdAt": 100})},
        {"readTime": "2024-04-01T00:00:00Z"},
    ]
    store, requests = _store(lambda r: httpx.Response(200, json=rows))
    sub = store.subscribe_collection("services", "createdAt", SortDirection.DESCENDING)
    docs = await next_value(sub)
    assert [d.id for d in docs] == ["new", "old"]

    query = json.loads(requests[0].content)["structuredQuery"]
    assert query["from"] == [{"collectionId": "services"}]
    assert query["orderBy"] == [{"field": {"fieldPath": "createdAt"}, "direction": "DESCENDING"}]
    assert requests[0].url.path == f"/v1/{PREFIX}:runQuery"
    sub.dispose()


async def test_denied_read_fails_the_stream() -> None:
    store, _ = _store(lambda r: httpx.Response(403, json={"error": {"message": "denied"}}))
    sub = store.subscribe_document("settings/site")
    with pytest.raises(PermissionDeniedException):
        await next_value(sub)
    assert sub.closed
    assert not store._subscriptions
