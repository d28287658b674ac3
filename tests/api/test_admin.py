"""Admin dashboard API tests (admin account, in-memory backends)."""

from httpx import AsyncClient

from tests.helpers import eventually


async def _wait_for_slug(client: AsyncClient, app, slug: str) -> None:
    await eventually(lambda: app.state.context.catalog.find_by_slug(slug) is not None)


async def test_service_lifecycle(
    client: AsyncClient, app, admin_headers: dict[str, str]
) -> None:
    created = await client.post(
        "/api/v1/admin/services",
        json={"name": "Logo design", "slug": "logo-design", "price": "25", "sampleImages": ["a.png"]},
        headers=admin_headers,
    )
    assert created.status_code == 201
    service_id = created.json()["id"]
    await _wait_for_slug(client, app, "logo-design")

    listed = await client.get("/api/v1/services", headers=admin_headers)
    assert listed.status_code == 200
    assert [s["id"] for s in listed.json()] == [service_id]
    assert listed.json()[0]["sampleImages"] == ["a.png"]

    patched = await client.patch(
        f"/api/v1/admin/services/{service_id}", json={"price": "30"}, headers=admin_headers
    )
    assert patched.status_code == 204
    await eventually(lambda: app.state.context.catalog.get(service_id).price == "30")

    deleted = await client.delete(f"/api/v1/admin/services/{service_id}", headers=admin_headers)
    assert deleted.status_code == 204
    await eventually(lambda: app.state.context.catalog.current == [])

    missing = await client.get("/api/v1/services/logo-design", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["error"] == "NOT_FOUND"


async def test_update_missing_service_returns_404(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.patch(
        "/api/v1/admin/services/ghost", json={"name": "x"}, headers=admin_headers
    )
    assert response.status_code == 404


async def test_unknown_service_field_is_rejected(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/v1/admin/services",
        json={"name": "x", "slug": "x", "colour": "red"},
        headers=admin_headers,
    )
    assert response.status_code == 422


async def test_site_settings_update_is_merged_and_published(
    client: AsyncClient, app, admin_headers: dict[str, str]
) -> None:
    response = await client.put(
        "/api/v1/admin/settings/site", json={"websiteName": "Acme"}, headers=admin_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["websiteName"] == "Acme"
    assert data["supportGmail"] == "support@foxo.com"

    await eventually(lambda: app.state.context.site_settings.current.website_name == "Acme")
    public = await client.get("/api/v1/settings/site")
    assert public.json()["websiteName"] == "Acme"


async def test_payment_settings_update(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    response = await client.put(
        "/api/v1/admin/settings/payment",
        json={"accountName": "Foxo", "iban": "PK00FOXO"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["iban"] == "PK00FOXO"


async def test_media_host_and_theme(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    host = await client.put(
        "/api/v1/admin/media-host", json={"cloudName": " shop-cloud "}, headers=admin_headers
    )
    assert host.status_code == 200
    assert host.json() == {"cloudName": "shop-cloud", "isConfigured": True}
    public = await client.get("/api/v1/settings/media-host")
    assert public.json()["cloudName"] == "shop-cloud"

    theme = await client.put("/api/v1/admin/theme", json={"theme": "ember"}, headers=admin_headers)
    assert theme.status_code == 200
    assert theme.json()["label"] == "Ember"
    themes = await client.get("/api/v1/themes")
    assert themes.json()["current"] == "ember"
    assert len(themes.json()["themes"]) == 11


async def test_connection_change_restarts_context(
    client: AsyncClient, app, admin_headers: dict[str, str]
) -> None:
    old_store = app.state.context.store
    response = await client.put(
        "/api/v1/admin/connection",
        json={"apiKey": "new-key", "projectId": "new-project"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json() == {"projectId": "new-project", "restarted": True}
    assert app.state.context.store is not old_store
    assert app.state.context.connection.project_id == "new-project"


async def test_incomplete_connection_is_rejected(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.put(
        "/api/v1/admin/connection", json={"apiKey": "k"}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["message"] == "API Key and Project ID are required"


async def test_upload_without_media_host_is_a_conflict(
    client: AsyncClient, admin_headers: dict[str, str]
) -> None:
    response = await client.post(
        "/api/v1/admin/media",
        files={"file": ("logo.png", b"\x89PNG", "image/png")},
        headers=admin_headers,
    )
    assert response.status_code == 409
    assert response.json()["details"]["kind"] == "missing-configuration"


async def test_upload_rejects_non_images(client: AsyncClient, admin_headers: dict[str, str]) -> None:
    response = await client.post(
        "/api/v1/admin/media",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=admin_headers,
    )
    assert response.status_code == 400
