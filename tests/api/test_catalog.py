"""Catalog and order-link API tests."""

from httpx import AsyncClient

from tests.helpers import eventually


async def test_order_link_for_user(
    client: AsyncClient, app, admin_headers: dict[str, str], user_headers: dict[str, str]
) -> None:
    await client.post(
        "/api/v1/admin/services",
        json={"name": "Logo design", "slug": "logo-design", "price": "25"},
        headers=admin_headers,
    )
    await eventually(lambda: app.state.context.catalog.find_by_slug("logo-design") is not None)

    detail = await client.get("/api/v1/services/logo-design", headers=user_headers)
    assert detail.status_code == 200
    assert detail.json()["name"] == "Logo design"

    response = await client.post(
        "/api/v1/orders/link",
        json={
            "slug": "logo-design",
            "order": {
                "name": "Jane",
                "email": "jane@example.com",
                "whatsapp": "+92 300 0000000",
                "transactionId": "TX-1",
            },
        },
        headers=user_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["url"].startswith("https://wa.me/1234567890?text=")
    assert "Logo design" in data["message"]
    assert "TX-1" in data["message"]


async def test_public_settings_serve_defaults(client: AsyncClient) -> None:
    site = await client.get("/api/v1/settings/site")
    assert site.status_code == 200
    assert site.json()["websiteName"] == "Foxo Services"
    payment = await client.get("/api/v1/settings/payment")
    assert payment.json() == {"paymentLogo": "", "accountName": "", "accountNumber": "", "iban": ""}
    host = await client.get("/api/v1/settings/media-host")
    assert host.json() == {"cloudName": "", "isConfigured": False}
