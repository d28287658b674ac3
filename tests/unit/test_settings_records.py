"""Tests for settings records, patches and the remote merge."""

import pytest
from pydantic import ValidationError

from storefront.application.dtos.connection import ConnectionConfig
from storefront.application.dtos.service import Service, ServicePatch
from storefront.application.dtos.settings import (
    PaymentSettings,
    SiteSettings,
    SiteSettingsPatch,
    apply_patch,
    merge_remote,
)


def test_site_settings_defaults() -> None:
    settings = SiteSettings()
    assert settings.website_name == "Foxo Services"
    assert settings.support_gmail == "support@foxo.com"
    assert settings.whatsapp_number == "+1234567890"


def test_records_dump_camel_case() -> None:
    assert set(PaymentSettings().model_dump(by_alias=True)) == {
        "paymentLogo",
        "accountName",
        "accountNumber",
        "iban",
    }


def test_patch_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        SiteSettingsPatch.model_validate({"colour": "red"})


def test_apply_patch_only_overlays_set_fields() -> None:
    current = SiteSettings(website_name="Acme")
    patched = apply_patch(current, SiteSettingsPatch(footer_text="(c) Acme"))
    assert patched.website_name == "Acme"
    assert patched.footer_text == "(c) Acme"


def test_merge_remote_coerces_numbers_and_skips_bad_values() -> None:
    merged = merge_remote(
        PaymentSettings(), {"accountNumber": 12345, "iban": ["bad"], "other": "x"}
    )
    assert merged.account_number == "12345"
    assert merged.iban == ""


def test_service_from_document_prefers_document_id() -> None:
    service = Service.from_document("doc-1", {"id": "stale", "name": "X", "price": 10, "createdAt": 5})
    assert service.id == "doc-1"
    assert service.price == "10"
    assert service.created_at == 5


def test_service_patch_document_has_only_provided_fields() -> None:
    assert ServicePatch(sample_images=["a"]).to_document() == {"sampleImages": ["a"]}
    assert ServicePatch().to_document() == {}


def test_connection_config_completeness() -> None:
    assert ConnectionConfig(api_key="k", project_id="p").is_complete
    assert not ConnectionConfig(api_key="k").is_complete
