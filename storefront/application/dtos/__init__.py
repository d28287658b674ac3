"""DTOs for application services (no dependency on transport or storage)."""

from storefront.application.dtos.connection import ConnectionConfig
from storefront.application.dtos.identity import Identity
from storefront.application.dtos.order import OrderRequest
from storefront.application.dtos.service import Service, ServiceCreate, ServicePatch
from storefront.application.dtos.settings import (
    PaymentSettings,
    PaymentSettingsPatch,
    SiteSettings,
    SiteSettingsPatch,
    apply_patch,
    merge_remote,
)

__all__ = [
    "ConnectionConfig",
    "Identity",
    "OrderRequest",
    "Service",
    "ServiceCreate",
    "ServicePatch",
    "SiteSettings",
    "SiteSettingsPatch",
    "PaymentSettings",
    "PaymentSettingsPatch",
    "apply_patch",
    "merge_remote",
]
