"""Site branding and payment display records, with their typed patches.

Records are stored remotely under camelCase keys (websiteName, ...) and
exposed to Python under snake_case names. Every record field has a default
so consumers never see a missing value. Patches list every field as optional
and reject unknown keys.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

_RECORD_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    extra="ignore",
)
_PATCH_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    extra="forbid",
)


class SiteSettings(BaseModel):
    """Site branding shown on every page."""

    model_config = _RECORD_CONFIG

    website_name: str = "Foxo Services"
    website_description: str = "Premium digital services for your business needs"
    footer_text: str = "© 2024 Foxo Services. All rights reserved."
    website_logo: str = ""
    support_gmail: str = "support@foxo.com"
    whatsapp_number: str = "+1234567890"


class SiteSettingsPatch(BaseModel):
    model_config = _PATCH_CONFIG

    website_name: str | None = None
    website_description: str | None = None
    footer_text: str | None = None
    website_logo: str | None = None
    support_gmail: str | None = None
    whatsapp_number: str | None = None


class PaymentSettings(BaseModel):
    """Payment details displayed on the order page."""

    model_config = _RECORD_CONFIG

    payment_logo: str = ""
    account_name: str = ""
    account_number: str = ""
    iban: str = ""


class PaymentSettingsPatch(BaseModel):
    model_config = _PATCH_CONFIG

    payment_logo: str | None = None
    account_name: str | None = None
    account_number: str | None = None
    iban: str | None = None


RecordT = TypeVar("RecordT", bound=BaseModel)


def apply_patch(current: RecordT, patch: BaseModel) -> RecordT:
    """Overlay the fields set in patch onto current; unset fields keep their value.

    Explicit None in a patch means "not provided", never "clear the field".
    """
    changes = {
        name: value
        for name, value in patch.model_dump(exclude_unset=True).items()
        if value is not None
    }
    return current.model_copy(update=changes)


def merge_remote(current: RecordT, data: dict[str, Any]) -> RecordT:
    """Overlay a (possibly partial) remote document onto current, field by field.

    Keys that are not record fields are ignored. A field whose remote value
    fails validation keeps its current value and is logged.
    """
    model = type(current)
    merged = current.model_dump()
    for name, info in model.model_fields.items():
        key = info.alias or name
        if key in data:
            raw = data[key]
        elif name in data:
            raw = data[name]
        else:
            continue
        if raw is None:
            continue
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            raw = str(raw)
        candidate = {**merged, name: raw}
        try:
            merged = model.model_validate(candidate).model_dump()
        except ValidationError:
            logger.warning(
                "Ignoring invalid remote value for %s.%s", model.__name__, name
            )
    return model.model_validate(merged)
