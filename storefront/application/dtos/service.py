"""Catalog service records.

id and created_at are assigned when a service is created and never change.
created_at is epoch milliseconds; the live catalog is ordered on it, newest
first. Slugs are routing keys but uniqueness is not enforced.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ServiceCreate(BaseModel):
    """Fields supplied by the admin when creating a service."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    name: str = Field(..., min_length=1)
    price: str = ""
    slug: str = Field(..., min_length=1)
    logo: str = ""
    sample_images: list[str] = Field(default_factory=list)


class ServicePatch(BaseModel):
    """Partial update of a service; id and created_at cannot be patched."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid"
    )

    name: str | None = None
    price: str | None = None
    slug: str | None = None
    logo: str | None = None
    sample_images: list[str] | None = None

    def to_document(self) -> dict[str, Any]:
        """Remote field map with only the provided fields (camelCase keys)."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class Service(BaseModel):
    """A catalog entry as read from the store."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True, extra="ignore"
    )

    id: str
    name: str = ""
    price: str = ""
    slug: str = ""
    logo: str = ""
    sample_images: list[str] = Field(default_factory=list)
    created_at: int = 0

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Service:
        """Build from a store document; the document id wins over any stored 'id' key."""
        fields = {k: v for k, v in data.items() if k != "id"}
        if isinstance(fields.get("price"), (int, float)):
            fields["price"] = str(fields["price"])
        return cls.model_validate({**fields, "id": doc_id})
