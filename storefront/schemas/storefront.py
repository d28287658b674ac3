"""Schemas for public, catalog, order and admin endpoints.

Settings, service and connection records are returned as their DTOs
(storefront.application.dtos), serialized under camelCase keys.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.application.dtos.order import OrderRequest
from storefront.domain.enums import ThemeName


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MediaHostRequest(_CamelModel):
    cloud_name: str = Field(..., min_length=1, max_length=200)


class MediaHostResponse(_CamelModel):
    cloud_name: str
    is_configured: bool


class ThemeRequest(BaseModel):
    theme: ThemeName


class ThemeResponse(BaseModel):
    name: ThemeName
    label: str
    colors: list[str]


class ThemeListResponse(BaseModel):
    current: ThemeName
    themes: list[ThemeResponse]


class OrderLinkRequest(_CamelModel):
    """Service slug plus the order form."""

    slug: str = Field(..., min_length=1)
    order: OrderRequest


class OrderLinkResponse(BaseModel):
    url: str
    message: str


class ServiceCreatedResponse(BaseModel):
    id: str


class ConnectionUpdatedResponse(_CamelModel):
    project_id: str
    restarted: bool = True


class UploadResponse(_CamelModel):
    secure_url: str
