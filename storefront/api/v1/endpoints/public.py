"""Public storefront endpoints: branding, payment display, media host and themes."""

from fastapi import APIRouter, Depends

from storefront.api.v1.dependencies import get_context
from storefront.application.dtos.settings import PaymentSettings, SiteSettings
from storefront.core.context import StorefrontContext
from storefront.schemas.storefront import MediaHostResponse, ThemeListResponse, ThemeResponse

router = APIRouter()


@router.get("/settings/site", response_model=SiteSettings)
def get_site_settings(context: StorefrontContext = Depends(get_context)) -> SiteSettings:
    """Last known site settings (defaults until the store confirms the document)."""
    return context.site_settings.current


@router.get("/settings/payment", response_model=PaymentSettings)
def get_payment_settings(context: StorefrontContext = Depends(get_context)) -> PaymentSettings:
    return context.payment_settings.current


@router.get("/settings/media-host", response_model=MediaHostResponse)
def get_media_host(context: StorefrontContext = Depends(get_context)) -> MediaHostResponse:
    name = context.config_cache.get_media_host_name()
    return MediaHostResponse(cloud_name=name, is_configured=bool(name))


@router.get("/themes", response_model=ThemeListResponse)
def list_themes(context: StorefrontContext = Depends(get_context)) -> ThemeListResponse:
    return ThemeListResponse(
        current=context.themes.current().name,
        themes=[
            ThemeResponse(name=t.name, label=t.label, colors=list(t.colors))
            for t in context.themes.themes
        ],
    )
