"""Catalog and order endpoints (ORDER_VIEW: any signed-in role)."""

from fastapi import APIRouter, Depends

from storefront.api.v1.dependencies import Caller, get_context, require_view
from storefront.application.dtos.service import Service
from storefront.application.services.access_gate import ORDER_VIEW
from storefront.application.services.order_link import build_order_link, build_order_message
from storefront.core.constants import COLLECTION_SERVICES
from storefront.core.context import StorefrontContext
from storefront.domain.exceptions import NotFoundException
from storefront.schemas.storefront import OrderLinkRequest, OrderLinkResponse

router = APIRouter()

order_view = require_view(ORDER_VIEW, "order")


def _service_by_slug(context: StorefrontContext, slug: str) -> Service:
    service = context.catalog.find_by_slug(slug)
    if service is None:
        raise NotFoundException(f"{COLLECTION_SERVICES}?slug={slug}")
    return service


@router.get("/services", response_model=list[Service])
def list_services(
    _: Caller = Depends(order_view),
    context: StorefrontContext = Depends(get_context),
) -> list[Service]:
    """Live catalog, newest first."""
    return context.catalog.current


@router.get("/services/{slug}", response_model=Service)
def get_service(
    slug: str,
    _: Caller = Depends(order_view),
    context: StorefrontContext = Depends(get_context),
) -> Service:
    """First service with this slug."""
    return _service_by_slug(context, slug)


@router.post("/orders/link", response_model=OrderLinkResponse)
def create_order_link(
    body: OrderLinkRequest,
    _: Caller = Depends(order_view),
    context: StorefrontContext = Depends(get_context),
) -> OrderLinkResponse:
    """WhatsApp deep link to the operator carrying the order details."""
    service = _service_by_slug(context, body.slug)
    message = build_order_message(service, body.order)
    url = build_order_link(
        context.site_settings.current.whatsapp_number,
        message,
        base_url=context.settings.order_link_base_url,
    )
    return OrderLinkResponse(url=url, message=message)
