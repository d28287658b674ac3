"""WhatsApp deep link carrying an order request."""

from __future__ import annotations

import re
from urllib.parse import quote

from storefront.application.dtos.order import OrderRequest
from storefront.application.dtos.service import Service
from storefront.domain.exceptions import ValidationException

# Characters encodeURIComponent leaves as-is.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_order_message(service: Service, order: OrderRequest) -> str:
    promo = f"🏷️ *Promo Code:* {order.promo_code}" if order.promo_code else ""
    lines = [
        "🛒 *New Order Request*",
        "",
        f"📦 *Service:* {service.name}",
        f"💰 *Price:* {service.price}",
        "",
        "👤 *Customer Information:*",
        f"• Name: {order.name}",
        f"• Email: {order.email}",
        f"• WhatsApp: {order.whatsapp}",
        "",
        "📝 *Order Details:*",
        order.description,
        "",
        promo,
        "",
        "💳 *Payment Information:*",
        f"• Sender Name: {order.sender_name}",
        f"• Sender Number: {order.sender_number}",
        f"• Transaction ID: {order.transaction_id}",
    ]
    return "\n".join(lines).strip()


def build_order_link(
    whatsapp_number: str, message: str, base_url: str = "https://wa.me"
) -> str:
    """https://wa.me/<digits>?text=<message>, keeping only the digits of the number."""
    digits = re.sub(r"\D", "", whatsapp_number)
    if not digits:
        raise ValidationException(
            "WhatsApp number is not configured", field="whatsappNumber"
        )
    return f"{base_url.rstrip('/')}/{digits}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"
