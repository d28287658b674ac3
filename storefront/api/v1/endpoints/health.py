"""Health check endpoint. Used for liveness probes."""

from fastapi import APIRouter, Depends

from storefront.api.v1.dependencies import get_context
from storefront.core.context import StorefrontContext
from storefront.schemas.health import HealthResponse
from storefront.shared.utils.datetime import utc_now

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(context: StorefrontContext = Depends(get_context)) -> HealthResponse:
    """Return ok with the active backends and remote project."""
    settings = context.settings
    return HealthResponse(
        status="ok" if context.started else "starting",
        store_backend=settings.store_backend,
        identity_backend=settings.identity_backend,
        project_id=context.config_cache.get_connection_config().project_id,
        timestamp=utc_now(),
    )
