"""Admin dashboard API (ADMIN_VIEW: admin and demo-admin).

Every mutation goes through AdminOperations, so demo-admin requests are
answered 403 DEMO_RESTRICTED without touching the store or local config.
"""

from fastapi import APIRouter, Depends, File, Response, UploadFile

from storefront.api.v1.dependencies import (
    Caller,
    get_admin_operations,
    get_context,
    require_view,
    unwrap,
)
from storefront.application.dtos.connection import ConnectionConfig
from storefront.application.dtos.service import ServiceCreate, ServicePatch
from storefront.application.dtos.settings import (
    PaymentSettings,
    PaymentSettingsPatch,
    SiteSettings,
    SiteSettingsPatch,
)
from storefront.application.services.access_gate import ADMIN_VIEW
from storefront.application.services.admin_operations import AdminOperations
from storefront.core.context import StorefrontContext
from storefront.domain.exceptions import ValidationException
from storefront.schemas.storefront import (
    ConnectionUpdatedResponse,
    MediaHostRequest,
    MediaHostResponse,
    ServiceCreatedResponse,
    ThemeRequest,
    ThemeResponse,
    UploadResponse,
)

router = APIRouter()

admin_view = require_view(ADMIN_VIEW, "admin")


@router.post("/services", response_model=ServiceCreatedResponse, status_code=201)
async def create_service(
    body: ServiceCreate,
    caller: Caller = Depends(admin_view),
    ops: AdminOperations = Depends(get_admin_operations),
) -> ServiceCreatedResponse:
    service_id = unwrap(await ops.create_service(caller.role, body))
    return ServiceCreatedResponse(id=service_id)


@router.patch("/services/{service_id}", status_code=204)
async def update_service(
    service_id: str,
    body: ServicePatch,
    caller: Caller = Depends(admin_view),
    ops: AdminOperations = Depends(get_admin_operations),
) -> Response:
    unwrap(await ops.update_service(caller.role, service_id, body))
    return Response(status_code=204)


@router.delete("/services/{service_id}", status_code=204)
async def delete_service(
    service_id: str,
    caller: Caller = Depends(admin_view),
    ops: AdminOperations = Depends(get_admin_operations),
) -> Response:
    unwrap(await ops.remove_service(caller.role, service_id))
    return Response(status_code=204)


@router.put("/settings/site", response_model=SiteSettings)
async def update_site_settings(
    body: SiteSettingsPatch,
    caller: Caller = Depends(admin_view),
    ops: AdminOperations = Depends(get_admin_operations),
) -> SiteSettings:
    """Merge the provided fields over the current settings and write the full record."""
    return unwrap(await ops.update_site_settings(caller.role, body))


@router.put("/settings/payment", response_model=PaymentSettings)
async def update_payment_settings(
    body: PaymentSettingsPatch,
    caller: Caller = Depends(admin_view),
    ops: AdminOperations = Depends(get_admin_operations),
) -> PaymentSettings:
    return unwrap(await ops.update_payment_settings(caller.role, body))


@router.get("/connection", response_model=ConnectionConfig)
def get_connection(
    _: Caller = Depends(admin_view),
    context: StorefrontContext = Depends(get_context),
) -> ConnectionConfig:
    return context.config_cache.get_connection_config()


@router.put("/connection", response_model=ConnectionUpdatedResponse)
async def set_connection(
    body: ConnectionConfig,
    caller: Caller = Depends(admin_view),
    ops: AdminOperations = Depends(get_admin_operations),
) -> ConnectionUpdatedResponse:
    """Persist a new connection config and restart every subscription against it."""
    unwrap(await ops.set_connection_config(caller.role, body))
    return ConnectionUpdatedResponse(project_id=body.project_id)


@router.put("/media-host", response_model=MediaHostResponse)
async def set_media_host(
    body: MediaHostRequest,
    caller: Caller = Depends(admin_view),
    ops: AdminOperations = Depends(get_admin_operations),
) -> MediaHostResponse:
    name = body.cloud_name.strip()
    unwrap(await ops.set_media_host_name(caller.role, name))
    return MediaHostResponse(cloud_name=name, is_configured=bool(name))


@router.put("/theme", response_model=ThemeResponse)
async def set_theme(
    body: ThemeRequest,
    caller: Caller = Depends(admin_view),
    ops: AdminOperations = Depends(get_admin_operations),
) -> ThemeResponse:
    theme = unwrap(await ops.set_theme(caller.role, body.theme))
    return ThemeResponse(name=theme.name, label=theme.label, colors=list(theme.colors))


@router.post("/media", response_model=UploadResponse, status_code=201)
async def upload_media(
    file: UploadFile = File(...),
    caller: Caller = Depends(admin_view),
    context: StorefrontContext = Depends(get_context),
) -> UploadResponse:
    """Upload an image to the media host; returns its public URL."""
    if file.content_type and not file.content_type.startswith("image/"):
        raise ValidationException("Only image uploads are accepted", field="file")
    data = await file.read()
    if len(data) > context.settings.max_upload_size:
        raise ValidationException(
            f"File exceeds {context.settings.max_upload_size} bytes", field="file"
        )

    async def operation() -> str:
        return await context.uploader.upload(
            data, file.filename or "upload", file.content_type or "application/octet-stream"
        )

    url = unwrap(await context.mutation_guard.run(caller.role, operation, action="upload_media"))
    return UploadResponse(secure_url=url)
