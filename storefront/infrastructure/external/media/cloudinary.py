"""Unsigned image upload to Cloudinary.

The cloud name is the media host name kept by the config cache; it is read
at upload time so a change made in the dashboard applies to the next upload.
Uploads use an unsigned preset, so no API secret is held by this service.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx

from storefront.infrastructure.exceptions import UploadFailedException, UploadFailureKind
from storefront.shared.telemetry.tracing import traced

logger = logging.getLogger(__name__)


def _host_error_message(resp: httpx.Response) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return "Upload failed"
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return "Upload failed"


class CloudinaryUploader:
    """Posts images to {base_url}/{cloud_name}/image/upload and returns the secure URL."""

    def __init__(
        self,
        cloud_name: Callable[[], str],
        *,
        base_url: str = "https://api.cloudinary.com/v1_1",
        upload_preset: str = "ml_default",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._cloud_name = cloud_name
        self._base_url = base_url.rstrip("/")
        self._upload_preset = upload_preset
        self._http = http_client

    def _require_cloud_name(self) -> str:
        cloud_name = (self._cloud_name() or "").strip()
        if not cloud_name:
            raise UploadFailedException(
                UploadFailureKind.MISSING_CONFIGURATION,
                "Cloudinary cloud name not configured. Set it in the admin dashboard "
                "(found in your Cloudinary Dashboard, not the upload preset name).",
            )
        if cloud_name == self._upload_preset:
            raise UploadFailedException(
                UploadFailureKind.MISSING_CONFIGURATION,
                f'Invalid cloud name: "{cloud_name}" is an upload preset, not a cloud name.',
            )
        return cloud_name

    @traced("media.upload")
    async def upload(
        self, data: bytes, filename: str, content_type: str = "application/octet-stream"
    ) -> str:
        """Upload one image and return its public https URL.

        Raises:
            UploadFailedException: missing-configuration when no usable cloud
                name is set; host-rejected when the host refuses the upload or
                cannot be reached.
        """
        cloud_name = self._require_cloud_name()
        url = f"{self._base_url}/{cloud_name}/image/upload"
        files = {"file": (filename, data, content_type)}
        form = {"upload_preset": self._upload_preset}
        try:
            if self._http is not None:
                resp = await self._http.post(url, data=form, files=files)
            else:
                async with httpx.AsyncClient(timeout=60.0) as client:
                    resp = await client.post(url, data=form, files=files)
        except httpx.HTTPError as e:
            logger.warning("Upload to %s failed: %s", cloud_name, e)
            raise UploadFailedException(
                UploadFailureKind.HOST_REJECTED, f"Failed to upload image: {e}"
            ) from e

        if resp.status_code != 200:
            message = _host_error_message(resp)
            logger.warning(
                "Cloudinary rejected upload: status=%d message=%s", resp.status_code, message
            )
            if resp.status_code == 401:
                raise UploadFailedException(
                    UploadFailureKind.HOST_REJECTED,
                    f"Cloudinary authentication failed: {message}. Check that the cloud "
                    f'name "{cloud_name}" is correct and that an unsigned upload preset '
                    f'named "{self._upload_preset}" exists.',
                )
            raise UploadFailedException(
                UploadFailureKind.HOST_REJECTED, f"Failed to upload image: {message}"
            )
        secure_url = resp.json().get("secure_url")
        if not secure_url:
            raise UploadFailedException(
                UploadFailureKind.HOST_REJECTED, "Upload response carried no secure_url"
            )
        return secure_url
