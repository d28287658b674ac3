"""Media hosting (image upload)."""

from storefront.infrastructure.external.media.cloudinary import CloudinaryUploader

__all__ = ["CloudinaryUploader"]
