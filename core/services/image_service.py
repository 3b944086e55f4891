# =============================================================================
# core/services/image_service.py - Profile Image Uploads
# =============================================================================
# Validates an image and stores it on Cloudinary with an unsigned preset.
#
# Validation happens before any network call; a rejected file never leaves
# the server. Upload failures are reported once and never retried.
# =============================================================================

import logging

import httpx

from app.config import settings
from app.exceptions import ImageTooLargeError, ImageUploadError, InvalidImageTypeError
from core.models.media import IMAGE_FOLDERS, ImageSlot, UploadedImage

logger = logging.getLogger(__name__)

UPLOAD_TIMEOUT_SECONDS = 30


def cloudinary_upload_url(cloud_name: str | None = None) -> str:
    return f"https://api.cloudinary.com/v1_1/{cloud_name or settings.CLOUDINARY_CLOUD_NAME}/image/upload"


class ImageService:
    """Service for image validation and Cloudinary uploads."""

    @staticmethod
    def validate_image(content_type: str | None, size_bytes: int) -> None:
        """
        Check type and size of an image before uploading it.

        Raises:
            InvalidImageTypeError: Type not in ALLOWED_IMAGE_TYPES
            ImageTooLargeError: Larger than MAX_IMAGE_SIZE_BYTES
        """
        allowed = settings.allowed_image_types_list
        if (content_type or "").lower() not in allowed:
            logger.warning(f"Rejected image upload: type {content_type!r}")
            raise InvalidImageTypeError(content_type or "", allowed)

        if size_bytes > settings.MAX_IMAGE_SIZE_BYTES:
            logger.warning(f"Rejected image upload: {size_bytes} bytes")
            raise ImageTooLargeError(size_bytes, settings.MAX_IMAGE_SIZE_BYTES)

    @staticmethod
    def upload_image(
        content: bytes,
        filename: str,
        content_type: str,
        slot: ImageSlot,
        client: httpx.Client | None = None,
    ) -> UploadedImage:
        """
        Validate and upload an image.

        Args:
            content: Raw file bytes
            filename: Original filename (sent to Cloudinary as-is)
            content_type: MIME type reported by the client
            slot: Which profile image this is; picks the folder
            client: Optional httpx client (tests pass one with a mock transport)

        Returns:
            UploadedImage with secure_url, public_id, width, height

        Raises:
            InvalidImageTypeError / ImageTooLargeError: Before any network call
            ImageUploadError: Cloudinary unreachable or non-2xx
        """
        ImageService.validate_image(content_type, len(content))

        folder = IMAGE_FOLDERS[ImageSlot(slot)]
        files = {"file": (filename or "image", content, content_type)}
        data = {
            "upload_preset": settings.CLOUDINARY_UPLOAD_PRESET,
            "folder": folder,
        }

        owns_client = client is None
        client = client or httpx.Client(timeout=UPLOAD_TIMEOUT_SECONDS)
        try:
            response = client.post(cloudinary_upload_url(), data=data, files=files)
        except httpx.HTTPError as e:
            logger.error(f"Cloudinary upload failed: {e}")
            raise ImageUploadError(str(e)) from e
        finally:
            if owns_client:
                client.close()

        if response.status_code >= 400:
            logger.error(f"Cloudinary rejected upload ({response.status_code}): {response.text[:200]}")
            raise ImageUploadError(f"HTTP {response.status_code}")

        try:
            payload = response.json()
            uploaded = UploadedImage(
                secure_url=payload["secure_url"],
                public_id=payload["public_id"],
                width=payload.get("width"),
                height=payload.get("height"),
            )
        except (ValueError, KeyError) as e:
            logger.error(f"Unexpected Cloudinary response: {e}")
            raise ImageUploadError(f"Unexpected response: {e}") from e

        logger.info(f"Uploaded image to {folder}: {uploaded.public_id}")
        return uploaded
