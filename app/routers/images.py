# =============================================================================
# app/routers/images.py - Image Upload Endpoint
# =============================================================================
# Uploads profile images (avatar, cover, saint, background) to Cloudinary.
# Type and size are checked before anything is sent.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, File, Query, UploadFile

from app.auth import AuthUser, get_current_user
from app.config import settings
from core.models.media import ImageSlot, UploadedImage
from core.services.image_service import ImageService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UploadedImage)
async def upload_image(
    slot: ImageSlot = Query(..., description="Which profile image this is"),
    file: UploadFile = File(..., description="JPG, PNG or WEBP, at most 1MB"),
    user: AuthUser = Depends(get_current_user),
):
    """
    Upload a profile image.

    Returns the hosted URL; save it on the profile with PUT /profiles/me.

    Raises:
        400: Type not allowed (INVALID_IMAGE_TYPE)
        413: Larger than 1MB (IMAGE_TOO_LARGE)
        502: Cloudinary rejected the upload (IMAGE_UPLOAD_FAILED)
    """
    # Read one byte past the limit so oversized files are caught without
    # buffering them whole
    content = await file.read(settings.MAX_IMAGE_SIZE_BYTES + 1)
    ImageService.validate_image(file.content_type, max(len(content), file.size or 0))

    logger.info(f"User {user.id} uploading {slot.value} image ({len(content)} bytes)")
    return ImageService.upload_image(
        content,
        file.filename or "image",
        file.content_type or "",
        slot,
    )
