# =============================================================================
# core/models/media.py - Upload & Export Schemas
# =============================================================================
# - ImageSlot / UploadedImage: Cloudinary uploads for profile images
# - ShareResult: outcome of sharing an exported card
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field


class ImageSlot(str, Enum):
    """Where an uploaded image is used on the profile."""
    AVATAR = "avatar"
    COVER = "cover"
    SAINT = "saint"
    BACKGROUND = "background"


# Cloudinary folder per slot
IMAGE_FOLDERS = {
    ImageSlot.AVATAR: "profiles/avatars",
    ImageSlot.COVER: "profiles/covers",
    ImageSlot.SAINT: "profiles/saints",
    ImageSlot.BACKGROUND: "profiles/backgrounds",
}


class UploadedImage(BaseModel):
    """What Cloudinary reports back for a stored image."""
    secure_url: str
    public_id: str
    width: int | None = None
    height: int | None = None


class ShareMethod(str, Enum):
    """
    How an exported card reached the user.

    - native: handed to a configured Sharer that accepted the file
    - inline: no capable Sharer, the client opens the image itself
    """
    NATIVE = "native"
    INLINE = "inline"


class ShareResult(BaseModel):
    method: ShareMethod
    filename: str
    title: str
    text: str
    url: str = Field(..., description="Public profile URL shared alongside the card")
    data_url: str | None = Field(
        default=None,
        description="PNG as a data: URL, present only for inline fallback"
    )
