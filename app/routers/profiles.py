# =============================================================================
# app/routers/profiles.py - Owner Profile Endpoints
# =============================================================================
# The signed-in user's own profile: read, save, slug check, wallet card.
# All endpoints require authentication and are keyed by the token's user id;
# this is the only write path for profiles.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from app.auth import AuthUser, get_current_user
from app.dependencies import SharerDep
from app.routers.public import file_response
from core.models.media import ShareResult
from core.models.profile import Profile, ProfileUpdate, SlugCheckResponse
from core.services.export_service import ExportService
from core.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=Profile)
async def get_my_profile(user: AuthUser = Depends(get_current_user)):
    """
    Get the current user's profile.

    Raises:
        404: The user hasn't saved a profile yet
    """
    return ProfileService.get_my_profile(user.id)


@router.put("/me", response_model=Profile)
async def save_my_profile(
    request: ProfileUpdate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create or update the current user's profile.

    The slug is normalized before it is checked and stored.

    Raises:
        400: Slug shorter than 3 characters (SLUG_TOO_SHORT)
        409: Slug held by another profile (SLUG_TAKEN)
    """
    return ProfileService.save_profile(user.id, request)


@router.get("/slug-availability", response_model=SlugCheckResponse)
async def check_slug_availability(
    slug: str = Query(..., max_length=100, description="Raw slug text as typed"),
    user: AuthUser = Depends(get_current_user),
):
    """
    One-shot slug availability check.

    The editor normally uses the debounced WebSocket at /ws/slug-check;
    this endpoint answers a single candidate immediately.
    """
    return ProfileService.check_slug_availability(slug, user.id)


@router.get(
    "/me/wallet.png",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
)
async def download_my_wallet(user: AuthUser = Depends(get_current_user)):
    """Download the current user's wallet card as a 3x PNG."""
    profile = ProfileService.get_my_profile(user.id)
    return file_response(ExportService.export_wallet(profile))


@router.post("/me/wallet/share", response_model=ShareResult)
async def share_my_wallet(
    sharer: SharerDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Share the wallet card.

    Returns `method: native` when a configured share target took the file,
    otherwise `method: inline` with the PNG as a data URL.
    """
    profile = ProfileService.get_my_profile(user.id)
    return ExportService.share_wallet(profile, sharer)
