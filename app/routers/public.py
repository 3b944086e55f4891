# =============================================================================
# app/routers/public.py - Public (Unauthenticated) Endpoints
# =============================================================================
# Everything reachable by a link without signing in:
# - /p/{slug}: read-only profile
# - /p/{slug}/wallet.png: that profile's wallet card
# - /escalas-publicas: the month's schedules, plus card exports
#
# Nothing here has an auth dependency and nothing here writes.
# =============================================================================

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Path, Query
from fastapi.responses import Response

from core.models.profile import PublicProfile
from core.models.schedule import PublicScheduleList
from core.services.export_service import ExportedFile, ExportService
from core.services.profile_service import ProfileService
from core.services.schedule_service import ScheduleService
from lib.utils import current_month

router = APIRouter()


def file_response(exported: ExportedFile) -> Response:
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )


# =============================================================================
# Profiles
# =============================================================================

@router.get("/p/{slug}", response_model=PublicProfile, tags=["Public"])
async def get_public_profile(
    slug: str = Path(..., max_length=100, description="Profile slug"),
):
    """
    Public, read-only profile.

    Raises:
        404: No profile holds this slug (PROFILE_NOT_FOUND)
    """
    return ProfileService.get_public_profile(slug)


@router.get(
    "/p/{slug}/wallet.png",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
    tags=["Public"],
)
async def download_public_wallet(
    slug: str = Path(..., max_length=100),
):
    """Wallet card of a public profile as a 3x PNG."""
    profile = ProfileService.get_profile_by_slug(slug)
    return file_response(ExportService.export_wallet(profile))


# =============================================================================
# Schedules
# =============================================================================

@router.get("/escalas-publicas", response_model=PublicScheduleList, tags=["Public"])
async def list_public_schedules(
    month: str | None = Query(default=None, description="YYYY-MM, defaults to the current month"),
    comunidade: str | None = Query(default=None, description="Community name filter"),
):
    """
    Schedules of a month, ordered by date and time.

    `communities` lists every community in the month for the filter.
    """
    return ScheduleService.list_public_schedules(month or current_month(), comunidade)


@router.get(
    "/escalas-publicas/{schedule_id}/export.{fmt}",
    response_class=Response,
    responses={200: {"content": {"image/png": {}, "application/pdf": {}}}},
    tags=["Public"],
)
async def export_public_schedule(
    schedule_id: UUID,
    fmt: Literal["png", "pdf"],
):
    """
    Download one public schedule as PNG or PDF.

    The PDF page has exactly the image's size.
    """
    schedule = ScheduleService.get_public_schedule(schedule_id)
    return file_response(ExportService.export_schedule(schedule, fmt))
