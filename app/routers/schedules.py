# =============================================================================
# app/routers/schedules.py - Schedule Endpoints
# =============================================================================
# Coordinator operations on liturgical schedules.
# All endpoints require authentication.
# =============================================================================

from datetime import date
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from pydantic import BaseModel, Field

from app.auth import AuthUser, get_current_user
from app.routers.public import file_response
from core.models.schedule import (
    TIME_SLOTS,
    ParticipantIn,
    ScheduleCreate,
    ScheduleEdit,
    ScheduleView,
)
from core.services.export_service import ExportService
from core.services.schedule_service import ScheduleService
from lib.utils import current_month

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class ScheduleWriteResponse(BaseModel):
    """What was stored by a create or edit."""
    id: UUID = Field(..., example="550e8400-e29b-41d4-a716-446655440000")
    data: date = Field(..., example="2024-05-12")
    horario: str = Field(..., example="10:00")
    comunidade_id: UUID | None = None
    observacoes: str | None = None
    participantes: list[ParticipantIn] = Field(default_factory=list)


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=list[ScheduleView])
async def list_schedules(
    month: str | None = Query(default=None, description="YYYY-MM, defaults to the current month"),
    comunidade_id: UUID | None = Query(default=None),
    user: AuthUser = Depends(get_current_user),
):
    """
    List a month's schedules with community, roster and last editor.

    Raises:
        400: Month isn't YYYY-MM (INVALID_MONTH)
    """
    return ScheduleService.list_schedules(month or current_month(), comunidade_id)


@router.get("/time-slots", response_model=list[str])
async def list_time_slots(user: AuthUser = Depends(get_current_user)):
    """Times offered by the schedule form."""
    return TIME_SLOTS


@router.post("", response_model=ScheduleWriteResponse, status_code=status.HTTP_201_CREATED)
async def create_schedule(
    request: ScheduleCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a schedule with its roster.

    Raises:
        400: Missing community, empty roster or duplicate person
        502: Roster write failed (SCHEDULE_WRITE_FAILED); the schedule was removed
    """
    return ScheduleService.create_schedule(request, user.id)


@router.get("/{schedule_id}", response_model=ScheduleView)
async def get_schedule(
    schedule_id: UUID,
    user: AuthUser = Depends(get_current_user),
):
    return ScheduleService.get_schedule(schedule_id)


@router.put("/{schedule_id}", response_model=ScheduleWriteResponse)
async def update_schedule(
    schedule_id: UUID,
    request: ScheduleEdit,
    user: AuthUser = Depends(get_current_user),
):
    """
    Replace notes and roster of a schedule.

    Raises:
        403: Schedule is from a past month (SCHEDULE_LOCKED)
        404: Unknown schedule
        502: Roster write failed; previous roster restored
    """
    return ScheduleService.update_schedule(schedule_id, request, user.id)


@router.delete("/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_schedule(
    schedule_id: UUID,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete a schedule and its roster.

    Raises:
        403: Schedule is from a past month (SCHEDULE_LOCKED)
    """
    ScheduleService.delete_schedule(schedule_id, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{schedule_id}/export.{fmt}",
    response_class=Response,
    responses={200: {"content": {"image/png": {}, "application/pdf": {}}}},
)
async def export_schedule(
    schedule_id: UUID,
    fmt: Literal["png", "pdf"],
    user: AuthUser = Depends(get_current_user),
):
    """Download a schedule card as PNG or PDF."""
    schedule = ScheduleService.get_schedule(schedule_id)
    return file_response(ExportService.export_schedule(schedule, fmt))
