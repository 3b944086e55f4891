# =============================================================================
# core/models/schedule.py - Liturgical Schedule Schemas
# =============================================================================
# These models define the API contract for schedule (escala) operations:
# - ScheduleCreate / ScheduleEdit: coordinator input
# - ParticipantIn: one roster entry (person + optional liturgical role)
# - ScheduleView: a stored schedule with community, roster and editor names
# - PublicSchedule / PublicScheduleList: the unauthenticated listing
#
# Column names follow the Portuguese table schema (data, horario, ...) so
# rows map onto these models without renaming.
# =============================================================================

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

# Slots offered by the schedule form; any HH:MM is accepted
TIME_SLOTS = ["08:00", "10:00", "19:30", "20:00"]

_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class ParticipantIn(BaseModel):
    """One person on the roster, optionally with a liturgical role."""

    pessoa_id: UUID
    funcao_liturgica_id: UUID | None = None


def _clean_notes(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class ScheduleCreate(BaseModel):
    """
    Schema for creating a schedule.

    An empty roster or a missing community is rejected by the service
    before anything is written, with the same message the form shows.

    Example:
        {
            "data": "2024-05-12",
            "horario": "10:00",
            "comunidade_id": "0f3c...",
            "observacoes": "Missa das crianças",
            "participantes": [
                {"pessoa_id": "9a1e...", "funcao_liturgica_id": "44b2..."}
            ]
        }
    """

    data: date
    horario: str = Field(..., description="HH:MM, usually one of TIME_SLOTS")
    comunidade_id: UUID | None = None
    observacoes: str | None = Field(default=None, max_length=1000)
    participantes: list[ParticipantIn] = Field(default_factory=list)

    @field_validator("horario")
    @classmethod
    def _time(cls, v: str) -> str:
        v = v.strip()
        if not _TIME_RE.match(v):
            raise ValueError("horario must be HH:MM")
        return v

    @field_validator("observacoes")
    @classmethod
    def _notes(cls, v: str | None) -> str | None:
        return _clean_notes(v)


class ScheduleEdit(BaseModel):
    """Editable part of an existing schedule: notes and the full roster."""

    observacoes: str | None = Field(default=None, max_length=1000)
    participantes: list[ParticipantIn] = Field(default_factory=list)

    @field_validator("observacoes")
    @classmethod
    def _notes(cls, v: str | None) -> str | None:
        return _clean_notes(v)


# =============================================================================
# Read Views
# =============================================================================

class ParticipantView(BaseModel):
    pessoa_id: UUID
    nome_completo: str = ""
    funcao: str | None = None
    funcao_liturgica_id: UUID | None = None
    funcao_liturgica: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ParticipantView":
        person = row.get("pessoa") or {}
        role = row.get("funcao_liturgica") or {}
        return cls(
            pessoa_id=row["pessoa_id"],
            nome_completo=person.get("nome_completo") or "",
            funcao=person.get("funcao"),
            funcao_liturgica_id=row.get("funcao_liturgica_id"),
            funcao_liturgica=role.get("nome"),
        )


class ScheduleView(BaseModel):
    """
    A stored schedule as the coordinator list shows it.

    `editable` is computed at read time from the schedule date and today.
    """

    id: UUID
    data: date
    horario: str
    comunidade_id: UUID | None = None
    comunidade_nome: str = ""
    observacoes: str | None = None
    participantes: list[ParticipantView] = Field(default_factory=list)
    created_by: UUID | None = None
    updated_by: UUID | None = None
    updated_by_name: str | None = None
    updated_at: datetime | None = None
    editable: bool = False

    @classmethod
    def from_row(
        cls,
        row: dict[str, Any],
        editable: bool,
        updated_by_name: str | None = None,
    ) -> "ScheduleView":
        community = row.get("comunidade") or {}
        return cls(
            id=row["id"],
            data=row["data"],
            horario=row["horario"],
            comunidade_id=row.get("comunidade_id"),
            comunidade_nome=community.get("nome") or "",
            observacoes=row.get("observacoes"),
            participantes=[ParticipantView.from_row(p) for p in row.get("participantes") or []],
            created_by=row.get("created_by"),
            updated_by=row.get("updated_by"),
            updated_by_name=updated_by_name,
            updated_at=row.get("updated_at"),
            editable=editable,
        )


class PublicParticipant(BaseModel):
    nome_completo: str
    funcao: str | None = None
    funcao_liturgica: str | None = None


class PublicSchedule(BaseModel):
    """One row of the escalas_publicas view."""

    id: UUID
    data: date
    horario: str
    observacoes: str | None = None
    comunidade_nome: str = ""
    participantes: list[PublicParticipant] = Field(default_factory=list)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "PublicSchedule":
        """json_agg yields null for an empty roster."""
        data = dict(row)
        data["participantes"] = row.get("participantes") or []
        data["comunidade_nome"] = row.get("comunidade_nome") or ""
        return cls.model_validate(data)


class PublicScheduleList(BaseModel):
    month: str
    schedules: list[PublicSchedule]
    communities: list[str] = Field(
        default_factory=list,
        description="Sorted distinct community names present in the month"
    )
