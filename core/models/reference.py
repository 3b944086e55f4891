# =============================================================================
# core/models/reference.py - Reference Data Schemas
# =============================================================================
# Communities, people and liturgical roles that schedules point at.
# =============================================================================

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class Community(BaseModel):
    id: UUID
    nome: str


class Person(BaseModel):
    id: UUID
    nome_completo: str
    funcao: str | None = None
    ativo: bool = True


class LiturgicalRole(BaseModel):
    id: UUID
    nome: str
    created_at: datetime | None = None


class RoleCreate(BaseModel):
    """
    Schema for adding a liturgical role.

    The name is trimmed by the service; blank names are rejected.

    Example:
        {"nome": "Salmista"}
    """

    nome: str = Field(..., max_length=100, description="Role name, unique")
