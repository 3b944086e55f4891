# =============================================================================
# app/routers/references.py - Reference Data Endpoints
# =============================================================================
# Communities, people and liturgical roles for the schedule form.
# All endpoints require authentication.
# =============================================================================

from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from app.auth import AuthUser, get_current_user
from core.models.reference import Community, LiturgicalRole, Person, RoleCreate
from core.services.reference_service import ReferenceService

router = APIRouter()


@router.get("/communities", response_model=list[Community])
async def list_communities(user: AuthUser = Depends(get_current_user)):
    return ReferenceService.list_communities()


@router.get("/people", response_model=list[Person])
async def list_people(user: AuthUser = Depends(get_current_user)):
    """Active people, by name."""
    return ReferenceService.list_people()


@router.get("/liturgical-roles", response_model=list[LiturgicalRole])
async def list_roles(user: AuthUser = Depends(get_current_user)):
    return ReferenceService.list_roles()


@router.post("/liturgical-roles", response_model=LiturgicalRole, status_code=status.HTTP_201_CREATED)
async def create_role(
    request: RoleCreate,
    user: AuthUser = Depends(get_current_user),
):
    """
    Add a liturgical role.

    Raises:
        400: Blank name (INVALID_ROLE_NAME)
        409: Name already exists (ROLE_EXISTS)
    """
    return ReferenceService.create_role(request.nome)


@router.delete("/liturgical-roles/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    role_id: UUID,
    user: AuthUser = Depends(get_current_user),
):
    ReferenceService.delete_role(role_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
