# =============================================================================
# core/services/reference_service.py - Reference Data
# =============================================================================
# Communities, people and liturgical roles used by the schedule form.
# =============================================================================

import logging
from uuid import UUID

from app.exceptions import InvalidRoleNameError, RoleExistsError
from core.models.reference import Community, LiturgicalRole, Person
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


class ReferenceService:
    """Read access to reference tables plus liturgical role management."""

    @staticmethod
    def list_communities() -> list[Community]:
        rows = SupabaseClient.fetch_all("comunidades", columns="id, nome", order=["nome"])
        return [Community.model_validate(r) for r in rows]

    @staticmethod
    def list_people() -> list[Person]:
        """Active people only, by name."""
        rows = SupabaseClient.fetch_all(
            "pessoas",
            columns="id, nome_completo, funcao, ativo",
            eq={"ativo": True},
            order=["nome_completo"],
        )
        return [Person.model_validate(r) for r in rows]

    @staticmethod
    def list_roles() -> list[LiturgicalRole]:
        rows = SupabaseClient.fetch_all("funcoes_liturgicas", order=["nome"])
        return [LiturgicalRole.model_validate(r) for r in rows]

    @staticmethod
    def create_role(name: str) -> LiturgicalRole:
        """
        Add a liturgical role.

        Args:
            name: Role name; surrounding whitespace is dropped

        Raises:
            InvalidRoleNameError: Blank name
            RoleExistsError: Name already taken (unique violation)
        """
        name = (name or "").strip()
        if not name:
            raise InvalidRoleNameError()

        try:
            rows = SupabaseClient.insert_rows("funcoes_liturgicas", {"nome": name})
        except SupabaseClientError as e:
            if e.is_unique_violation:
                logger.warning(f"Liturgical role {name!r} already exists")
                raise RoleExistsError(name) from e
            raise

        logger.info(f"Created liturgical role {name!r}")
        return LiturgicalRole.model_validate(rows[0])

    @staticmethod
    def delete_role(role_id: UUID | str) -> None:
        SupabaseClient.delete_rows("funcoes_liturgicas", eq={"id": str(role_id)})
        logger.info(f"Deleted liturgical role {role_id}")
