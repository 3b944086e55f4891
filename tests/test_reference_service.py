# =============================================================================
# tests/test_reference_service.py - Reference Data Tests
# =============================================================================

import pytest

from app.exceptions import InvalidRoleNameError, RoleExistsError
from core.services.reference_service import ReferenceService


class TestReads:
    """Test the reference listings."""

    def test_communities_sorted(self, fake_db):
        fake_db.seed("comunidades", {"nome": "São Pedro"}, {"nome": "Matriz"})

        names = [c.nome for c in ReferenceService.list_communities()]

        assert names == ["Matriz", "São Pedro"]

    def test_only_active_people(self, fake_db):
        fake_db.seed(
            "pessoas",
            {"nome_completo": "Bruna", "funcao": "Ministra", "ativo": True},
            {"nome_completo": "Aldo", "funcao": None, "ativo": False},
            {"nome_completo": "Ana", "funcao": "Leitora", "ativo": True},
        )

        people = ReferenceService.list_people()

        assert [p.nome_completo for p in people] == ["Ana", "Bruna"]


class TestRoles:
    """Test liturgical role management."""

    def test_create_trims_name(self, fake_db):
        role = ReferenceService.create_role("  Salmista ")

        assert role.nome == "Salmista"
        assert fake_db.rows("funcoes_liturgicas")[0]["nome"] == "Salmista"

    def test_blank_name_rejected(self, fake_db):
        with pytest.raises(InvalidRoleNameError) as exc:
            ReferenceService.create_role("   ")

        assert exc.value.message == "Digite o nome da função"
        assert fake_db.writes() == []

    def test_duplicate_name(self, fake_db):
        ReferenceService.create_role("Leitor")

        with pytest.raises(RoleExistsError) as exc:
            ReferenceService.create_role("Leitor")

        assert exc.value.status_code == 409
        assert len(fake_db.rows("funcoes_liturgicas")) == 1

    def test_delete(self, fake_db):
        role = ReferenceService.create_role("Acólito")

        ReferenceService.delete_role(role.id)

        assert ReferenceService.list_roles() == []
