# =============================================================================
# tests/test_schedule_service.py - Schedule Service Tests
# =============================================================================
# Covers the month lock, roster validation, the write order of create/edit/
# delete, compensation when the roster write fails, and the listings.
# =============================================================================

import uuid
from datetime import date

import pytest

from app.exceptions import (
    DuplicateParticipantError,
    EmptyRosterError,
    InvalidMonthError,
    ScheduleLockedError,
    ScheduleNotFoundError,
    ScheduleWriteError,
)
from core.models.schedule import ScheduleCreate, ScheduleEdit
from core.services.schedule_service import ScheduleService, is_editable

TODAY = date(2024, 5, 20)


def _uuid() -> str:
    return str(uuid.uuid4())


def _draft(people: list[str], community: str | None = None, **overrides) -> ScheduleCreate:
    data = {
        "data": "2024-05-26",
        "horario": "10:00",
        "comunidade_id": community or _uuid(),
        "observacoes": "  Missa das crianças  ",
        "participantes": [{"pessoa_id": p} for p in people],
    }
    data.update(overrides)
    return ScheduleCreate.model_validate(data)


def _edit(people: list[str], notes: str | None = None) -> ScheduleEdit:
    return ScheduleEdit.model_validate({
        "observacoes": notes,
        "participantes": [{"pessoa_id": p} for p in people],
    })


@pytest.fixture
def stored_schedule(fake_db, user_id):
    """A May schedule with persons A and B on the roster."""
    a, b = _uuid(), _uuid()
    [parent] = fake_db.seed("escalas", {
        "data": "2024-05-12",
        "horario": "10:00",
        "comunidade_id": _uuid(),
        "observacoes": None,
        "created_by": user_id,
        "updated_by": user_id,
    })
    fake_db.seed(
        "escala_participantes",
        {"escala_id": parent["id"], "pessoa_id": a, "funcao_liturgica_id": None},
        {"escala_id": parent["id"], "pessoa_id": b, "funcao_liturgica_id": None},
    )
    fake_db.calls.clear()
    return {"id": parent["id"], "a": a, "b": b}


def _roster(fake_db, schedule_id: str) -> set[str]:
    return {
        row["pessoa_id"] for row in fake_db.rows("escala_participantes")
        if row["escala_id"] == schedule_id
    }


# =============================================================================
# Month Lock
# =============================================================================

class TestIsEditable:
    """Test is_editable()."""

    def test_first_day_of_current_month_is_editable(self):
        assert is_editable(date(2024, 5, 1), today=TODAY)

    def test_last_day_of_previous_month_is_locked(self):
        assert not is_editable(date(2024, 4, 30), today=TODAY)

    def test_future_month_is_editable(self):
        assert is_editable("2024-07-03", today=TODAY)

    def test_january_looks_back_to_december(self):
        assert not is_editable(date(2023, 12, 31), today=date(2024, 1, 1))
        assert is_editable(date(2024, 1, 1), today=date(2024, 1, 1))


# =============================================================================
# Create
# =============================================================================

class TestCreateSchedule:
    """Test ScheduleService.create_schedule()."""

    def test_creates_parent_then_roster(self, fake_db, user_id):
        a, b = _uuid(), _uuid()

        result = ScheduleService.create_schedule(_draft([a, b]), user_id)

        assert fake_db.writes() == [("escalas", "insert"), ("escala_participantes", "insert")]
        assert result["observacoes"] == "Missa das crianças"
        assert result["created_by"] == user_id
        assert _roster(fake_db, result["id"]) == {a, b}
        assert len(result["participantes"]) == 2

    def test_empty_roster_rejected_before_any_insert(self, fake_db, user_id):
        with pytest.raises(EmptyRosterError) as exc:
            ScheduleService.create_schedule(_draft([]), user_id)

        assert exc.value.message == "Preencha todos os campos obrigatórios"
        assert fake_db.writes() == []

    def test_missing_community_rejected_before_any_insert(self, fake_db, user_id):
        draft = _draft([_uuid()])
        draft.comunidade_id = None

        with pytest.raises(EmptyRosterError):
            ScheduleService.create_schedule(draft, user_id)

        assert fake_db.writes() == []

    def test_duplicate_person_rejected(self, fake_db, user_id):
        a = _uuid()

        with pytest.raises(DuplicateParticipantError):
            ScheduleService.create_schedule(_draft([a, a]), user_id)

        assert fake_db.writes() == []

    def test_roster_failure_removes_parent(self, fake_db, user_id):
        fake_db.fail_on("escala_participantes", "insert")

        with pytest.raises(ScheduleWriteError) as exc:
            ScheduleService.create_schedule(_draft([_uuid()]), user_id)

        assert exc.value.details["rolled_back"] is True
        assert fake_db.rows("escalas") == []

    def test_failed_compensation_is_reported(self, fake_db, user_id):
        fake_db.fail_on("escala_participantes", "insert")
        fake_db.fail_on("escalas", "delete")

        with pytest.raises(ScheduleWriteError) as exc:
            ScheduleService.create_schedule(_draft([_uuid()]), user_id)

        assert exc.value.details["rolled_back"] is False
        assert len(fake_db.rows("escalas")) == 1

    def test_invalid_time_rejected(self):
        with pytest.raises(ValueError):
            _draft([_uuid()], horario="25:00")


# =============================================================================
# Edit
# =============================================================================

class TestUpdateSchedule:
    """Test ScheduleService.update_schedule()."""

    def test_roster_replaced_exactly(self, fake_db, user_id, stored_schedule):
        c = _uuid()
        b = stored_schedule["b"]

        result = ScheduleService.update_schedule(
            stored_schedule["id"], _edit([b, c], notes="Trazer velas"), user_id, today=TODAY
        )

        assert _roster(fake_db, stored_schedule["id"]) == {b, c}
        assert len(fake_db.rows("escala_participantes")) == 2
        assert result["observacoes"] == "Trazer velas"
        assert result["updated_at"] is not None

    def test_write_order(self, fake_db, user_id, stored_schedule):
        ScheduleService.update_schedule(
            stored_schedule["id"], _edit([_uuid()]), user_id, today=TODAY
        )

        assert fake_db.writes() == [
            ("escalas", "update"),
            ("escala_participantes", "delete"),
            ("escala_participantes", "insert"),
        ]

    def test_locked_after_month_ends(self, fake_db, user_id, stored_schedule):
        with pytest.raises(ScheduleLockedError) as exc:
            ScheduleService.update_schedule(
                stored_schedule["id"], _edit([_uuid()]), user_id, today=date(2024, 6, 1)
            )

        assert exc.value.status_code == 403
        assert fake_db.writes() == []

    def test_empty_roster_rejected(self, fake_db, user_id, stored_schedule):
        with pytest.raises(EmptyRosterError):
            ScheduleService.update_schedule(stored_schedule["id"], _edit([]), user_id, today=TODAY)

        assert fake_db.writes() == []
        assert len(_roster(fake_db, stored_schedule["id"])) == 2

    def test_roster_failure_restores_previous(self, fake_db, user_id, stored_schedule):
        fake_db.fail_on("escala_participantes", "insert", times=1)

        with pytest.raises(ScheduleWriteError) as exc:
            ScheduleService.update_schedule(
                stored_schedule["id"], _edit([_uuid()]), user_id, today=TODAY
            )

        assert exc.value.details["rolled_back"] is True
        assert _roster(fake_db, stored_schedule["id"]) == {stored_schedule["a"], stored_schedule["b"]}

    def test_unknown_schedule(self, fake_db, user_id):
        with pytest.raises(ScheduleNotFoundError):
            ScheduleService.update_schedule(_uuid(), _edit([_uuid()]), user_id, today=TODAY)


# =============================================================================
# Delete
# =============================================================================

class TestDeleteSchedule:
    """Test ScheduleService.delete_schedule()."""

    def test_deletes_roster_then_parent(self, fake_db, user_id, stored_schedule):
        ScheduleService.delete_schedule(stored_schedule["id"], user_id, today=TODAY)

        assert fake_db.writes() == [("escala_participantes", "delete"), ("escalas", "delete")]
        assert fake_db.rows("escalas") == []
        assert fake_db.rows("escala_participantes") == []

    def test_locked_schedule_kept(self, fake_db, user_id, stored_schedule):
        with pytest.raises(ScheduleLockedError) as exc:
            ScheduleService.delete_schedule(stored_schedule["id"], user_id, today=date(2024, 6, 2))

        assert exc.value.message == "Não é possível excluir escalas de meses anteriores"
        assert fake_db.writes() == []


# =============================================================================
# Listings
# =============================================================================

class TestListSchedules:
    """Test ScheduleService.list_schedules()."""

    def _seed_month(self, fake_db, editor_id):
        community = _uuid()
        other = _uuid()
        fake_db.seed("profiles", {"user_id": editor_id, "full_name": "Maria Aparecida"})
        fake_db.seed(
            "escalas",
            {"data": "2024-05-12", "horario": "19:30", "comunidade_id": community,
             "comunidade": {"nome": "Matriz"}, "updated_by": editor_id,
             "participantes": [{
                 "pessoa_id": _uuid(),
                 "funcao_liturgica_id": None,
                 "pessoa": {"nome_completo": "José Lima", "funcao": "Leitor"},
                 "funcao_liturgica": None,
             }]},
            {"data": "2024-05-12", "horario": "08:00", "comunidade_id": other,
             "comunidade": {"nome": "São Pedro"}},
            {"data": "2024-05-05", "horario": "10:00", "comunidade_id": community,
             "comunidade": {"nome": "Matriz"}},
            {"data": "2024-06-02", "horario": "10:00", "comunidade_id": community},
            {"data": "2024-04-28", "horario": "10:00", "comunidade_id": community},
        )
        return community

    def test_month_ordered_by_date_then_time(self, fake_db, user_id):
        self._seed_month(fake_db, user_id)

        schedules = ScheduleService.list_schedules("2024-05", today=TODAY)

        assert [(str(s.data), s.horario) for s in schedules] == [
            ("2024-05-05", "10:00"),
            ("2024-05-12", "08:00"),
            ("2024-05-12", "19:30"),
        ]

    def test_views_carry_names_and_lock(self, fake_db, user_id):
        self._seed_month(fake_db, user_id)

        schedules = ScheduleService.list_schedules("2024-05", today=date(2024, 6, 10))
        evening = schedules[-1]

        assert evening.comunidade_nome == "Matriz"
        assert evening.updated_by_name == "Maria Aparecida"
        assert evening.participantes[0].nome_completo == "José Lima"
        assert all(not s.editable for s in schedules)

    def test_community_filter(self, fake_db, user_id):
        community = self._seed_month(fake_db, user_id)

        schedules = ScheduleService.list_schedules("2024-05", community_id=community, today=TODAY)

        assert {s.comunidade_nome for s in schedules} == {"Matriz"}
        assert len(schedules) == 2

    def test_invalid_month(self, fake_db):
        with pytest.raises(InvalidMonthError):
            ScheduleService.list_schedules("maio")


class TestPublicSchedules:
    """Test the unauthenticated listing."""

    def _seed(self, fake_db):
        fake_db.seed(
            "escalas_publicas",
            {"data": "2024-05-12", "horario": "10:00", "comunidade_nome": "São Pedro",
             "participantes": [{"nome_completo": "Ana", "funcao": None, "funcao_liturgica": "Leitora"}]},
            {"data": "2024-05-05", "horario": "10:00", "comunidade_nome": "Matriz",
             "participantes": []},
            {"data": "2024-06-02", "horario": "10:00", "comunidade_nome": "Capela",
             "participantes": []},
        )

    def test_communities_listed_before_filter(self, fake_db):
        self._seed(fake_db)

        result = ScheduleService.list_public_schedules("2024-05", community_name="Matriz")

        assert result.communities == ["Matriz", "São Pedro"]
        assert [s.comunidade_nome for s in result.schedules] == ["Matriz"]

    def test_unfiltered(self, fake_db):
        self._seed(fake_db)

        result = ScheduleService.list_public_schedules("2024-05")

        assert [str(s.data) for s in result.schedules] == ["2024-05-05", "2024-05-12"]
        assert result.schedules[1].participantes[0].funcao_liturgica == "Leitora"

    def test_empty_roster_stored_as_null(self, fake_db):
        [row] = fake_db.seed("escalas_publicas", {
            "data": "2024-05-19", "horario": "08:00", "comunidade_nome": "Capela",
            "participantes": None,
        })

        listed = ScheduleService.list_public_schedules("2024-05")
        single = ScheduleService.get_public_schedule(row["id"])

        assert listed.schedules[0].participantes == []
        assert single.participantes == []

    def test_get_public_schedule_not_found(self, fake_db):
        with pytest.raises(ScheduleNotFoundError):
            ScheduleService.get_public_schedule(_uuid())

    def test_invalid_month(self, fake_db):
        with pytest.raises(InvalidMonthError):
            ScheduleService.list_public_schedules("2024-13")
