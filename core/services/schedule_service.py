# =============================================================================
# core/services/schedule_service.py - Schedule Business Logic
# =============================================================================
# Create, edit, delete and list liturgical schedules (escalas) and their
# rosters (escala_participantes).
#
# Table calls run strictly in sequence:
#   create: insert parent -> read generated id -> bulk insert participants
#   edit:   update parent -> delete all participants -> insert new set
#   delete: delete participants -> delete parent
#
# PostgREST gives us no transaction across these calls. When the
# participant insert fails, a compensating write undoes the partial state
# (parent removed on create, previous roster restored on edit) and the
# caller gets SCHEDULE_WRITE_FAILED with `rolled_back` telling whether the
# compensation itself succeeded.
# =============================================================================

import logging
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID

from app.exceptions import (
    DuplicateParticipantError,
    EmptyRosterError,
    InvalidMonthError,
    ScheduleLockedError,
    ScheduleNotFoundError,
    ScheduleWriteError,
)
from core.models.schedule import (
    ParticipantIn,
    PublicSchedule,
    PublicScheduleList,
    ScheduleCreate,
    ScheduleEdit,
    ScheduleView,
)
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import first_of_month, month_bounds, to_date

logger = logging.getLogger(__name__)

SCHEDULES = "escalas"
PARTICIPANTS = "escala_participantes"
PUBLIC_VIEW = "escalas_publicas"

# Parent row plus community, roster, person and role names in one request
SCHEDULE_SELECT = (
    "*, comunidade:comunidades(nome), "
    "participantes:escala_participantes("
    "pessoa_id, funcao_liturgica_id, "
    "pessoa:pessoas(nome_completo, funcao), "
    "funcao_liturgica:funcoes_liturgicas(nome))"
)


def is_editable(schedule_date: date | str, today: date | None = None) -> bool:
    """
    True if a schedule on `schedule_date` may still be edited or deleted.

    Schedules from the current month onward are open; anything before the
    first day of the current month is locked.

    Example:
        is_editable(date(2024, 5, 1), today=date(2024, 5, 20))   -> True
        is_editable(date(2024, 4, 30), today=date(2024, 5, 20))  -> False
    """
    return to_date(schedule_date) >= first_of_month(today or date.today())


def _check_roster(participants: list[ParticipantIn]) -> None:
    """
    Raises:
        EmptyRosterError: No participants
        DuplicateParticipantError: A person listed twice
    """
    if not participants:
        raise EmptyRosterError()
    seen: set[UUID] = set()
    for participant in participants:
        if participant.pessoa_id in seen:
            raise DuplicateParticipantError(str(participant.pessoa_id))
        seen.add(participant.pessoa_id)


def _participant_rows(schedule_id: str, participants: list[ParticipantIn]) -> list[dict[str, Any]]:
    return [
        {
            "escala_id": schedule_id,
            "pessoa_id": str(p.pessoa_id),
            "funcao_liturgica_id": str(p.funcao_liturgica_id) if p.funcao_liturgica_id else None,
        }
        for p in participants
    ]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ScheduleService:
    """
    Service for schedule operations.

    All methods are static; the Supabase client is the only state.
    """

    @staticmethod
    def create_schedule(draft: ScheduleCreate, user_id: UUID | str) -> dict[str, Any]:
        """
        Create a schedule and its roster.

        Args:
            draft: Date, time, community, notes and participants
            user_id: Coordinator creating it (stored as created_by/updated_by)

        Returns:
            The parent row with the inserted participant rows under "participantes"

        Raises:
            EmptyRosterError: No participants or no community (before any insert)
            DuplicateParticipantError: Same person twice (before any insert)
            SupabaseClientError: Parent insert failed (nothing else attempted)
            ScheduleWriteError: Participant insert failed (parent compensated)
        """
        if draft.comunidade_id is None:
            raise EmptyRosterError()
        _check_roster(draft.participantes)

        parent_rows = SupabaseClient.insert_rows(SCHEDULES, {
            "data": draft.data.isoformat(),
            "horario": draft.horario,
            "comunidade_id": str(draft.comunidade_id),
            "observacoes": draft.observacoes,
            "created_by": str(user_id),
            "updated_by": str(user_id),
        })
        if not parent_rows:
            raise ScheduleWriteError(None, "Insert returned no data", rolled_back=False)

        parent = parent_rows[0]
        schedule_id = str(parent["id"])

        try:
            participants = SupabaseClient.insert_rows(
                PARTICIPANTS, _participant_rows(schedule_id, draft.participantes)
            )
        except SupabaseClientError as e:
            logger.error(f"Participant insert failed for new schedule {schedule_id}: {e.message}")
            rolled_back = ScheduleService._compensate_delete(schedule_id)
            raise ScheduleWriteError(schedule_id, e.message, rolled_back) from e

        logger.info(
            f"Created schedule {schedule_id} ({draft.data} {draft.horario}) "
            f"with {len(participants)} participant(s) by {user_id}"
        )
        return {**parent, "participantes": participants}

    @staticmethod
    def update_schedule(
        schedule_id: UUID | str,
        edit: ScheduleEdit,
        user_id: UUID | str,
        today: date | None = None,
    ) -> dict[str, Any]:
        """
        Replace the notes and the full roster of a schedule.

        The stored roster afterwards is exactly the submitted one.

        Raises:
            ScheduleNotFoundError: Unknown schedule
            ScheduleLockedError: Schedule is before the current month
            EmptyRosterError / DuplicateParticipantError: Bad roster
            ScheduleWriteError: New roster insert failed (old roster restored)
        """
        schedule_id = str(schedule_id)
        existing = ScheduleService._get_row(schedule_id)

        if not is_editable(existing["data"], today):
            logger.warning(f"Rejected edit of locked schedule {schedule_id}")
            raise ScheduleLockedError(schedule_id, str(existing["data"]))
        _check_roster(edit.participantes)

        previous = SupabaseClient.fetch_all(
            PARTICIPANTS,
            columns="escala_id, pessoa_id, funcao_liturgica_id",
            eq={"escala_id": schedule_id},
        )

        updated = SupabaseClient.update_rows(
            SCHEDULES,
            {
                "observacoes": edit.observacoes,
                "updated_by": str(user_id),
                "updated_at": _now(),
            },
            eq={"id": schedule_id},
        )
        SupabaseClient.delete_rows(PARTICIPANTS, eq={"escala_id": schedule_id})

        try:
            participants = SupabaseClient.insert_rows(
                PARTICIPANTS, _participant_rows(schedule_id, edit.participantes)
            )
        except SupabaseClientError as e:
            logger.error(f"Participant insert failed for schedule {schedule_id}: {e.message}")
            rolled_back = ScheduleService._compensate_restore(schedule_id, previous)
            raise ScheduleWriteError(schedule_id, e.message, rolled_back) from e

        logger.info(
            f"Updated schedule {schedule_id}: {len(participants)} participant(s) by {user_id}"
        )
        parent = updated[0] if updated else existing
        return {**parent, "participantes": participants}

    @staticmethod
    def delete_schedule(
        schedule_id: UUID | str,
        user_id: UUID | str,
        today: date | None = None,
    ) -> None:
        """
        Delete a schedule and its roster (roster first).

        Raises:
            ScheduleNotFoundError: Unknown schedule
            ScheduleLockedError: Schedule is before the current month
        """
        schedule_id = str(schedule_id)
        existing = ScheduleService._get_row(schedule_id)

        if not is_editable(existing["data"], today):
            logger.warning(f"Rejected delete of locked schedule {schedule_id}")
            raise ScheduleLockedError(schedule_id, str(existing["data"]), action="excluir")

        SupabaseClient.delete_rows(PARTICIPANTS, eq={"escala_id": schedule_id})
        SupabaseClient.delete_rows(SCHEDULES, eq={"id": schedule_id})
        logger.info(f"Deleted schedule {schedule_id} by {user_id}")

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def get_schedule(schedule_id: UUID | str, today: date | None = None) -> ScheduleView:
        """
        Get one schedule with community, roster and editor name.

        Raises:
            ScheduleNotFoundError: Unknown schedule
        """
        row = SupabaseClient.fetch_one(SCHEDULES, columns=SCHEDULE_SELECT, eq={"id": str(schedule_id)})
        if not row:
            raise ScheduleNotFoundError(str(schedule_id))
        return ScheduleView.from_row(
            row,
            editable=is_editable(row["data"], today),
            updated_by_name=ScheduleService._editor_name(row.get("updated_by"), {}),
        )

    @staticmethod
    def list_schedules(
        month: str,
        community_id: UUID | str | None = None,
        today: date | None = None,
    ) -> list[ScheduleView]:
        """
        List a month's schedules, ordered by date then time.

        Args:
            month: "YYYY-MM"
            community_id: Optional community filter

        Raises:
            InvalidMonthError: Month isn't YYYY-MM
        """
        try:
            start, end = month_bounds(month)
        except ValueError:
            raise InvalidMonthError(month)

        rows = SupabaseClient.fetch_all(
            SCHEDULES,
            columns=SCHEDULE_SELECT,
            eq={"comunidade_id": str(community_id)} if community_id else None,
            order=["data", "horario"],
            gte={"data": start.isoformat()},
            lt={"data": end.isoformat()},
        )

        names: dict[str, str | None] = {}
        return [
            ScheduleView.from_row(
                row,
                editable=is_editable(row["data"], today),
                updated_by_name=ScheduleService._editor_name(row.get("updated_by"), names),
            )
            for row in rows
        ]

    @staticmethod
    def list_public_schedules(month: str, community_name: str | None = None) -> PublicScheduleList:
        """
        Unauthenticated listing from the escalas_publicas view.

        `communities` lists every community present in the month (before the
        name filter), sorted, so the filter dropdown never loses options.

        Raises:
            InvalidMonthError: Month isn't YYYY-MM
        """
        try:
            start, end = month_bounds(month)
        except ValueError:
            raise InvalidMonthError(month)

        rows = SupabaseClient.fetch_all(
            PUBLIC_VIEW,
            order=["data", "horario"],
            gte={"data": start.isoformat()},
            lt={"data": end.isoformat()},
        )
        schedules = [PublicSchedule.from_row(row) for row in rows]
        communities = sorted({s.comunidade_nome for s in schedules if s.comunidade_nome})

        if community_name:
            schedules = [s for s in schedules if s.comunidade_nome == community_name]

        return PublicScheduleList(month=month, schedules=schedules, communities=communities)

    @staticmethod
    def get_public_schedule(schedule_id: UUID | str) -> PublicSchedule:
        """
        Raises:
            ScheduleNotFoundError: Not present in the public view
        """
        row = SupabaseClient.fetch_one(PUBLIC_VIEW, eq={"id": str(schedule_id)})
        if not row:
            raise ScheduleNotFoundError(str(schedule_id))
        return PublicSchedule.from_row(row)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _get_row(schedule_id: str) -> dict[str, Any]:
        row = SupabaseClient.fetch_one(SCHEDULES, eq={"id": schedule_id})
        if not row:
            raise ScheduleNotFoundError(schedule_id)
        return row

    @staticmethod
    def _editor_name(user_id: str | None, cache: dict[str, str | None]) -> str | None:
        """Full name of the last editor, looked up once per user."""
        if not user_id:
            return None
        if user_id not in cache:
            row = SupabaseClient.fetch_one("profiles", columns="full_name", eq={"user_id": user_id})
            cache[user_id] = (row or {}).get("full_name") or None
        return cache[user_id]

    @staticmethod
    def _compensate_delete(schedule_id: str) -> bool:
        try:
            SupabaseClient.delete_rows(SCHEDULES, eq={"id": schedule_id})
            logger.info(f"Removed orphan schedule {schedule_id}")
            return True
        except SupabaseClientError as e:
            logger.error(f"Could not remove orphan schedule {schedule_id}: {e.message}")
            return False

    @staticmethod
    def _compensate_restore(schedule_id: str, previous: list[dict[str, Any]]) -> bool:
        if not previous:
            return True
        try:
            SupabaseClient.insert_rows(PARTICIPANTS, [
                {
                    "escala_id": schedule_id,
                    "pessoa_id": row["pessoa_id"],
                    "funcao_liturgica_id": row.get("funcao_liturgica_id"),
                }
                for row in previous
            ])
            logger.info(f"Restored {len(previous)} participant(s) of schedule {schedule_id}")
            return True
        except SupabaseClientError as e:
            logger.error(f"Could not restore roster of schedule {schedule_id}: {e.message}")
            return False
