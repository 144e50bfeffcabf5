from __future__ import annotations

from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_int, db_cursor, fetchone
from .model import AspirationCheckIn, AssignmentCheckIn, PositionCheckIn
from .repository import CheckInRepository

_SHARED_COLUMNS = """
    check_in_id, teammate_id, check_in_started_on, employee_rating, manager_rating,
    employee_private_notes, manager_private_notes, employee_completed_at,
    manager_completed_at, manager_completed_by_id, official_rating, shared_notes,
    official_check_in_completed_at, finalized_by_id
"""

_SHARED_ASSIGNMENTS = """
    employee_rating=%s, manager_rating=%s,
    employee_private_notes=%s, manager_private_notes=%s,
    employee_completed_at=%s, manager_completed_at=%s, manager_completed_by_id=%s,
    official_rating=%s, shared_notes=%s, official_check_in_completed_at=%s, finalized_by_id=%s
"""


def _shared_fields(r: dict) -> dict:
    return dict(
        check_in_id=int(r["check_in_id"]),
        teammate_id=int(r["teammate_id"]),
        check_in_started_on=r["check_in_started_on"],
        employee_rating=r.get("employee_rating"),
        manager_rating=r.get("manager_rating"),
        employee_private_notes=r.get("employee_private_notes"),
        manager_private_notes=r.get("manager_private_notes"),
        employee_completed_at=r.get("employee_completed_at"),
        manager_completed_at=r.get("manager_completed_at"),
        manager_completed_by_id=as_optional_int(r.get("manager_completed_by_id")),
        official_rating=r.get("official_rating"),
        shared_notes=r.get("shared_notes"),
        official_check_in_completed_at=r.get("official_check_in_completed_at"),
        finalized_by_id=as_optional_int(r.get("finalized_by_id")),
    )


def _shared_values(check_in) -> tuple:
    return (
        check_in.employee_rating,
        check_in.manager_rating,
        check_in.employee_private_notes,
        check_in.manager_private_notes,
        check_in.employee_completed_at,
        check_in.manager_completed_at,
        check_in.manager_completed_by_id,
        check_in.official_rating,
        check_in.shared_notes,
        check_in.official_check_in_completed_at,
        check_in.finalized_by_id,
    )


def _to_position_check_in(r: dict) -> PositionCheckIn:
    fields = _shared_fields(r)
    for name in ("employee_rating", "manager_rating", "official_rating"):
        fields[name] = as_optional_int(fields[name])
    return PositionCheckIn(employment_tenure_id=int(r["employment_tenure_id"]), **fields)


def _to_assignment_check_in(r: dict) -> AssignmentCheckIn:
    return AssignmentCheckIn(
        assignment_id=int(r["assignment_id"]),
        actual_energy_percentage=as_optional_int(r.get("actual_energy_percentage")),
        employee_personal_alignment=r.get("employee_personal_alignment"),
        **_shared_fields(r),
    )


def _to_aspiration_check_in(r: dict) -> AspirationCheckIn:
    return AspirationCheckIn(aspiration_id=int(r["aspiration_id"]), **_shared_fields(r))


class MySQLCheckInRepository(CheckInRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # ----- position -----
    def find_open_position_check_in(self, teammate_id: int) -> Optional[PositionCheckIn]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SHARED_COLUMNS}, employment_tenure_id
                FROM position_check_ins
                WHERE teammate_id=%s AND official_check_in_completed_at IS NULL
                ORDER BY check_in_id DESC
                LIMIT 1
                """,
                (int(teammate_id),),
            )
            r = fetchone(cur)
            return _to_position_check_in(r) if r else None

    def create_position_check_in(self, *, teammate_id: int, employment_tenure_id: int, started_on: date) -> PositionCheckIn:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO position_check_ins(teammate_id, employment_tenure_id, check_in_started_on) VALUES(%s,%s,%s)",
                (int(teammate_id), int(employment_tenure_id), started_on),
            )
            check_in_id = int(cur.lastrowid)
        return PositionCheckIn(
            check_in_id=check_in_id,
            teammate_id=int(teammate_id),
            employment_tenure_id=int(employment_tenure_id),
            check_in_started_on=started_on,
        )

    def update_position_check_in(self, check_in: PositionCheckIn) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE position_check_ins SET {_SHARED_ASSIGNMENTS} WHERE check_in_id=%s",
                _shared_values(check_in) + (check_in.check_in_id,),
            )

    # ----- assignments -----
    def find_open_assignment_check_in(self, teammate_id: int, assignment_id: int) -> Optional[AssignmentCheckIn]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SHARED_COLUMNS}, assignment_id, actual_energy_percentage, employee_personal_alignment
                FROM assignment_check_ins
                WHERE teammate_id=%s AND assignment_id=%s AND official_check_in_completed_at IS NULL
                ORDER BY check_in_id DESC
                LIMIT 1
                """,
                (int(teammate_id), int(assignment_id)),
            )
            r = fetchone(cur)
            return _to_assignment_check_in(r) if r else None

    def create_assignment_check_in(self, *, teammate_id: int, assignment_id: int, started_on: date) -> AssignmentCheckIn:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO assignment_check_ins(teammate_id, assignment_id, check_in_started_on) VALUES(%s,%s,%s)",
                (int(teammate_id), int(assignment_id), started_on),
            )
            check_in_id = int(cur.lastrowid)
        return AssignmentCheckIn(
            check_in_id=check_in_id,
            teammate_id=int(teammate_id),
            assignment_id=int(assignment_id),
            check_in_started_on=started_on,
        )

    def update_assignment_check_in(self, check_in: AssignmentCheckIn) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE assignment_check_ins
                SET {_SHARED_ASSIGNMENTS}, actual_energy_percentage=%s, employee_personal_alignment=%s
                WHERE check_in_id=%s
                """,
                _shared_values(check_in)
                + (check_in.actual_energy_percentage, check_in.employee_personal_alignment, check_in.check_in_id),
            )

    # ----- aspirations -----
    def find_open_aspiration_check_in(self, teammate_id: int, aspiration_id: int) -> Optional[AspirationCheckIn]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_SHARED_COLUMNS}, aspiration_id
                FROM aspiration_check_ins
                WHERE teammate_id=%s AND aspiration_id=%s AND official_check_in_completed_at IS NULL
                ORDER BY check_in_id DESC
                LIMIT 1
                """,
                (int(teammate_id), int(aspiration_id)),
            )
            r = fetchone(cur)
            return _to_aspiration_check_in(r) if r else None

    def create_aspiration_check_in(self, *, teammate_id: int, aspiration_id: int, started_on: date) -> AspirationCheckIn:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO aspiration_check_ins(teammate_id, aspiration_id, check_in_started_on) VALUES(%s,%s,%s)",
                (int(teammate_id), int(aspiration_id), started_on),
            )
            check_in_id = int(cur.lastrowid)
        return AspirationCheckIn(
            check_in_id=check_in_id,
            teammate_id=int(teammate_id),
            aspiration_id=int(aspiration_id),
            check_in_started_on=started_on,
        )

    def update_aspiration_check_in(self, check_in: AspirationCheckIn) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE aspiration_check_ins SET {_SHARED_ASSIGNMENTS} WHERE check_in_id=%s",
                _shared_values(check_in) + (check_in.check_in_id,),
            )
