from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_int, db_cursor, fetchall, fetchone
from .model import Assignment, AssignmentTenure
from .repository import AssignmentRepository


class MySQLAssignmentRepository(AssignmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, assignment_id: int) -> Optional[Assignment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT assignment_id, company_id, title FROM assignments WHERE assignment_id=%s",
                (int(assignment_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Assignment(assignment_id=int(r["assignment_id"]), company_id=int(r["company_id"]), title=r["title"])

    def list_active_tenures_for_teammate(self, teammate_id: int) -> Sequence[AssignmentTenure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT assignment_tenure_id, teammate_id, assignment_id, started_at, ended_at,
                       anticipated_energy_percentage
                FROM assignment_tenures
                WHERE teammate_id=%s AND ended_at IS NULL
                ORDER BY started_at ASC, assignment_tenure_id ASC
                """,
                (int(teammate_id),),
            )
            return [
                AssignmentTenure(
                    assignment_tenure_id=int(r["assignment_tenure_id"]),
                    teammate_id=int(r["teammate_id"]),
                    assignment_id=int(r["assignment_id"]),
                    started_at=r["started_at"],
                    ended_at=r.get("ended_at"),
                    anticipated_energy_percentage=as_optional_int(r.get("anticipated_energy_percentage")),
                )
                for r in fetchall(cur)
            ]
