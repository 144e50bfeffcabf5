from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_int, db_cursor, fetchall, fetchone
from .model import EmploymentTenure
from .repository import EmploymentTenureRepository

_COLUMNS = "tenure_id, teammate_id, company_id, position_id, manager_person_id, started_at, ended_at"


def _to_tenure(r: dict) -> EmploymentTenure:
    return EmploymentTenure(
        tenure_id=int(r["tenure_id"]),
        teammate_id=int(r["teammate_id"]),
        company_id=int(r["company_id"]),
        position_id=int(r["position_id"]),
        manager_person_id=as_optional_int(r.get("manager_person_id")),
        started_at=r["started_at"],
        ended_at=r.get("ended_at"),
    )


class MySQLEmploymentTenureRepository(EmploymentTenureRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_teammate(self, teammate_id: int, *, company_id: Optional[int] = None) -> Sequence[EmploymentTenure]:
        sql = f"SELECT {_COLUMNS} FROM employment_tenures WHERE teammate_id=%s"
        params: list = [int(teammate_id)]
        if company_id is not None:
            sql += " AND company_id=%s"
            params.append(int(company_id))
        sql += " ORDER BY started_at DESC, tenure_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_tenure(r) for r in fetchall(cur)]

    def get_active(self, teammate_id: int, company_id: int) -> Optional[EmploymentTenure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM employment_tenures
                WHERE teammate_id=%s AND company_id=%s AND ended_at IS NULL
                ORDER BY started_at DESC
                LIMIT 1
                """,
                (int(teammate_id), int(company_id)),
            )
            r = fetchone(cur)
            return _to_tenure(r) if r else None

    def create(
        self,
        *,
        teammate_id: int,
        company_id: int,
        position_id: int,
        manager_person_id: Optional[int],
        started_at: date,
        ended_at: Optional[date] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employment_tenures(teammate_id, company_id, position_id, manager_person_id, started_at, ended_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(teammate_id), int(company_id), int(position_id), manager_person_id, started_at, ended_at),
            )
            return int(cur.lastrowid)

    def end(self, tenure_id: int, *, ended_at: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employment_tenures SET ended_at=%s WHERE tenure_id=%s AND ended_at IS NULL",
                (ended_at, int(tenure_id)),
            )
            return cur.rowcount > 0
