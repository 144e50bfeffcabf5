from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Teammate
from .repository import TeammateRepository

_COLUMNS = """
    teammate_id, person_id, organization_id,
    can_manage_employment, can_create_employment, can_manage_maap,
    first_employed_at, last_terminated_at
"""


def _to_teammate(r: dict) -> Teammate:
    return Teammate(
        teammate_id=int(r["teammate_id"]),
        person_id=int(r["person_id"]),
        organization_id=int(r["organization_id"]),
        can_manage_employment=as_bool(r.get("can_manage_employment")),
        can_create_employment=as_bool(r.get("can_create_employment")),
        can_manage_maap=as_bool(r.get("can_manage_maap")),
        first_employed_at=r.get("first_employed_at"),
        last_terminated_at=r.get("last_terminated_at"),
    )


class MySQLTeammateRepository(TeammateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, teammate_id: int) -> Optional[Teammate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM teammates WHERE teammate_id=%s", (int(teammate_id),))
            r = fetchone(cur)
            return _to_teammate(r) if r else None

    def get_for_person_and_organization(self, person_id: int, organization_id: int) -> Optional[Teammate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM teammates WHERE person_id=%s AND organization_id=%s",
                (int(person_id), int(organization_id)),
            )
            r = fetchone(cur)
            return _to_teammate(r) if r else None

    def list_for_person(self, person_id: int) -> Sequence[Teammate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM teammates WHERE person_id=%s ORDER BY teammate_id",
                (int(person_id),),
            )
            return [_to_teammate(r) for r in fetchall(cur)]
