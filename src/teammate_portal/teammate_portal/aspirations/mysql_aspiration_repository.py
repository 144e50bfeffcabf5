from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Aspiration
from .repository import AspirationRepository


class MySQLAspirationRepository(AspirationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_organization(self, organization_id: int) -> Sequence[Aspiration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT aspiration_id, organization_id, name, description, sort_order
                FROM aspirations
                WHERE organization_id=%s
                ORDER BY sort_order ASC, name ASC
                """,
                (int(organization_id),),
            )
            return [
                Aspiration(
                    aspiration_id=int(r["aspiration_id"]),
                    organization_id=int(r["organization_id"]),
                    name=r["name"],
                    description=r.get("description"),
                    sort_order=int(r.get("sort_order") or 0),
                )
                for r in fetchall(cur)
            ]
