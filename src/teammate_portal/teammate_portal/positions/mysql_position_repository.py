from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Position, PositionLevel, PositionMajorLevel, PositionType
from .repository import PositionRepository

_SELECT = """
    SELECT p.position_id,
           pt.position_type_id, pt.organization_id, pt.external_title,
           pl.position_level_id, pl.level,
           ml.major_level_id, ml.major_level, ml.set_name
    FROM positions p
    JOIN position_types pt ON pt.position_type_id = p.position_type_id
    JOIN position_levels pl ON pl.position_level_id = p.position_level_id
    JOIN position_major_levels ml ON ml.major_level_id = pl.major_level_id
"""


def _to_position(r: dict) -> Position:
    major = PositionMajorLevel(
        major_level_id=int(r["major_level_id"]),
        major_level=int(r["major_level"]),
        set_name=r["set_name"],
    )
    return Position(
        position_id=int(r["position_id"]),
        position_type=PositionType(
            position_type_id=int(r["position_type_id"]),
            organization_id=int(r["organization_id"]),
            external_title=r["external_title"],
            major_level=major,
        ),
        position_level=PositionLevel(
            position_level_id=int(r["position_level_id"]),
            level=r["level"],
            major_level=major,
        ),
    )


class MySQLPositionRepository(PositionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, position_id: int) -> Optional[Position]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE p.position_id=%s", (int(position_id),))
            r = fetchone(cur)
            return _to_position(r) if r else None

    def list_for_organization(self, organization_id: int) -> Sequence[Position]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE pt.organization_id=%s ORDER BY pt.external_title, pl.level",
                (int(organization_id),),
            )
            return [_to_position(r) for r in fetchall(cur)]
