from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import OrganizationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_int, db_cursor, fetchall, fetchone
from .model import Organization
from .repository import OrganizationRepository


def _to_organization(r: dict) -> Organization:
    return Organization(
        organization_id=int(r["organization_id"]),
        name=r["name"],
        org_type=OrganizationType(r.get("org_type") or OrganizationType.ORGANIZATION.value),
        parent_id=as_optional_int(r.get("parent_id")),
    )


class MySQLOrganizationRepository(OrganizationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, organization_id: int) -> Optional[Organization]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT organization_id, name, org_type, parent_id FROM organizations WHERE organization_id=%s",
                (int(organization_id),),
            )
            r = fetchone(cur)
            return _to_organization(r) if r else None

    def list_by_ids(self, organization_ids: Sequence[int]) -> Sequence[Organization]:
        ids = [int(i) for i in organization_ids]
        if not ids:
            return []
        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT organization_id, name, org_type, parent_id
                FROM organizations
                WHERE organization_id IN ({placeholders})
                ORDER BY name
                """,
                tuple(ids),
            )
            return [_to_organization(r) for r in fetchall(cur)]
