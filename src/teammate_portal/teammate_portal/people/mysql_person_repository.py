from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_int, db_cursor, fetchone
from .model import Person, ProfileChanges
from .repository import PersonRepository

_COLUMNS = """
    person_id, first_name, middle_name, last_name, suffix, preferred_name,
    email, phone_number, timezone, current_organization_id, password_hash, created_at
"""


def _to_person(r: dict) -> Person:
    return Person(
        person_id=int(r["person_id"]),
        first_name=r["first_name"],
        middle_name=r.get("middle_name"),
        last_name=r["last_name"],
        suffix=r.get("suffix"),
        preferred_name=r.get("preferred_name"),
        email=r["email"],
        phone_number=r.get("phone_number"),
        timezone=r.get("timezone"),
        current_organization_id=as_optional_int(r.get("current_organization_id")),
        password_hash=r.get("password_hash"),
        created_at=r.get("created_at"),
    )


class MySQLPersonRepository(PersonRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, where: str, value) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM people WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _to_person(row) if row else None

    def get_by_id(self, person_id: int) -> Optional[Person]:
        return self._get_one("person_id", int(person_id))

    def get_by_email(self, email: str) -> Optional[Person]:
        return self._get_one("email", email.strip().lower())

    def get_by_phone_number(self, phone_number: str) -> Optional[Person]:
        return self._get_one("phone_number", phone_number)

    def update_profile(self, person_id: int, changes: ProfileChanges) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE people
                SET first_name=%s, middle_name=%s, last_name=%s, suffix=%s,
                    preferred_name=%s, phone_number=%s, timezone=%s
                WHERE person_id=%s
                """,
                (
                    changes.first_name,
                    changes.middle_name,
                    changes.last_name,
                    changes.suffix,
                    changes.preferred_name,
                    changes.phone_number,
                    changes.timezone,
                    int(person_id),
                ),
            )
            # MySQL reports 0 affected rows when values are unchanged; existence was checked by the service.
            return cur.rowcount >= 0
