from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_TIMEZONE


@dataclass(frozen=True)
class Person:
    """Domain entity: Person.

    Note: plain data object, no database access.
    """

    person_id: int
    first_name: str
    last_name: str
    email: str
    middle_name: Optional[str] = None
    suffix: Optional[str] = None
    preferred_name: Optional[str] = None
    phone_number: Optional[str] = None
    timezone: Optional[str] = None
    current_organization_id: Optional[int] = None
    password_hash: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name, self.suffix]
        return " ".join(p.strip() for p in parts if p and p.strip())

    @property
    def casual_name(self) -> str:
        return self.preferred_name or self.first_name

    @property
    def timezone_or_default(self) -> str:
        return self.timezone or DEFAULT_TIMEZONE


@dataclass(frozen=True)
class ProfileChanges:
    """Validated editable fields submitted from the profile form."""

    first_name: str
    last_name: str
    middle_name: Optional[str]
    suffix: Optional[str]
    preferred_name: Optional[str]
    phone_number: Optional[str]
    timezone: Optional[str]
