from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Teammate:
    """Domain entity: a person's membership in an organization, with permissions."""

    teammate_id: int
    person_id: int
    organization_id: int
    can_manage_employment: bool = False
    can_create_employment: bool = False
    can_manage_maap: bool = False
    first_employed_at: Optional[date] = None
    last_terminated_at: Optional[date] = None

    @property
    def is_follower(self) -> bool:
        return self.first_employed_at is None and self.last_terminated_at is None

    @property
    def is_employed(self) -> bool:
        return self.first_employed_at is not None and self.last_terminated_at is None

    @property
    def is_terminated(self) -> bool:
        return self.last_terminated_at is not None

    @property
    def employment_state(self) -> str:
        if self.is_terminated:
            return "Terminated"
        if self.is_employed:
            return "Employed"
        if self.is_follower:
            return "Follower"
        return "Unknown"
