from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class EmploymentTenure:
    """Domain entity: a period during which a teammate holds a position at a company."""

    tenure_id: int
    teammate_id: int
    company_id: int
    position_id: int
    started_at: date
    ended_at: Optional[date] = None
    manager_person_id: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.ended_at is None

    def overlaps(self, started_at: date, ended_at: Optional[date]) -> bool:
        """Whether [started_at, ended_at) intersects this tenure; None means open-ended."""
        mine_end = self.ended_at or date.max
        other_end = ended_at or date.max
        return started_at < mine_end and self.started_at < other_end
