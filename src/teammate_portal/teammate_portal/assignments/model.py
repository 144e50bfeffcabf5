from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Assignment:
    """Domain entity: a set of responsibilities a company hands out."""

    assignment_id: int
    company_id: int
    title: str


@dataclass(frozen=True)
class AssignmentTenure:
    assignment_tenure_id: int
    teammate_id: int
    assignment_id: int
    started_at: date
    ended_at: Optional[date] = None
    anticipated_energy_percentage: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.ended_at is None
