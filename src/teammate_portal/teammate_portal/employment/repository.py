from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import EmploymentTenure


class EmploymentTenureRepository(Protocol):
    def list_for_teammate(self, teammate_id: int, *, company_id: Optional[int] = None) -> Sequence[EmploymentTenure]:
        """Most recent first."""
        raise NotImplementedError

    def get_active(self, teammate_id: int, company_id: int) -> Optional[EmploymentTenure]:
        raise NotImplementedError

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
        raise NotImplementedError

    def end(self, tenure_id: int, *, ended_at: date) -> bool:
        raise NotImplementedError
