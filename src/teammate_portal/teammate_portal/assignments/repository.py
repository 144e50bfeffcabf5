from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Assignment, AssignmentTenure


class AssignmentRepository(Protocol):
    def get_by_id(self, assignment_id: int) -> Optional[Assignment]:
        raise NotImplementedError

    def list_active_tenures_for_teammate(self, teammate_id: int) -> Sequence[AssignmentTenure]:
        raise NotImplementedError
