from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import AspirationCheckIn, AssignmentCheckIn, PositionCheckIn


class CheckInRepository(Protocol):
    """Repository interface for position, assignment and aspiration check-ins.

    A teammate has at most one open check-in per subject.
    ``update_*`` writes every mutable column, finalization fields included.
    """

    def find_open_position_check_in(self, teammate_id: int) -> Optional[PositionCheckIn]:
        raise NotImplementedError

    def create_position_check_in(self, *, teammate_id: int, employment_tenure_id: int, started_on: date) -> PositionCheckIn:
        raise NotImplementedError

    def update_position_check_in(self, check_in: PositionCheckIn) -> None:
        raise NotImplementedError

    def find_open_assignment_check_in(self, teammate_id: int, assignment_id: int) -> Optional[AssignmentCheckIn]:
        raise NotImplementedError

    def create_assignment_check_in(self, *, teammate_id: int, assignment_id: int, started_on: date) -> AssignmentCheckIn:
        raise NotImplementedError

    def update_assignment_check_in(self, check_in: AssignmentCheckIn) -> None:
        raise NotImplementedError

    def find_open_aspiration_check_in(self, teammate_id: int, aspiration_id: int) -> Optional[AspirationCheckIn]:
        raise NotImplementedError

    def create_aspiration_check_in(self, *, teammate_id: int, aspiration_id: int, started_on: date) -> AspirationCheckIn:
        raise NotImplementedError

    def update_aspiration_check_in(self, check_in: AspirationCheckIn) -> None:
        raise NotImplementedError
