from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import CheckInStatus


class _TwoSidedCheckIn:
    """Shared state for check-ins completed by both the employee and the manager."""

    employee_completed_at: Optional[datetime]
    manager_completed_at: Optional[datetime]
    official_check_in_completed_at: Optional[datetime]

    @property
    def is_open(self) -> bool:
        return self.official_check_in_completed_at is None

    @property
    def employee_completed(self) -> bool:
        return self.employee_completed_at is not None

    @property
    def manager_completed(self) -> bool:
        return self.manager_completed_at is not None

    @property
    def ready_for_finalization(self) -> bool:
        return self.is_open and self.employee_completed and self.manager_completed

    @property
    def status(self) -> CheckInStatus:
        if not self.is_open:
            return CheckInStatus.COMPLETE
        if self.employee_completed and self.manager_completed:
            return CheckInStatus.READY_TO_FINALIZE
        if self.employee_completed:
            return CheckInStatus.WAITING_FOR_MANAGER
        if self.manager_completed:
            return CheckInStatus.WAITING_FOR_EMPLOYEE
        return CheckInStatus.IN_PROGRESS


@dataclass(frozen=True)
class PositionCheckIn(_TwoSidedCheckIn):
    """Check-in on how the teammate is doing in their current position.

    Ratings are whole numbers from POSITION_RATING_MIN to POSITION_RATING_MAX.
    """

    check_in_id: int
    teammate_id: int
    employment_tenure_id: int
    check_in_started_on: date
    employee_rating: Optional[int] = None
    manager_rating: Optional[int] = None
    employee_private_notes: Optional[str] = None
    manager_private_notes: Optional[str] = None
    employee_completed_at: Optional[datetime] = None
    manager_completed_at: Optional[datetime] = None
    manager_completed_by_id: Optional[int] = None
    official_rating: Optional[int] = None
    shared_notes: Optional[str] = None
    official_check_in_completed_at: Optional[datetime] = None
    finalized_by_id: Optional[int] = None


@dataclass(frozen=True)
class AssignmentCheckIn(_TwoSidedCheckIn):
    check_in_id: int
    teammate_id: int
    assignment_id: int
    check_in_started_on: date
    employee_rating: Optional[str] = None
    manager_rating: Optional[str] = None
    employee_private_notes: Optional[str] = None
    manager_private_notes: Optional[str] = None
    actual_energy_percentage: Optional[int] = None
    employee_personal_alignment: Optional[str] = None
    employee_completed_at: Optional[datetime] = None
    manager_completed_at: Optional[datetime] = None
    manager_completed_by_id: Optional[int] = None
    official_rating: Optional[str] = None
    shared_notes: Optional[str] = None
    official_check_in_completed_at: Optional[datetime] = None
    finalized_by_id: Optional[int] = None


@dataclass(frozen=True)
class AspirationCheckIn(_TwoSidedCheckIn):
    check_in_id: int
    teammate_id: int
    aspiration_id: int
    check_in_started_on: date
    employee_rating: Optional[str] = None
    manager_rating: Optional[str] = None
    employee_private_notes: Optional[str] = None
    manager_private_notes: Optional[str] = None
    employee_completed_at: Optional[datetime] = None
    manager_completed_at: Optional[datetime] = None
    manager_completed_by_id: Optional[int] = None
    official_rating: Optional[str] = None
    shared_notes: Optional[str] = None
    official_check_in_completed_at: Optional[datetime] = None
    finalized_by_id: Optional[int] = None
