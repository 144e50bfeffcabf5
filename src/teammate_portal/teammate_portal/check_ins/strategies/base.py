from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime
from typing import Mapping, Optional, Union

from ...core.enums import ViewMode
from ..model import AspirationCheckIn, AssignmentCheckIn, PositionCheckIn

CheckIn = Union[PositionCheckIn, AssignmentCheckIn, AspirationCheckIn]

EMPLOYEE_FIELDS = {
    "position": ("employee_rating", "employee_private_notes"),
    "assignment": ("employee_rating", "actual_energy_percentage", "employee_personal_alignment", "employee_private_notes"),
    "aspiration": ("employee_rating", "employee_private_notes"),
}
MANAGER_FIELDS = {
    "position": ("manager_rating", "manager_private_notes"),
    "assignment": ("manager_rating", "manager_private_notes"),
    "aspiration": ("manager_rating", "manager_private_notes"),
}


def kind_of(check_in: CheckIn) -> str:
    if isinstance(check_in, PositionCheckIn):
        return "position"
    return "assignment" if isinstance(check_in, AssignmentCheckIn) else "aspiration"


def apply_fields(check_in: CheckIn, attrs: Mapping[str, object], allowed: tuple[str, ...]) -> CheckIn:
    """Copy submitted values onto the check-in; blank values leave the stored value untouched."""
    changes = {k: v for k, v in attrs.items() if k in allowed and v not in (None, "")}
    return replace(check_in, **changes) if changes else check_in


def complete_employee_side(check_in: CheckIn, *, now: datetime) -> CheckIn:
    if check_in.employee_completed_at is not None:
        return check_in
    return replace(check_in, employee_completed_at=now)


def complete_manager_side(check_in: CheckIn, *, now: datetime, completed_by: Optional[int]) -> CheckIn:
    if check_in.manager_completed_at is not None:
        return check_in
    return replace(check_in, manager_completed_at=now, manager_completed_by_id=completed_by)


def uncomplete_employee_side(check_in: CheckIn) -> CheckIn:
    return replace(check_in, employee_completed_at=None)


def uncomplete_manager_side(check_in: CheckIn) -> CheckIn:
    return replace(check_in, manager_completed_at=None, manager_completed_by_id=None)


class CheckInStrategy(ABC):
    """Strategy Pattern: encapsulate which side of a check-in the viewer may edit and complete."""

    view_mode: ViewMode

    @abstractmethod
    def permitted_fields(self, kind: str) -> tuple[str, ...]:
        raise NotImplementedError

    @abstractmethod
    def complete(self, check_in: CheckIn, attrs: Mapping[str, object], *, now: datetime, acting_person_id: int) -> CheckIn:
        raise NotImplementedError

    @abstractmethod
    def draft(self, check_in: CheckIn, attrs: Mapping[str, object]) -> CheckIn:
        raise NotImplementedError
