from __future__ import annotations

from datetime import datetime
from typing import Mapping

from ...core.enums import ViewMode
from .base import (
    EMPLOYEE_FIELDS,
    CheckIn,
    CheckInStrategy,
    apply_fields,
    complete_employee_side,
    kind_of,
    uncomplete_employee_side,
)


class EmployeeCheckInStrategy(CheckInStrategy):
    """The person is looking at their own check-ins."""

    view_mode = ViewMode.EMPLOYEE

    def permitted_fields(self, kind: str) -> tuple[str, ...]:
        return EMPLOYEE_FIELDS[kind]

    def complete(self, check_in: CheckIn, attrs: Mapping[str, object], *, now: datetime, acting_person_id: int) -> CheckIn:
        check_in = apply_fields(check_in, attrs, self.permitted_fields(kind_of(check_in)))
        return complete_employee_side(check_in, now=now)

    def draft(self, check_in: CheckIn, attrs: Mapping[str, object]) -> CheckIn:
        check_in = apply_fields(check_in, attrs, self.permitted_fields(kind_of(check_in)))
        return uncomplete_employee_side(check_in)
