from __future__ import annotations

from datetime import datetime
from typing import Mapping

from ...core.enums import ViewMode
from .base import (
    EMPLOYEE_FIELDS,
    MANAGER_FIELDS,
    CheckIn,
    CheckInStrategy,
    apply_fields,
    complete_employee_side,
    complete_manager_side,
    kind_of,
    uncomplete_employee_side,
    uncomplete_manager_side,
)

# Only ratings and notes mark a side as answered; energy and alignment alone do not.
_EMPLOYEE_MARKERS = ("employee_rating", "employee_private_notes")
_MANAGER_MARKERS = ("manager_rating", "manager_private_notes")


def _submitted(attrs: Mapping[str, object], fields: tuple[str, ...]) -> bool:
    return any(attrs.get(f) not in (None, "") for f in fields)


class ReadOnlyCheckInStrategy(CheckInStrategy):
    """Someone with employment permissions who is neither the person nor their manager.

    Both sides of assignment and aspiration check-ins are editable; which side gets
    completed depends on the submitted fields. The position check-in is left alone.
    """

    view_mode = ViewMode.READONLY

    def permitted_fields(self, kind: str) -> tuple[str, ...]:
        if kind == "position":
            return ()
        return EMPLOYEE_FIELDS[kind] + MANAGER_FIELDS[kind]

    def complete(self, check_in: CheckIn, attrs: Mapping[str, object], *, now: datetime, acting_person_id: int) -> CheckIn:
        kind = kind_of(check_in)
        if kind == "position":
            return check_in
        check_in = apply_fields(check_in, attrs, self.permitted_fields(kind))
        if _submitted(attrs, _EMPLOYEE_MARKERS):
            check_in = complete_employee_side(check_in, now=now)
        if _submitted(attrs, _MANAGER_MARKERS):
            check_in = complete_manager_side(check_in, now=now, completed_by=acting_person_id)
        return check_in

    def draft(self, check_in: CheckIn, attrs: Mapping[str, object]) -> CheckIn:
        kind = kind_of(check_in)
        if kind == "position":
            return check_in
        check_in = apply_fields(check_in, attrs, self.permitted_fields(kind))
        return uncomplete_manager_side(uncomplete_employee_side(check_in))
