from __future__ import annotations

from datetime import datetime
from typing import Mapping

from ...core.enums import ViewMode
from .base import (
    MANAGER_FIELDS,
    CheckIn,
    CheckInStrategy,
    apply_fields,
    complete_manager_side,
    kind_of,
    uncomplete_manager_side,
)


class ManagerCheckInStrategy(CheckInStrategy):
    """The current manager reviewing a direct report."""

    view_mode = ViewMode.MANAGER

    def permitted_fields(self, kind: str) -> tuple[str, ...]:
        return MANAGER_FIELDS[kind]

    def complete(self, check_in: CheckIn, attrs: Mapping[str, object], *, now: datetime, acting_person_id: int) -> CheckIn:
        check_in = apply_fields(check_in, attrs, self.permitted_fields(kind_of(check_in)))
        return complete_manager_side(check_in, now=now, completed_by=acting_person_id)

    def draft(self, check_in: CheckIn, attrs: Mapping[str, object]) -> CheckIn:
        check_in = apply_fields(check_in, attrs, self.permitted_fields(kind_of(check_in)))
        return uncomplete_manager_side(check_in)
