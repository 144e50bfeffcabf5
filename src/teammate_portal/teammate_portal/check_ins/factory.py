from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ViewMode
from .strategies.base import CheckInStrategy
from .strategies.employee_strategy import EmployeeCheckInStrategy
from .strategies.manager_strategy import ManagerCheckInStrategy
from .strategies.readonly_strategy import ReadOnlyCheckInStrategy


@dataclass
class CheckInStrategyFactory:
    """Factory Pattern: choose the editing strategy for a view mode."""

    def for_view_mode(self, view_mode: ViewMode) -> CheckInStrategy:
        if view_mode == ViewMode.EMPLOYEE:
            return EmployeeCheckInStrategy()
        if view_mode == ViewMode.MANAGER:
            return ManagerCheckInStrategy()
        return ReadOnlyCheckInStrategy()
