from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PositionMajorLevel:
    major_level_id: int
    major_level: int
    set_name: str


@dataclass(frozen=True)
class PositionLevel:
    position_level_id: int
    level: str
    major_level: PositionMajorLevel

    @property
    def sub_level(self) -> int:
        """Numeric part after the dot, e.g. 2 for level '1.2'."""
        _, _, sub = self.level.partition(".")
        return int(sub) if sub.isdigit() else 0


@dataclass(frozen=True)
class PositionType:
    position_type_id: int
    organization_id: int
    external_title: str
    major_level: PositionMajorLevel


@dataclass(frozen=True)
class Position:
    """Domain entity: a position is a position type at a level."""

    position_id: int
    position_type: PositionType
    position_level: PositionLevel

    @property
    def display_name(self) -> str:
        return f"{self.position_type.external_title} - {self.position_level.level}"
