from __future__ import annotations

from enum import Enum


class OrganizationType(str, Enum):
    """Organization kind: a plain organization or a company."""

    ORGANIZATION = "organization"
    COMPANY = "company"


class ViewMode(str, Enum):
    """Check-in page context, derived from how the viewer relates to the person viewed."""

    EMPLOYEE = "employee"
    MANAGER = "manager"
    READONLY = "readonly"

    @property
    def label(self) -> str:
        return {
            ViewMode.EMPLOYEE: "Employee",
            ViewMode.MANAGER: "Manager",
            ViewMode.READONLY: "Read Only",
        }[self]


class ViewLayout(str, Enum):
    """Check-in page layout (the ?view= parameter)."""

    CARD = "card"
    TABLE = "table"

    @classmethod
    def parse(cls, value: str | None, default: "ViewLayout | None" = None) -> "ViewLayout":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return default or cls.CARD


class CheckInRating(str, Enum):
    WORKING_TO_MEET = "working_to_meet"
    MEETING = "meeting"
    EXCEEDING = "exceeding"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class PersonalAlignment(str, Enum):
    LOVE = "love"
    LIKE = "like"
    NEUTRAL = "neutral"
    PREFER_NOT = "prefer_not"
    ONLY_IF_NECESSARY = "only_if_necessary"


class CheckInStatus(str, Enum):
    """Overall state of a check-in across the employee and manager sides."""

    IN_PROGRESS = "IN_PROGRESS"
    WAITING_FOR_MANAGER = "WAITING_FOR_MANAGER"
    WAITING_FOR_EMPLOYEE = "WAITING_FOR_EMPLOYEE"
    READY_TO_FINALIZE = "READY_TO_FINALIZE"
    COMPLETE = "COMPLETE"
