from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Callable, Mapping, Optional, Sequence

from ..access.context import AccessContext
from ..access.policy import PersonAccessService, TargetTeammate
from ..aspirations.model import Aspiration
from ..aspirations.repository import AspirationRepository
from ..assignments.model import Assignment, AssignmentTenure
from ..assignments.repository import AssignmentRepository
from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_percentage
from ..core.constants import POSITION_RATING_MAX, POSITION_RATING_MIN
from ..core.enums import CheckInRating, PersonalAlignment, ViewLayout, ViewMode
from ..core.exceptions import NotFoundError, ValidationError
from ..people.model import Person
from ..people.repository import PersonRepository
from ..positions.model import Position
from ..positions.repository import PositionRepository
from .factory import CheckInStrategyFactory
from .model import AspirationCheckIn, AssignmentCheckIn, PositionCheckIn
from .repository import CheckInRepository
from .strategies.base import CheckInStrategy

logger = logging.getLogger(__name__)

STATUS_COMPLETE = "complete"
STATUS_DRAFT = "draft"

_RATINGS = {r.value for r in CheckInRating}
_ALIGNMENTS = {a.value for a in PersonalAlignment}


def field_key(kind: str, subject_id: Optional[int], name: str) -> str:
    """Form/error key for a check-in field, e.g. ``assignment_check_ins[10][employee_rating]``."""
    if kind == "position":
        return f"position_check_in[{name}]"
    return f"{kind}_check_ins[{subject_id}][{name}]"


def parse_rating(kind: str, raw: Optional[str]):
    """Return the rating value for this kind of check-in, or None when it is not valid."""
    if raw is None:
        return None
    if kind != "position":
        return raw if raw in _RATINGS else None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if POSITION_RATING_MIN <= value <= POSITION_RATING_MAX else None


def resolve_assignment(assignments: AssignmentRepository, organization_id: int, assignment_id: int) -> Assignment:
    """Look up an assignment that belongs to the organization; others count as missing."""
    assignment = assignments.get_by_id(assignment_id)
    if assignment is None or assignment.company_id != organization_id:
        raise NotFoundError(f"Assignment {assignment_id} not found")
    return assignment


@dataclass(frozen=True)
class AssignmentCheckInRow:
    check_in: AssignmentCheckIn
    assignment: Assignment
    tenure: AssignmentTenure


@dataclass(frozen=True)
class AspirationCheckInRow:
    check_in: AspirationCheckIn
    aspiration: Aspiration


@dataclass(frozen=True)
class CheckInPage:
    """Everything the check-ins template needs, independent of layout."""

    target: TargetTeammate
    view_mode: ViewMode
    layout: ViewLayout
    assignment_rows: Sequence[AssignmentCheckInRow] = field(default_factory=list)
    aspiration_rows: Sequence[AspirationCheckInRow] = field(default_factory=list)
    current_position: Optional[Position] = None
    manager: Optional[Person] = None
    position_check_in: Optional[PositionCheckIn] = None
    can_finalize: bool = False

    @property
    def view_mode_label(self) -> str:
        return self.view_mode.label

    @property
    def has_assignments(self) -> bool:
        return bool(self.assignment_rows)

    @property
    def has_aspirations(self) -> bool:
        return bool(self.aspiration_rows)

    @property
    def has_anything_to_check_in(self) -> bool:
        return self.position_check_in is not None or self.has_assignments or self.has_aspirations

    @property
    def has_ready_check_ins(self) -> bool:
        check_ins = [r.check_in for r in self.assignment_rows] + [r.check_in for r in self.aspiration_rows]
        if self.position_check_in is not None:
            check_ins.append(self.position_check_in)
        return any(c.ready_for_finalization for c in check_ins)


def _energy_sort_key(row: AssignmentCheckInRow):
    energy = row.tenure.anticipated_energy_percentage
    return (1, 0) if energy is None else (0, -energy)


class CheckInService:
    def __init__(
        self,
        access: PersonAccessService,
        people: PersonRepository,
        positions: PositionRepository,
        assignments: AssignmentRepository,
        aspirations: AspirationRepository,
        check_ins: CheckInRepository,
        *,
        strategy_factory: CheckInStrategyFactory | None = None,
        default_layout: ViewLayout = ViewLayout.CARD,
        clock: Callable[[], datetime] = now_local,
    ):
        self._access = access
        self._people = people
        self._positions = positions
        self._assignments = assignments
        self._aspirations = aspirations
        self._check_ins = check_ins
        self._factory = strategy_factory or CheckInStrategyFactory()
        self._default_layout = default_layout
        self._clock = clock

    # ----- page -----
    def build_page(self, context: AccessContext, organization_id: int, person_id: int, *, view: Optional[str] = None) -> CheckInPage:
        target = self._access.resolve_target(organization_id, person_id)
        view_mode = self._access.authorize_view(context, target)
        today = self._clock().date()

        assignment_rows = sorted(self._assignment_rows(target, today), key=_energy_sort_key)
        aspiration_rows = [
            AspirationCheckInRow(check_in=self._open_aspiration_check_in(target.teammate.teammate_id, a.aspiration_id, today), aspiration=a)
            for a in self._aspirations.list_for_organization(organization_id)
        ]

        tenure = target.active_tenure
        return CheckInPage(
            target=target,
            view_mode=view_mode,
            layout=ViewLayout.parse(view, self._default_layout),
            assignment_rows=assignment_rows,
            aspiration_rows=aspiration_rows,
            current_position=self._positions.get_by_id(tenure.position_id) if tenure else None,
            manager=self._people.get_by_id(tenure.manager_person_id) if tenure and tenure.manager_person_id else None,
            position_check_in=self._open_position_check_in(target, today) if tenure else None,
            can_finalize=self._access.can_finalize(context, target, view_mode),
        )

    def _assignment_rows(self, target: TargetTeammate, today: date) -> list[AssignmentCheckInRow]:
        rows = []
        for tenure in self._assignments.list_active_tenures_for_teammate(target.teammate.teammate_id):
            assignment = self._assignments.get_by_id(tenure.assignment_id)
            if assignment is None or assignment.company_id != target.organization.organization_id:
                logger.warning("Assignment tenure %s refers to missing assignment %s", tenure.assignment_tenure_id, tenure.assignment_id)
                continue
            check_in = self._open_assignment_check_in(target.teammate.teammate_id, assignment.assignment_id, today)
            rows.append(AssignmentCheckInRow(check_in=check_in, assignment=assignment, tenure=tenure))
        return rows

    def _open_position_check_in(self, target: TargetTeammate, today: date) -> PositionCheckIn:
        teammate_id = target.teammate.teammate_id
        existing = self._check_ins.find_open_position_check_in(teammate_id)
        if existing:
            return existing
        return self._check_ins.create_position_check_in(
            teammate_id=teammate_id, employment_tenure_id=target.active_tenure.tenure_id, started_on=today
        )

    def _open_assignment_check_in(self, teammate_id: int, assignment_id: int, today: date) -> AssignmentCheckIn:
        existing = self._check_ins.find_open_assignment_check_in(teammate_id, assignment_id)
        if existing:
            return existing
        return self._check_ins.create_assignment_check_in(teammate_id=teammate_id, assignment_id=assignment_id, started_on=today)

    def _open_aspiration_check_in(self, teammate_id: int, aspiration_id: int, today: date) -> AspirationCheckIn:
        existing = self._check_ins.find_open_aspiration_check_in(teammate_id, aspiration_id)
        if existing:
            return existing
        return self._check_ins.create_aspiration_check_in(teammate_id=teammate_id, aspiration_id=aspiration_id, started_on=today)

    # ----- save -----
    def save(
        self,
        context: AccessContext,
        organization_id: int,
        person_id: int,
        *,
        assignment_params: Mapping[int, Mapping[str, str]],
        aspiration_params: Mapping[int, Mapping[str, str]],
        position_params: Optional[Mapping[str, str]] = None,
    ) -> int:
        """Persist submitted check-in fields; returns the number of check-ins changed.

        Every field is validated and every subject resolved before anything is written.
        """
        target = self._access.resolve_target(organization_id, person_id)
        view_mode = self._access.authorize_view(context, target)
        strategy = self._factory.for_view_mode(view_mode)

        errors: dict[str, str] = {}
        cleaned_position = self._clean("position", None, position_params, strategy, errors) if position_params else None
        cleaned_assignments = {
            aid: self._clean("assignment", aid, attrs, strategy, errors) for aid, attrs in assignment_params.items()
        }
        cleaned_aspirations = {
            aid: self._clean("aspiration", aid, attrs, strategy, errors) for aid, attrs in aspiration_params.items()
        }
        if errors:
            raise ValidationError("Check-ins could not be saved", errors)

        if cleaned_position is not None and target.active_tenure is None:
            raise NotFoundError(f"{target.person.display_name} has no current position at {target.organization.name}")
        for assignment_id in cleaned_assignments:
            resolve_assignment(self._assignments, organization_id, assignment_id)
        known_aspirations = {a.aspiration_id for a in self._aspirations.list_for_organization(organization_id)}
        for aspiration_id in cleaned_aspirations:
            if aspiration_id not in known_aspirations:
                raise NotFoundError(f"Aspiration {aspiration_id} not found")

        now = self._clock()
        teammate_id = target.teammate.teammate_id
        changed = 0

        if cleaned_position is not None:
            check_in = self._open_position_check_in(target, now.date())
            updated = self._apply(strategy, check_in, cleaned_position, now=now, acting_person_id=context.person_id)
            if updated != check_in:
                self._check_ins.update_position_check_in(updated)
                changed += 1

        for assignment_id, attrs in cleaned_assignments.items():
            check_in = self._open_assignment_check_in(teammate_id, assignment_id, now.date())
            updated = self._apply(strategy, check_in, attrs, now=now, acting_person_id=context.person_id)
            if updated != check_in:
                self._check_ins.update_assignment_check_in(updated)
                changed += 1

        for aspiration_id, attrs in cleaned_aspirations.items():
            check_in = self._open_aspiration_check_in(teammate_id, aspiration_id, now.date())
            updated = self._apply(strategy, check_in, attrs, now=now, acting_person_id=context.person_id)
            if updated != check_in:
                self._check_ins.update_aspiration_check_in(updated)
                changed += 1

        logger.info(
            "person %s saved %s check-in(s) for teammate %s as %s",
            context.person_id,
            changed,
            teammate_id,
            view_mode.value,
        )
        return changed

    @staticmethod
    def _apply(strategy: CheckInStrategy, check_in, attrs: Mapping[str, object], *, now: datetime, acting_person_id: int):
        if attrs.get("status") == STATUS_COMPLETE:
            return strategy.complete(check_in, attrs, now=now, acting_person_id=acting_person_id)
        return strategy.draft(check_in, attrs)

    @staticmethod
    def _clean(
        kind: str,
        subject_id: Optional[int],
        attrs: Mapping[str, str],
        strategy: CheckInStrategy,
        errors: dict[str, str],
    ) -> dict[str, object]:
        cleaned: dict[str, object] = {"status": STATUS_COMPLETE if attrs.get("status") == STATUS_COMPLETE else STATUS_DRAFT}

        for name in strategy.permitted_fields(kind):
            raw = optional_text(attrs.get(name))
            if raw is None:
                continue
            key = field_key(kind, subject_id, name)
            if name in ("employee_rating", "manager_rating"):
                rating = parse_rating(kind, raw)
                if rating is None:
                    errors[key] = "Rating is not valid"
                else:
                    cleaned[name] = rating
                continue
            if name == "employee_personal_alignment" and raw not in _ALIGNMENTS:
                errors[key] = "Personal alignment is not valid"
                continue
            if name == "actual_energy_percentage":
                try:
                    cleaned[name] = require_percentage(raw, "Energy")
                except ValidationError as e:
                    errors[key] = str(e)
                continue
            cleaned[name] = raw
        return cleaned
