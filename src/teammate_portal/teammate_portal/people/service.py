from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from werkzeug.security import check_password_hash

from ..access.context import AccessContext
from ..access.policy import PersonAccessService, TargetTeammate
from ..assignments.model import Assignment, AssignmentTenure
from ..assignments.repository import AssignmentRepository
from ..common import timezones
from ..common.datetime_utils import format_long_date
from ..common.validators import normalize_phone, optional_text, require_non_empty
from ..core.enums import ViewMode
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from ..employment.service import EmploymentTenureRow, EmploymentTenureService
from ..organizations.model import Organization
from ..organizations.repository import OrganizationRepository
from ..positions.model import Position
from ..teammates.repository import TeammateRepository
from .model import Person, ProfileChanges
from .repository import PersonRepository

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("first_name", "middle_name", "last_name", "suffix", "preferred_name", "phone_number", "timezone")


class AuthService:
    """Use case: authenticate a person (login) by email and password."""

    def __init__(self, people: PersonRepository):
        self._people = people

    def authenticate(self, email: str, password: str) -> Person:
        person = self._people.get_by_email(email or "")
        if not person or not person.password_hash:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(person.password_hash, password or "")
        except ValueError:
            # placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        logger.info("person %s signed in", person.person_id)
        return person


@dataclass(frozen=True)
class ProfileView:
    person: Person
    member_since: str
    timezone_label: str
    other_organizations: Sequence[Organization] = field(default_factory=list)

    @property
    def phone_number(self) -> Optional[str]:
        return self.person.phone_number


class ProfileService:
    def __init__(self, people: PersonRepository, teammates: TeammateRepository, organizations: OrganizationRepository):
        self._people = people
        self._teammates = teammates
        self._organizations = organizations

    def _get_person(self, person_id: int) -> Person:
        person = self._people.get_by_id(person_id)
        if person is None:
            raise NotFoundError(f"Person {person_id} not found")
        return person

    def other_organizations(self, person: Person) -> Sequence[Organization]:
        ids = [
            t.organization_id
            for t in self._teammates.list_for_person(person.person_id)
            if t.organization_id != person.current_organization_id
        ]
        return self._organizations.list_by_ids(ids) if ids else []

    def get_profile(self, person_id: int) -> ProfileView:
        person = self._get_person(person_id)
        return ProfileView(
            person=person,
            member_since=format_long_date(timezones.localize(person.created_at, person.timezone)),
            timezone_label=timezones.display_label(person.timezone),
            other_organizations=self.other_organizations(person),
        )

    def form_values(self, person: Person, *, accept_language: Optional[str] = None) -> dict[str, str]:
        """Initial edit-form values; a missing timezone is guessed from the browser locale."""
        values = {name: getattr(person, name) or "" for name in PROFILE_FIELDS}
        if not person.timezone:
            values["timezone"] = timezones.detect_from_accept_language(accept_language)
        return values

    def update_profile(self, person_id: int, form: Mapping[str, str]) -> Person:
        person = self._get_person(person_id)
        errors: dict[str, str] = {}

        def _check(name: str, fn):
            try:
                return fn()
            except ValidationError as e:
                errors[name] = str(e)
                return None

        first_name = _check("first_name", lambda: require_non_empty(form.get("first_name", ""), "First name"))
        last_name = _check("last_name", lambda: require_non_empty(form.get("last_name", ""), "Last name"))
        phone_number = _check("phone_number", lambda: normalize_phone(form.get("phone_number")))

        if phone_number and "phone_number" not in errors:
            holder = self._people.get_by_phone_number(phone_number)
            if holder and holder.person_id != person.person_id:
                errors["phone_number"] = "Phone number has already been taken"

        timezone = optional_text(form.get("timezone"))
        if timezone and not timezones.is_supported(timezone):
            errors["timezone"] = "Timezone is not included in the list"

        if errors:
            raise ValidationError("Profile could not be updated", errors)

        changes = ProfileChanges(
            first_name=first_name,
            last_name=last_name,
            middle_name=optional_text(form.get("middle_name")),
            suffix=optional_text(form.get("suffix")),
            preferred_name=optional_text(form.get("preferred_name")),
            phone_number=phone_number,
            timezone=timezone,
        )
        if not self._people.update_profile(person.person_id, changes):
            raise ValidationError("Profile could not be updated")

        logger.info("person %s updated their profile", person.person_id)
        return self._get_person(person.person_id)


@dataclass(frozen=True)
class AssignmentSummary:
    assignment: Assignment
    tenure: AssignmentTenure


@dataclass(frozen=True)
class PersonPage:
    target: TargetTeammate
    view_mode: ViewMode
    current_position: Optional[Position]
    employment_rows: Sequence[EmploymentTenureRow] = field(default_factory=list)
    assignments: Sequence[AssignmentSummary] = field(default_factory=list)
    organizations: Sequence[Organization] = field(default_factory=list)
    can_start_employment: bool = False
    can_end_employment: bool = False
    position_choices: Sequence[Position] = field(default_factory=list)

    @property
    def employment_state(self) -> str:
        return self.target.teammate.employment_state


class PersonPageService:
    def __init__(
        self,
        access: PersonAccessService,
        employment: EmploymentTenureService,
        assignments: AssignmentRepository,
        teammates: TeammateRepository,
        organizations: OrganizationRepository,
    ):
        self._access = access
        self._employment = employment
        self._assignments = assignments
        self._teammates = teammates
        self._organizations = organizations

    def build(self, context: AccessContext, organization_id: int, person_id: int) -> PersonPage:
        target = self._access.resolve_target(organization_id, person_id)
        view_mode = self._access.authorize_view(context, target)

        summaries = []
        for tenure in self._assignments.list_active_tenures_for_teammate(target.teammate.teammate_id):
            assignment = self._assignments.get_by_id(tenure.assignment_id)
            if assignment:
                summaries.append(AssignmentSummary(assignment=assignment, tenure=tenure))

        can_start = self._access.can_change_employment(context, target, starting=True)
        org_ids = [t.organization_id for t in self._teammates.list_for_person(person_id)]
        return PersonPage(
            target=target,
            view_mode=view_mode,
            current_position=self._employment.current_position(target.active_tenure),
            employment_rows=self._employment.history_rows(target.teammate.teammate_id, organization_id),
            assignments=summaries,
            organizations=self._organizations.list_by_ids(org_ids) if org_ids else [],
            can_start_employment=can_start,
            can_end_employment=target.active_tenure is not None and self._access.can_change_employment(context, target),
            position_choices=self._employment.positions_for(organization_id) if can_start else [],
        )
