"""In-memory repositories and a small demo organization shared by the tests."""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from werkzeug.security import generate_password_hash

from src.teammate_portal.teammate_portal.aspirations.model import Aspiration
from src.teammate_portal.teammate_portal.assignments.model import Assignment, AssignmentTenure
from src.teammate_portal.teammate_portal.check_ins.model import AspirationCheckIn, AssignmentCheckIn, PositionCheckIn
from src.teammate_portal.teammate_portal.container import Repositories
from src.teammate_portal.teammate_portal.core.enums import OrganizationType
from src.teammate_portal.teammate_portal.employment.model import EmploymentTenure
from src.teammate_portal.teammate_portal.organizations.model import Organization
from src.teammate_portal.teammate_portal.people.model import Person, ProfileChanges
from src.teammate_portal.teammate_portal.positions.model import (
    Position,
    PositionLevel,
    PositionMajorLevel,
    PositionType,
)
from src.teammate_portal.teammate_portal.teammates.model import Teammate

ACME = 1
GUILD = 2

MANAGER = 1
EMPLOYEE = 2
HR = 3
OUTSIDER = 4

PASSWORD = "secret123"


class InMemoryOrganizations:
    def __init__(self, organizations: Sequence[Organization]):
        self.by_id = {o.organization_id: o for o in organizations}

    def get_by_id(self, organization_id: int) -> Optional[Organization]:
        return self.by_id.get(organization_id)

    def list_by_ids(self, organization_ids):
        found = [self.by_id[i] for i in organization_ids if i in self.by_id]
        return sorted(found, key=lambda o: o.name)


class InMemoryPeople:
    def __init__(self, people: Sequence[Person]):
        self.by_id = {p.person_id: p for p in people}

    def get_by_id(self, person_id: int) -> Optional[Person]:
        return self.by_id.get(person_id)

    def get_by_email(self, email: str) -> Optional[Person]:
        email = email.strip().lower()
        return next((p for p in self.by_id.values() if p.email == email), None)

    def get_by_phone_number(self, phone_number: str) -> Optional[Person]:
        return next((p for p in self.by_id.values() if p.phone_number == phone_number), None)

    def update_profile(self, person_id: int, changes: ProfileChanges) -> bool:
        person = self.by_id.get(person_id)
        if person is None:
            return False
        self.by_id[person_id] = replace(
            person,
            first_name=changes.first_name,
            middle_name=changes.middle_name,
            last_name=changes.last_name,
            suffix=changes.suffix,
            preferred_name=changes.preferred_name,
            phone_number=changes.phone_number,
            timezone=changes.timezone,
        )
        return True


class InMemoryTeammates:
    def __init__(self, teammates: Sequence[Teammate]):
        self.items = list(teammates)

    def get_by_id(self, teammate_id: int) -> Optional[Teammate]:
        return next((t for t in self.items if t.teammate_id == teammate_id), None)

    def get_for_person_and_organization(self, person_id: int, organization_id: int) -> Optional[Teammate]:
        return next(
            (t for t in self.items if t.person_id == person_id and t.organization_id == organization_id),
            None,
        )

    def list_for_person(self, person_id: int):
        return [t for t in self.items if t.person_id == person_id]


class InMemoryPositions:
    def __init__(self, positions: Sequence[Position]):
        self.by_id = {p.position_id: p for p in positions}

    def get_by_id(self, position_id: int) -> Optional[Position]:
        return self.by_id.get(position_id)

    def list_for_organization(self, organization_id: int):
        return [p for p in self.by_id.values() if p.position_type.organization_id == organization_id]


class InMemoryTenures:
    def __init__(self, tenures: Sequence[EmploymentTenure] = ()):
        self.items = list(tenures)

    def list_for_teammate(self, teammate_id: int, *, company_id: Optional[int] = None):
        found = [
            t for t in self.items
            if t.teammate_id == teammate_id and (company_id is None or t.company_id == company_id)
        ]
        return sorted(found, key=lambda t: t.started_at, reverse=True)

    def get_active(self, teammate_id: int, company_id: int) -> Optional[EmploymentTenure]:
        return next((t for t in self.list_for_teammate(teammate_id, company_id=company_id) if t.is_active), None)

    def create(self, *, teammate_id, company_id, position_id, manager_person_id, started_at, ended_at=None) -> int:
        tenure_id = max((t.tenure_id for t in self.items), default=0) + 1
        self.items.append(
            EmploymentTenure(
                tenure_id=tenure_id,
                teammate_id=teammate_id,
                company_id=company_id,
                position_id=position_id,
                manager_person_id=manager_person_id,
                started_at=started_at,
                ended_at=ended_at,
            )
        )
        return tenure_id

    def end(self, tenure_id: int, *, ended_at: date) -> bool:
        for i, t in enumerate(self.items):
            if t.tenure_id == tenure_id and t.is_active:
                self.items[i] = replace(t, ended_at=ended_at)
                return True
        return False


class InMemoryAssignments:
    def __init__(self):
        self.assignments: dict[int, Assignment] = {}
        self.tenures: list[AssignmentTenure] = []

    def add(
        self,
        assignment_id: int,
        title: str,
        *,
        teammate_id: int,
        energy: Optional[int] = None,
        ended_at=None,
        company_id: int = ACME,
    ):
        self.assignments[assignment_id] = Assignment(assignment_id=assignment_id, company_id=company_id, title=title)
        self.tenures.append(
            AssignmentTenure(
                assignment_tenure_id=len(self.tenures) + 1,
                teammate_id=teammate_id,
                assignment_id=assignment_id,
                started_at=date(2024, 6, 1),
                ended_at=ended_at,
                anticipated_energy_percentage=energy,
            )
        )

    def get_by_id(self, assignment_id: int) -> Optional[Assignment]:
        return self.assignments.get(assignment_id)

    def list_active_tenures_for_teammate(self, teammate_id: int):
        return [t for t in self.tenures if t.teammate_id == teammate_id and t.is_active]


class InMemoryAspirations:
    def __init__(self):
        self.items: list[Aspiration] = []

    def add(self, aspiration_id: int, name: str, *, organization_id: int = ACME, sort_order: int = 0):
        self.items.append(
            Aspiration(aspiration_id=aspiration_id, organization_id=organization_id, name=name, sort_order=sort_order)
        )

    def list_for_organization(self, organization_id: int):
        found = [a for a in self.items if a.organization_id == organization_id]
        return sorted(found, key=lambda a: (a.sort_order, a.name))


class InMemoryCheckIns:
    def __init__(self):
        self.assignment: dict[int, AssignmentCheckIn] = {}
        self.aspiration: dict[int, AspirationCheckIn] = {}
        self.position: dict[int, PositionCheckIn] = {}
        self._id = 0

    def _next_id(self) -> int:
        self._id += 1
        return self._id

    def find_open_assignment_check_in(self, teammate_id: int, assignment_id: int):
        return next(
            (c for c in self.assignment.values() if c.teammate_id == teammate_id and c.assignment_id == assignment_id and c.is_open),
            None,
        )

    def create_assignment_check_in(self, *, teammate_id: int, assignment_id: int, started_on: date):
        c = AssignmentCheckIn(check_in_id=self._next_id(), teammate_id=teammate_id, assignment_id=assignment_id, check_in_started_on=started_on)
        self.assignment[c.check_in_id] = c
        return c

    def update_assignment_check_in(self, check_in: AssignmentCheckIn) -> None:
        self.assignment[check_in.check_in_id] = check_in

    def find_open_aspiration_check_in(self, teammate_id: int, aspiration_id: int):
        return next(
            (c for c in self.aspiration.values() if c.teammate_id == teammate_id and c.aspiration_id == aspiration_id and c.is_open),
            None,
        )

    def create_aspiration_check_in(self, *, teammate_id: int, aspiration_id: int, started_on: date):
        c = AspirationCheckIn(check_in_id=self._next_id(), teammate_id=teammate_id, aspiration_id=aspiration_id, check_in_started_on=started_on)
        self.aspiration[c.check_in_id] = c
        return c

    def update_aspiration_check_in(self, check_in: AspirationCheckIn) -> None:
        self.aspiration[check_in.check_in_id] = check_in

    def find_open_position_check_in(self, teammate_id: int):
        return next((c for c in self.position.values() if c.teammate_id == teammate_id and c.is_open), None)

    def create_position_check_in(self, *, teammate_id: int, employment_tenure_id: int, started_on: date):
        c = PositionCheckIn(
            check_in_id=self._next_id(),
            teammate_id=teammate_id,
            employment_tenure_id=employment_tenure_id,
            check_in_started_on=started_on,
        )
        self.position[c.check_in_id] = c
        return c

    def update_position_check_in(self, check_in: PositionCheckIn) -> None:
        self.position[check_in.check_in_id] = check_in


def _position(position_id: int = 1, title: str = "Software Engineer", level: str = "1.2") -> Position:
    major = PositionMajorLevel(major_level_id=1, major_level=1, set_name="Engineering")
    return Position(
        position_id=position_id,
        position_type=PositionType(position_type_id=position_id, organization_id=ACME, external_title=title, major_level=major),
        position_level=PositionLevel(position_level_id=position_id, level=level, major_level=major),
    )


def build_repositories() -> Repositories:
    pw = generate_password_hash(PASSWORD)
    people = [
        Person(person_id=MANAGER, first_name="Morgan", last_name="Lee", email="morgan@acme.test",
               current_organization_id=ACME, password_hash=pw, created_at=datetime(2023, 1, 9, 8, 0)),
        Person(person_id=EMPLOYEE, first_name="Jordan", last_name="Rivera", email="jordan@acme.test",
               current_organization_id=ACME, password_hash=pw, created_at=datetime(2024, 3, 5, 14, 0)),
        Person(person_id=HR, first_name="Casey", last_name="Nguyen", email="casey@acme.test",
               phone_number="(555) 123-4567", timezone="Pacific Time (US & Canada)",
               current_organization_id=ACME, password_hash=pw, created_at=datetime(2022, 11, 1, 8, 0)),
        Person(person_id=OUTSIDER, first_name="Sam", last_name="Park", email="sam@acme.test",
               current_organization_id=ACME, password_hash=pw, created_at=datetime(2024, 8, 20, 8, 0)),
    ]
    teammates = [
        Teammate(teammate_id=1, person_id=MANAGER, organization_id=ACME, first_employed_at=date(2023, 1, 9)),
        Teammate(teammate_id=2, person_id=EMPLOYEE, organization_id=ACME, first_employed_at=date(2024, 3, 5)),
        Teammate(teammate_id=3, person_id=HR, organization_id=ACME, can_manage_employment=True, first_employed_at=date(2022, 11, 1)),
        Teammate(teammate_id=4, person_id=OUTSIDER, organization_id=ACME),
        Teammate(teammate_id=5, person_id=EMPLOYEE, organization_id=GUILD),
    ]
    tenures = [
        EmploymentTenure(tenure_id=1, teammate_id=2, company_id=ACME, position_id=1,
                         started_at=date(2024, 3, 5), manager_person_id=MANAGER),
    ]
    return Repositories(
        organizations=InMemoryOrganizations([
            Organization(organization_id=ACME, name="Acme Corp", org_type=OrganizationType.COMPANY),
            Organization(organization_id=GUILD, name="Open Source Guild", org_type=OrganizationType.ORGANIZATION),
        ]),
        people=InMemoryPeople(people),
        teammates=InMemoryTeammates(teammates),
        positions=InMemoryPositions([_position(), _position(2, "Staff Engineer", "1.3")]),
        tenures=InMemoryTenures(tenures),
        assignments=InMemoryAssignments(),
        aspirations=InMemoryAspirations(),
        check_ins=InMemoryCheckIns(),
    )


