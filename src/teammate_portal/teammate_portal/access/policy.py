from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.enums import ViewMode
from ..core.exceptions import AuthorizationError, NotFoundError
from ..employment.model import EmploymentTenure
from ..employment.repository import EmploymentTenureRepository
from ..organizations.model import Organization
from ..organizations.repository import OrganizationRepository
from ..people.model import Person
from ..people.repository import PersonRepository
from ..teammates.model import Teammate
from ..teammates.repository import TeammateRepository
from .context import AccessContext

logger = logging.getLogger(__name__)


def determine_view_mode(*, acting_person_id: int, target_person_id: int, manager_person_id: Optional[int]) -> ViewMode:
    if acting_person_id == target_person_id:
        return ViewMode.EMPLOYEE
    if manager_person_id is not None and acting_person_id == manager_person_id:
        return ViewMode.MANAGER
    return ViewMode.READONLY


def can_view_person(
    *,
    acting_person_id: int,
    acting_teammate: Optional[Teammate],
    target_person_id: int,
    manager_person_id: Optional[int],
) -> bool:
    """A person sees themself; their current manager and employment admins see them too.

    Teammates whose employment was terminated see nobody.
    """
    if acting_teammate is not None and acting_teammate.is_terminated:
        return False
    if acting_person_id == target_person_id:
        return True
    if manager_person_id is not None and acting_person_id == manager_person_id:
        return True
    return bool(acting_teammate and acting_teammate.can_manage_employment)


def can_finalize_check_ins(*, view_mode: ViewMode, acting_teammate: Optional[Teammate]) -> bool:
    """Managers and MAAP admins finalize; nobody finalizes their own check-ins."""
    if view_mode == ViewMode.EMPLOYEE:
        return False
    if acting_teammate is not None and acting_teammate.is_terminated:
        return False
    if view_mode == ViewMode.MANAGER:
        return True
    return bool(acting_teammate and acting_teammate.can_manage_maap)


def can_change_employment(
    *,
    acting_person_id: int,
    acting_teammate: Optional[Teammate],
    manager_person_id: Optional[int],
    starting: bool = False,
) -> bool:
    """Employment admins and the current manager change employment.

    Starting a first tenure is also open to teammates who may only create employment.
    """
    if acting_teammate is None or not acting_teammate.is_employed:
        return False
    if acting_teammate.can_manage_employment:
        return True
    if manager_person_id is not None and acting_person_id == manager_person_id:
        return True
    return starting and acting_teammate.can_create_employment


@dataclass(frozen=True)
class TargetTeammate:
    """The person a page is about, within one organization."""

    organization: Organization
    person: Person
    teammate: Teammate
    active_tenure: Optional[EmploymentTenure]

    @property
    def manager_person_id(self) -> Optional[int]:
        return self.active_tenure.manager_person_id if self.active_tenure else None


class PersonAccessService:
    def __init__(
        self,
        organizations: OrganizationRepository,
        people: PersonRepository,
        teammates: TeammateRepository,
        tenures: EmploymentTenureRepository,
    ):
        self._organizations = organizations
        self._people = people
        self._teammates = teammates
        self._tenures = tenures

    def resolve_target(self, organization_id: int, person_id: int) -> TargetTeammate:
        organization = self._organizations.get_by_id(organization_id)
        if organization is None:
            raise NotFoundError(f"Organization {organization_id} not found")
        person = self._people.get_by_id(person_id)
        if person is None:
            raise NotFoundError(f"Person {person_id} not found")
        teammate = self._teammates.get_for_person_and_organization(person_id, organization_id)
        if teammate is None:
            raise NotFoundError(f"{person.display_name} is not a teammate of {organization.name}")

        active_tenure = self._tenures.get_active(teammate.teammate_id, organization_id)
        return TargetTeammate(organization=organization, person=person, teammate=teammate, active_tenure=active_tenure)

    def authorize_view(self, context: AccessContext, target: TargetTeammate) -> ViewMode:
        """Raise AuthorizationError unless the actor may view the target; return the view mode."""
        if not can_view_person(
            acting_person_id=context.person_id,
            acting_teammate=self.acting_teammate(context, target),
            target_person_id=target.person.person_id,
            manager_person_id=target.manager_person_id,
        ):
            raise AuthorizationError("You are not authorized to view this page")

        view_mode = determine_view_mode(
            acting_person_id=context.person_id,
            target_person_id=target.person.person_id,
            manager_person_id=target.manager_person_id,
        )
        logger.debug(
            "view mode for person %s viewing person %s (manager=%s): %s",
            context.person_id,
            target.person.person_id,
            target.manager_person_id,
            view_mode.value,
        )
        return view_mode

    def acting_teammate(self, context: AccessContext, target: TargetTeammate) -> Optional[Teammate]:
        return self._teammates.get_for_person_and_organization(context.person_id, target.organization.organization_id)

    def can_finalize(self, context: AccessContext, target: TargetTeammate, view_mode: ViewMode) -> bool:
        return can_finalize_check_ins(view_mode=view_mode, acting_teammate=self.acting_teammate(context, target))

    def authorize_finalize(self, context: AccessContext, target: TargetTeammate) -> ViewMode:
        view_mode = self.authorize_view(context, target)
        if not self.can_finalize(context, target, view_mode):
            raise AuthorizationError("You are not authorized to finalize these check-ins")
        return view_mode

    def can_change_employment(self, context: AccessContext, target: TargetTeammate, *, starting: bool = False) -> bool:
        return can_change_employment(
            acting_person_id=context.person_id,
            acting_teammate=self.acting_teammate(context, target),
            manager_person_id=target.manager_person_id,
            starting=starting,
        )

    def authorize_employment_change(self, context: AccessContext, target: TargetTeammate, *, starting: bool = False) -> None:
        if not self.can_change_employment(context, target, starting=starting):
            raise AuthorizationError("You are not authorized to change this employment")
