"""Resolve who is acting on the current request.

Controllers never read the session directly; they ask the resolver held by the
container. Tests swap in ``StaticAccessContextResolver`` to act as any person.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from flask import session

from ..organizations.model import Organization
from ..organizations.repository import OrganizationRepository
from ..people.model import Person
from ..people.repository import PersonRepository
from ..teammates.model import Teammate
from ..teammates.repository import TeammateRepository

logger = logging.getLogger(__name__)

SESSION_PERSON_KEY = "person_id"
SESSION_ORGANIZATION_KEY = "organization_id"


@dataclass(frozen=True)
class AccessContext:
    person: Person
    organization: Optional[Organization] = None
    teammate: Optional[Teammate] = None

    @property
    def person_id(self) -> int:
        return self.person.person_id


class AccessContextResolver(Protocol):
    def resolve(self) -> Optional[AccessContext]:
        raise NotImplementedError


class SessionAccessContextResolver(AccessContextResolver):
    """Load the acting person (and organization) from ids stored in the Flask session."""

    def __init__(self, people: PersonRepository, organizations: OrganizationRepository, teammates: TeammateRepository):
        self._people = people
        self._organizations = organizations
        self._teammates = teammates

    def resolve(self) -> Optional[AccessContext]:
        person_id = session.get(SESSION_PERSON_KEY)
        if person_id is None:
            return None

        person = self._people.get_by_id(int(person_id))
        if person is None:
            logger.warning("Session refers to missing person %s; clearing session", person_id)
            session.clear()
            return None

        organization_id = session.get(SESSION_ORGANIZATION_KEY) or person.current_organization_id
        organization = self._organizations.get_by_id(int(organization_id)) if organization_id else None
        teammate = (
            self._teammates.get_for_person_and_organization(person.person_id, organization.organization_id)
            if organization
            else None
        )
        return AccessContext(person=person, organization=organization, teammate=teammate)


class StaticAccessContextResolver(AccessContextResolver):
    """Always resolve to the same context (or to nobody)."""

    def __init__(self, context: Optional[AccessContext] = None):
        self.context = context

    def resolve(self) -> Optional[AccessContext]:
        return self.context
