from __future__ import annotations

from datetime import datetime

import pytest

from src.teammate_portal.teammate_portal import create_app
from src.teammate_portal.teammate_portal.access.context import AccessContext, StaticAccessContextResolver
from src.teammate_portal.teammate_portal.container import Repositories, assemble_container
from tests.support import ACME, build_repositories


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 15, 9, 30)


@pytest.fixture
def repos() -> Repositories:
    return build_repositories()


@pytest.fixture
def resolver() -> StaticAccessContextResolver:
    return StaticAccessContextResolver()


@pytest.fixture
def act_as(repos, resolver):
    """Make the static resolver act as the given person inside an organization."""

    def _act_as(person_id: int, organization_id: int = ACME) -> AccessContext:
        context = AccessContext(
            person=repos.people.get_by_id(person_id),
            organization=repos.organizations.get_by_id(organization_id),
            teammate=repos.teammates.get_for_person_and_organization(person_id, organization_id),
        )
        resolver.context = context
        return context

    return _act_as


@pytest.fixture
def container(repos, resolver, fixed_now):
    return assemble_container(repos, access_resolver=resolver, clock=lambda: fixed_now)


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()
