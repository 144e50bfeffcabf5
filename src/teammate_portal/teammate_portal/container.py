from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .access.context import AccessContextResolver, SessionAccessContextResolver
from .access.policy import PersonAccessService
from .aspirations.mysql_aspiration_repository import MySQLAspirationRepository
from .aspirations.repository import AspirationRepository
from .aspirations.service import AspirationService
from .assignments.mysql_assignment_repository import MySQLAssignmentRepository
from .assignments.repository import AssignmentRepository
from .check_ins.factory import CheckInStrategyFactory
from .check_ins.finalization import CheckInFinalizationService
from .check_ins.mysql_check_in_repository import MySQLCheckInRepository
from .check_ins.repository import CheckInRepository
from .check_ins.service import CheckInService
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_CHECK_IN_VIEW
from .core.enums import ViewLayout
from .database.connection import DBConfig, DatabaseConnection
from .employment.management import EmploymentManagementService
from .employment.mysql_employment_repository import MySQLEmploymentTenureRepository
from .employment.repository import EmploymentTenureRepository
from .employment.service import EmploymentTenureService
from .organizations.mysql_organization_repository import MySQLOrganizationRepository
from .organizations.repository import OrganizationRepository
from .people.mysql_person_repository import MySQLPersonRepository
from .people.repository import PersonRepository
from .people.service import AuthService, PersonPageService, ProfileService
from .positions.mysql_position_repository import MySQLPositionRepository
from .positions.repository import PositionRepository
from .teammates.mysql_teammate_repository import MySQLTeammateRepository
from .teammates.repository import TeammateRepository


@dataclass(frozen=True)
class Repositories:
    organizations: OrganizationRepository
    people: PersonRepository
    teammates: TeammateRepository
    positions: PositionRepository
    tenures: EmploymentTenureRepository
    assignments: AssignmentRepository
    aspirations: AspirationRepository
    check_ins: CheckInRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    repos: Repositories
    access_resolver: AccessContextResolver

    access_service: PersonAccessService
    auth_service: AuthService
    profile_service: ProfileService
    person_page_service: PersonPageService
    employment_service: EmploymentTenureService
    employment_management_service: EmploymentManagementService
    aspiration_service: AspirationService
    check_in_service: CheckInService
    check_in_finalization_service: CheckInFinalizationService


def assemble_container(
    repos: Repositories,
    *,
    conn: Optional[DatabaseConnection] = None,
    access_resolver: Optional[AccessContextResolver] = None,
    default_check_in_view: str = DEFAULT_CHECK_IN_VIEW,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire services on top of any repository implementations (MySQL or in-memory)."""
    access_resolver = access_resolver or SessionAccessContextResolver(repos.people, repos.organizations, repos.teammates)

    access_service = PersonAccessService(repos.organizations, repos.people, repos.teammates, repos.tenures)
    employment_service = EmploymentTenureService(repos.tenures, repos.positions, repos.people)
    check_in_service = CheckInService(
        access_service,
        repos.people,
        repos.positions,
        repos.assignments,
        repos.aspirations,
        repos.check_ins,
        strategy_factory=CheckInStrategyFactory(),
        default_layout=ViewLayout.parse(default_check_in_view),
        clock=clock,
    )

    return Container(
        conn=conn,
        repos=repos,
        access_resolver=access_resolver,
        access_service=access_service,
        auth_service=AuthService(repos.people),
        profile_service=ProfileService(repos.people, repos.teammates, repos.organizations),
        person_page_service=PersonPageService(
            access_service, employment_service, repos.assignments, repos.teammates, repos.organizations
        ),
        employment_service=employment_service,
        employment_management_service=EmploymentManagementService(access_service, employment_service),
        aspiration_service=AspirationService(repos.aspirations, repos.organizations),
        check_in_service=check_in_service,
        check_in_finalization_service=CheckInFinalizationService(
            access_service, repos.assignments, repos.aspirations, repos.check_ins, clock=clock
        ),
    )


def build_container(*, db_config: dict, default_check_in_view: str = DEFAULT_CHECK_IN_VIEW) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    repos = Repositories(
        organizations=MySQLOrganizationRepository(conn),
        people=MySQLPersonRepository(conn),
        teammates=MySQLTeammateRepository(conn),
        positions=MySQLPositionRepository(conn),
        tenures=MySQLEmploymentTenureRepository(conn),
        assignments=MySQLAssignmentRepository(conn),
        aspirations=MySQLAspirationRepository(conn),
        check_ins=MySQLCheckInRepository(conn),
    )
    return assemble_container(repos, conn=conn, default_check_in_view=default_check_in_view)
