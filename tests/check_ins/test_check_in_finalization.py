from __future__ import annotations

from dataclasses import replace

import pytest

from src.teammate_portal.teammate_portal.core.enums import CheckInStatus
from src.teammate_portal.teammate_portal.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from tests.support import ACME, EMPLOYEE, HR, MANAGER


def _complete_both_sides(container, act_as, *, assignment_id=None):
    service = container.check_in_service
    if assignment_id is None:
        service.save(act_as(EMPLOYEE), ACME, EMPLOYEE, assignment_params={}, aspiration_params={},
                     position_params={"employee_rating": "2", "status": "complete"})
        service.save(act_as(MANAGER), ACME, EMPLOYEE, assignment_params={}, aspiration_params={},
                     position_params={"manager_rating": "1", "status": "complete"})
        return
    service.save(act_as(EMPLOYEE), ACME, EMPLOYEE, aspiration_params={},
                 assignment_params={assignment_id: {"employee_rating": "meeting", "status": "complete"}})
    service.save(act_as(MANAGER), ACME, EMPLOYEE, aspiration_params={},
                 assignment_params={assignment_id: {"manager_rating": "exceeding", "status": "complete"}})


def test_manager_finalizes_ready_assignment_check_in(container, act_as, repos, fixed_now):
    repos.assignments.add(10, "Code review", teammate_id=2, energy=30)
    _complete_both_sides(container, act_as, assignment_id=10)

    count = container.check_in_finalization_service.finalize(
        act_as(MANAGER),
        ACME,
        EMPLOYEE,
        assignment_params={10: {"finalize": "1", "official_rating": "exceeding", "shared_notes": "Great quarter"}},
        aspiration_params={},
    )

    (check_in,) = repos.check_ins.assignment.values()
    assert count == 1
    assert check_in.official_rating == "exceeding"
    assert check_in.shared_notes == "Great quarter"
    assert check_in.official_check_in_completed_at == fixed_now
    assert check_in.finalized_by_id == MANAGER
    assert check_in.status == CheckInStatus.COMPLETE


def test_next_page_load_opens_a_fresh_check_in_after_finalizing(container, act_as, repos):
    repos.assignments.add(10, "Code review", teammate_id=2, energy=30)
    _complete_both_sides(container, act_as, assignment_id=10)
    container.check_in_finalization_service.finalize(
        act_as(MANAGER), ACME, EMPLOYEE,
        assignment_params={10: {"finalize": "1", "official_rating": "meeting"}}, aspiration_params={},
    )

    (row,) = container.check_in_service.build_page(act_as(EMPLOYEE), ACME, EMPLOYEE).assignment_rows

    assert len(repos.check_ins.assignment) == 2
    assert row.check_in.status == CheckInStatus.IN_PROGRESS


def test_manager_finalizes_position_check_in(container, act_as, repos):
    _complete_both_sides(container, act_as)

    container.check_in_finalization_service.finalize(
        act_as(MANAGER), ACME, EMPLOYEE,
        assignment_params={}, aspiration_params={},
        position_params={"finalize": "1", "official_rating": "1", "shared_notes": "Solid year"},
    )

    (check_in,) = repos.check_ins.position.values()
    assert check_in.official_rating == 1
    assert not check_in.is_open


def test_check_in_waiting_on_manager_cannot_be_finalized(container, act_as, repos):
    repos.assignments.add(10, "Code review", teammate_id=2, energy=30)
    container.check_in_service.save(
        act_as(EMPLOYEE), ACME, EMPLOYEE, aspiration_params={},
        assignment_params={10: {"employee_rating": "meeting", "status": "complete"}},
    )

    with pytest.raises(ValidationError) as exc:
        container.check_in_finalization_service.finalize(
            act_as(MANAGER), ACME, EMPLOYEE,
            assignment_params={10: {"finalize": "1", "official_rating": "meeting"}}, aspiration_params={},
        )

    assert exc.value.errors == {"assignment_check_ins[10][finalize]": "Check-in is not ready to finalize"}
    (check_in,) = repos.check_ins.assignment.values()
    assert check_in.is_open


def test_invalid_official_rating_finalizes_nothing(container, act_as, repos):
    repos.assignments.add(10, "Code review", teammate_id=2, energy=30)
    _complete_both_sides(container, act_as, assignment_id=10)
    _complete_both_sides(container, act_as)

    with pytest.raises(ValidationError) as exc:
        container.check_in_finalization_service.finalize(
            act_as(MANAGER), ACME, EMPLOYEE,
            assignment_params={10: {"finalize": "1", "official_rating": "stellar"}},
            aspiration_params={},
            position_params={"finalize": "1", "official_rating": "2"},
        )

    assert exc.value.errors == {"assignment_check_ins[10][official_rating]": "Official rating is not valid"}
    assert all(c.is_open for c in repos.check_ins.assignment.values())
    assert all(c.is_open for c in repos.check_ins.position.values())


def test_finalizing_requires_a_selection(container, act_as, repos):
    repos.assignments.add(10, "Code review", teammate_id=2, energy=30)
    _complete_both_sides(container, act_as, assignment_id=10)

    with pytest.raises(ValidationError) as exc:
        container.check_in_finalization_service.finalize(
            act_as(MANAGER), ACME, EMPLOYEE,
            assignment_params={10: {"official_rating": "meeting"}}, aspiration_params={},
        )

    assert str(exc.value) == "Select at least one check-in to finalize"


def test_employee_cannot_finalize_own_check_ins(container, act_as):
    with pytest.raises(AuthorizationError):
        container.check_in_finalization_service.finalize(
            act_as(EMPLOYEE), ACME, EMPLOYEE,
            assignment_params={}, aspiration_params={}, position_params={"finalize": "1", "official_rating": "1"},
        )


def test_employment_admin_needs_maap_permission_to_finalize(container, act_as, repos):
    _complete_both_sides(container, act_as)

    with pytest.raises(AuthorizationError):
        container.check_in_finalization_service.finalize(
            act_as(HR), ACME, EMPLOYEE,
            assignment_params={}, aspiration_params={}, position_params={"finalize": "1", "official_rating": "1"},
        )

    repos.teammates.items[2] = replace(repos.teammates.items[2], can_manage_maap=True)
    count = container.check_in_finalization_service.finalize(
        act_as(HR), ACME, EMPLOYEE,
        assignment_params={}, aspiration_params={}, position_params={"finalize": "1", "official_rating": "1"},
    )

    assert count == 1
    (check_in,) = repos.check_ins.position.values()
    assert check_in.finalized_by_id == HR


def test_finalizing_another_companys_assignment_is_not_found(container, act_as, repos):
    repos.assignments.add(99, "Outside contract", teammate_id=2, company_id=777)

    with pytest.raises(NotFoundError):
        container.check_in_finalization_service.finalize(
            act_as(MANAGER), ACME, EMPLOYEE,
            assignment_params={99: {"finalize": "1", "official_rating": "meeting"}}, aspiration_params={},
        )
