from __future__ import annotations

from datetime import date

import pytest

from src.teammate_portal.teammate_portal.core.enums import CheckInStatus, ViewMode
from src.teammate_portal.teammate_portal.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from tests.support import ACME, EMPLOYEE, HR, MANAGER, OUTSIDER


def test_build_page_creates_one_open_check_in_per_assignment(container, act_as, repos):
    repos.assignments.add(10, "Code review", teammate_id=2, energy=30)
    repos.aspirations.add(5, "Grow as a mentor")
    context = act_as(EMPLOYEE)

    first = container.check_in_service.build_page(context, ACME, EMPLOYEE)
    second = container.check_in_service.build_page(context, ACME, EMPLOYEE)

    assert [r.check_in.check_in_id for r in first.assignment_rows] == [r.check_in.check_in_id for r in second.assignment_rows]
    assert len(repos.check_ins.assignment) == 1
    assert len(repos.check_ins.aspiration) == 1


def test_build_page_exposes_position_and_manager(container, act_as):
    page = container.check_in_service.build_page(act_as(EMPLOYEE), ACME, EMPLOYEE)

    assert page.view_mode == ViewMode.EMPLOYEE
    assert page.current_position.display_name == "Software Engineer - 1.2"
    assert page.manager.display_name == "Morgan Lee"
    assert not page.has_assignments
    assert not page.has_aspirations


def test_ended_assignment_tenures_are_not_listed(container, act_as, repos):
    repos.assignments.add(10, "Old project", teammate_id=2, energy=50, ended_at=date(2024, 12, 1))

    page = container.check_in_service.build_page(act_as(EMPLOYEE), ACME, EMPLOYEE)

    assert page.assignment_rows == []


def test_manager_completion_records_who_completed(container, act_as, repos, fixed_now):
    repos.assignments.add(10, "Code review", teammate_id=2, energy=30)

    container.check_in_service.save(
        act_as(MANAGER),
        ACME,
        EMPLOYEE,
        assignment_params={10: {"manager_rating": "exceeding", "employee_rating": "meeting", "status": "complete"}},
        aspiration_params={},
    )

    (check_in,) = repos.check_ins.assignment.values()
    assert check_in.manager_rating == "exceeding"
    # managers cannot write the employee side
    assert check_in.employee_rating is None
    assert check_in.manager_completed_at == fixed_now
    assert check_in.manager_completed_by_id == MANAGER
    assert check_in.status == CheckInStatus.WAITING_FOR_EMPLOYEE


def test_draft_uncompletes_the_viewers_side(container, act_as, repos):
    repos.aspirations.add(5, "Grow as a mentor")
    context = act_as(EMPLOYEE)
    service = container.check_in_service

    service.save(context, ACME, EMPLOYEE, assignment_params={}, aspiration_params={5: {"employee_rating": "meeting", "status": "complete"}})
    service.save(context, ACME, EMPLOYEE, assignment_params={}, aspiration_params={5: {"status": "draft"}})

    (check_in,) = repos.check_ins.aspiration.values()
    assert check_in.employee_rating == "meeting"
    assert check_in.employee_completed_at is None
    assert check_in.status == CheckInStatus.IN_PROGRESS


def test_read_only_completion_follows_submitted_fields(container, act_as, repos):
    repos.aspirations.add(5, "Grow as a mentor")

    container.check_in_service.save(
        act_as(HR),
        ACME,
        EMPLOYEE,
        assignment_params={},
        aspiration_params={5: {"manager_private_notes": "Discussed in 1:1", "status": "complete"}},
    )

    (check_in,) = repos.check_ins.aspiration.values()
    assert check_in.manager_completed_at is not None
    assert check_in.manager_completed_by_id == HR
    assert check_in.employee_completed_at is None


def test_energy_out_of_range_is_rejected_before_saving(container, act_as, repos):
    repos.assignments.add(10, "Code review", teammate_id=2, energy=30)

    with pytest.raises(ValidationError) as exc:
        container.check_in_service.save(
            act_as(EMPLOYEE),
            ACME,
            EMPLOYEE,
            assignment_params={10: {"actual_energy_percentage": "140", "status": "complete"}},
            aspiration_params={},
        )

    assert exc.value.errors == {
        "assignment_check_ins[10][actual_energy_percentage]": "Energy must be between 0 and 100"
    }
    assert repos.check_ins.assignment == {}


def test_saving_unknown_aspiration_raises_not_found(container, act_as):
    with pytest.raises(NotFoundError):
        container.check_in_service.save(
            act_as(EMPLOYEE), ACME, EMPLOYEE, assignment_params={}, aspiration_params={42: {"status": "draft"}}
        )


def test_outsider_cannot_save(container, act_as):
    with pytest.raises(AuthorizationError):
        container.check_in_service.save(act_as(OUTSIDER), ACME, EMPLOYEE, assignment_params={}, aspiration_params={})


def test_unknown_aspiration_leaves_earlier_assignment_untouched(container, act_as, repos):
    repos.assignments.add(10, "Code review", teammate_id=2, energy=30)
    context = act_as(EMPLOYEE)
    (row,) = container.check_in_service.build_page(context, ACME, EMPLOYEE).assignment_rows

    with pytest.raises(NotFoundError):
        container.check_in_service.save(
            context,
            ACME,
            EMPLOYEE,
            assignment_params={10: {"employee_rating": "meeting", "status": "complete"}},
            aspiration_params={42: {"employee_rating": "meeting", "status": "complete"}},
        )

    assert repos.check_ins.assignment == {row.check_in.check_in_id: row.check_in}


def test_assignment_from_another_company_is_not_found(container, act_as, repos):
    repos.assignments.add(99, "Outside contract", teammate_id=2, company_id=777)
    context = act_as(EMPLOYEE)

    with pytest.raises(NotFoundError):
        container.check_in_service.save(
            context,
            ACME,
            EMPLOYEE,
            assignment_params={99: {"employee_rating": "meeting", "status": "complete"}},
            aspiration_params={},
        )

    assert repos.check_ins.assignment == {}
    assert container.check_in_service.build_page(context, ACME, EMPLOYEE).assignment_rows == []


def test_build_page_opens_position_check_in_for_current_tenure(container, act_as, repos):
    page = container.check_in_service.build_page(act_as(EMPLOYEE), ACME, EMPLOYEE)

    assert page.position_check_in.employment_tenure_id == 1
    assert page.has_anything_to_check_in
    assert len(repos.check_ins.position) == 1


def test_build_page_without_tenure_has_no_position_check_in(container, act_as, repos):
    page = container.check_in_service.build_page(act_as(HR), ACME, HR)

    assert page.position_check_in is None
    assert repos.check_ins.position == {}


def test_employee_and_manager_complete_position_check_in(container, act_as, repos, fixed_now):
    service = container.check_in_service

    service.save(
        act_as(EMPLOYEE), ACME, EMPLOYEE, assignment_params={}, aspiration_params={},
        position_params={"employee_rating": "2", "employee_private_notes": "Shipped the billing rewrite", "status": "complete"},
    )
    service.save(
        act_as(MANAGER), ACME, EMPLOYEE, assignment_params={}, aspiration_params={},
        position_params={"manager_rating": "1", "employee_rating": "-3", "status": "complete"},
    )

    (check_in,) = repos.check_ins.position.values()
    assert check_in.employee_rating == 2
    assert check_in.manager_rating == 1
    assert check_in.employee_private_notes == "Shipped the billing rewrite"
    assert check_in.manager_completed_by_id == MANAGER
    assert check_in.status == CheckInStatus.READY_TO_FINALIZE


def test_position_rating_outside_scale_is_rejected(container, act_as, repos):
    with pytest.raises(ValidationError) as exc:
        container.check_in_service.save(
            act_as(EMPLOYEE), ACME, EMPLOYEE, assignment_params={}, aspiration_params={},
            position_params={"employee_rating": "4", "status": "complete"},
        )

    assert exc.value.errors == {"position_check_in[employee_rating]": "Rating is not valid"}
    assert repos.check_ins.position == {}


def test_read_only_viewer_cannot_touch_position_check_in(container, act_as, repos):
    container.check_in_service.save(
        act_as(HR), ACME, EMPLOYEE, assignment_params={}, aspiration_params={},
        position_params={"employee_rating": "3", "manager_rating": "3", "status": "complete"},
    )

    (check_in,) = repos.check_ins.position.values()
    assert check_in.employee_rating is None
    assert check_in.manager_rating is None
    assert check_in.employee_completed_at is None
    assert check_in.manager_completed_at is None


def test_read_only_completion_ignores_energy_and_alignment(container, act_as, repos):
    repos.assignments.add(10, "Code review", teammate_id=2, energy=30)

    container.check_in_service.save(
        act_as(HR),
        ACME,
        EMPLOYEE,
        assignment_params={10: {"actual_energy_percentage": "40", "employee_personal_alignment": "love", "status": "complete"}},
        aspiration_params={},
    )

    (check_in,) = repos.check_ins.assignment.values()
    assert check_in.actual_energy_percentage == 40
    assert check_in.employee_completed_at is None
    assert check_in.manager_completed_at is None
