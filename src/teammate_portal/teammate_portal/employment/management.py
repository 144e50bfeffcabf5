"""Use cases behind the employment forms on the person page."""
from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..access.context import AccessContext
from ..access.policy import PersonAccessService
from ..common.validators import optional_id, require_date
from ..core.exceptions import ValidationError
from .service import EmploymentTenureService

logger = logging.getLogger(__name__)

CREATED_MESSAGE = "Employment tenure was successfully created."
UNCHANGED_MESSAGE = "No changes were made to your employment."
ENDED_MESSAGE = "Employment tenure was successfully ended."


class EmploymentManagementService:
    def __init__(self, access: PersonAccessService, employment: EmploymentTenureService):
        self._access = access
        self._employment = employment

    def start(self, context: AccessContext, organization_id: int, person_id: int, form: Mapping[str, str]) -> str:
        """Start or change the target's employment; returns the flash message."""
        target = self._access.resolve_target(organization_id, person_id)
        self._access.authorize_employment_change(context, target, starting=True)

        errors: dict[str, str] = {}
        position_id = self._field(errors, "position_id", lambda: optional_id(form.get("position_id"), "Position"))
        manager_person_id = self._field(
            errors, "manager_person_id", lambda: optional_id(form.get("manager_person_id"), "Manager")
        )
        started_at = self._field(errors, "started_at", lambda: require_date(form.get("started_at"), "Started at"))
        if position_id is None and "position_id" not in errors:
            errors["position_id"] = "Position can't be blank"
        if errors:
            raise ValidationError("Employment tenure could not be saved", errors)

        tenure_id = self._employment.change_employment(
            teammate_id=target.teammate.teammate_id,
            company_id=organization_id,
            position_id=position_id,
            started_at=started_at,
            manager_person_id=manager_person_id,
        )
        if tenure_id is None:
            return UNCHANGED_MESSAGE
        logger.info("person %s started tenure %s for person %s", context.person_id, tenure_id, person_id)
        return CREATED_MESSAGE

    def end(self, context: AccessContext, organization_id: int, person_id: int, form: Mapping[str, str]) -> str:
        target = self._access.resolve_target(organization_id, person_id)
        self._access.authorize_employment_change(context, target)

        ended_at = require_date(form.get("ended_at"), "Ended at")
        self._employment.end_tenure(
            teammate_id=target.teammate.teammate_id, company_id=organization_id, ended_at=ended_at
        )
        logger.info("person %s ended the employment of person %s on %s", context.person_id, person_id, ended_at)
        return ENDED_MESSAGE

    @staticmethod
    def _field(errors: dict[str, str], name: str, fn) -> Optional[object]:
        try:
            return fn()
        except ValidationError as e:
            errors[name] = str(e)
            return None
