"""Finalize check-ins once both the employee and the manager have completed their side.

Finalizing records the official rating and shared notes and closes the check-in;
the next visit to the check-ins page opens a fresh one.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Callable, Mapping, Optional

from ..access.context import AccessContext
from ..access.policy import PersonAccessService
from ..aspirations.repository import AspirationRepository
from ..assignments.repository import AssignmentRepository
from ..common.datetime_utils import now_local
from ..common.validators import optional_text
from ..core.exceptions import NotFoundError, ValidationError
from .repository import CheckInRepository
from .service import field_key, parse_rating, resolve_assignment

logger = logging.getLogger(__name__)

FINALIZE_FLAG = "1"


def _flagged(attrs: Optional[Mapping[str, str]]) -> bool:
    return bool(attrs) and attrs.get("finalize") == FINALIZE_FLAG


class CheckInFinalizationService:
    def __init__(
        self,
        access: PersonAccessService,
        assignments: AssignmentRepository,
        aspirations: AspirationRepository,
        check_ins: CheckInRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._access = access
        self._assignments = assignments
        self._aspirations = aspirations
        self._check_ins = check_ins
        self._clock = clock

    def finalize(
        self,
        context: AccessContext,
        organization_id: int,
        person_id: int,
        *,
        assignment_params: Mapping[int, Mapping[str, str]],
        aspiration_params: Mapping[int, Mapping[str, str]],
        position_params: Optional[Mapping[str, str]] = None,
    ) -> int:
        """Finalize every check-in submitted with ``finalize=1``; returns how many were closed.

        Nothing is written unless every flagged check-in is ready and has a valid official rating.
        """
        target = self._access.resolve_target(organization_id, person_id)
        self._access.authorize_finalize(context, target)
        teammate_id = target.teammate.teammate_id

        pending = []
        errors: dict[str, str] = {}

        if _flagged(position_params):
            check_in = self._check_ins.find_open_position_check_in(teammate_id)
            pending.append(("position", None, check_in, position_params))

        known_aspirations = {a.aspiration_id for a in self._aspirations.list_for_organization(organization_id)}
        for assignment_id, attrs in assignment_params.items():
            if not _flagged(attrs):
                continue
            resolve_assignment(self._assignments, organization_id, assignment_id)
            check_in = self._check_ins.find_open_assignment_check_in(teammate_id, assignment_id)
            pending.append(("assignment", assignment_id, check_in, attrs))

        for aspiration_id, attrs in aspiration_params.items():
            if not _flagged(attrs):
                continue
            if aspiration_id not in known_aspirations:
                raise NotFoundError(f"Aspiration {aspiration_id} not found")
            check_in = self._check_ins.find_open_aspiration_check_in(teammate_id, aspiration_id)
            pending.append(("aspiration", aspiration_id, check_in, attrs))

        if not pending:
            raise ValidationError("Select at least one check-in to finalize")

        finalized = []
        now = self._clock()
        for kind, subject_id, check_in, attrs in pending:
            if check_in is None or not check_in.ready_for_finalization:
                errors[field_key(kind, subject_id, "finalize")] = "Check-in is not ready to finalize"
                continue
            rating = parse_rating(kind, optional_text(attrs.get("official_rating")))
            if rating is None:
                errors[field_key(kind, subject_id, "official_rating")] = "Official rating is not valid"
                continue
            finalized.append(
                (
                    kind,
                    replace(
                        check_in,
                        official_rating=rating,
                        shared_notes=optional_text(attrs.get("shared_notes")),
                        official_check_in_completed_at=now,
                        finalized_by_id=context.person_id,
                    ),
                )
            )

        if errors:
            raise ValidationError("Check-ins could not be finalized", errors)

        for kind, check_in in finalized:
            if kind == "position":
                self._check_ins.update_position_check_in(check_in)
            elif kind == "assignment":
                self._check_ins.update_assignment_check_in(check_in)
            else:
                self._check_ins.update_aspiration_check_in(check_in)

        logger.info("person %s finalized %s check-in(s) for teammate %s", context.person_id, len(finalized), teammate_id)
        return len(finalized)
