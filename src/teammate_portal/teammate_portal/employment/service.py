from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationError
from ..people.repository import PersonRepository
from ..positions.model import Position
from ..positions.repository import PositionRepository
from .model import EmploymentTenure
from .repository import EmploymentTenureRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmploymentTenureRow:
    """Person page read model: a tenure with its position and manager names."""

    tenure: EmploymentTenure
    position_name: str
    manager_name: Optional[str]

    @property
    def started_at(self) -> str:
        return self.tenure.started_at.strftime("%Y-%m-%d")

    @property
    def ended_at(self) -> str:
        return self.tenure.ended_at.strftime("%Y-%m-%d") if self.tenure.ended_at else "Present"


class EmploymentTenureService:
    def __init__(
        self,
        tenures: EmploymentTenureRepository,
        positions: PositionRepository,
        people: PersonRepository,
    ):
        self._tenures = tenures
        self._positions = positions
        self._people = people

    def current_for(self, teammate_id: int, company_id: int) -> Optional[EmploymentTenure]:
        return self._tenures.get_active(teammate_id, company_id)

    def current_position(self, tenure: Optional[EmploymentTenure]) -> Optional[Position]:
        if tenure is None:
            return None
        return self._positions.get_by_id(tenure.position_id)

    def history_rows(self, teammate_id: int, company_id: int) -> Sequence[EmploymentTenureRow]:
        rows: list[EmploymentTenureRow] = []
        for t in self._tenures.list_for_teammate(teammate_id, company_id=company_id):
            position = self._positions.get_by_id(t.position_id)
            manager = self._people.get_by_id(t.manager_person_id) if t.manager_person_id else None
            rows.append(
                EmploymentTenureRow(
                    tenure=t,
                    position_name=position.display_name if position else "-",
                    manager_name=manager.display_name if manager else None,
                )
            )
        return rows

    def positions_for(self, organization_id: int) -> Sequence[Position]:
        return sorted(self._positions.list_for_organization(organization_id), key=lambda p: p.display_name)

    def _validate_new_tenure(
        self,
        *,
        teammate_id: int,
        company_id: int,
        position_id: int,
        started_at: date,
        manager_person_id: Optional[int],
        ended_at: Optional[date],
        replacing: Optional[EmploymentTenure] = None,
    ) -> None:
        if ended_at is not None and ended_at <= started_at:
            raise ValidationError("Ended at must be after started at", {"ended_at": "must be after started at"})

        position = self._positions.get_by_id(position_id)
        if position is None or position.position_type.organization_id != company_id:
            raise NotFoundError("Position not found")
        if manager_person_id is not None and self._people.get_by_id(manager_person_id) is None:
            raise NotFoundError("Manager not found")

        for existing in self._tenures.list_for_teammate(teammate_id, company_id=company_id):
            if replacing is not None and existing.tenure_id == replacing.tenure_id:
                continue
            if existing.overlaps(started_at, ended_at):
                raise ValidationError(
                    "Employment tenure overlaps an existing tenure at this company",
                    {"started_at": "overlaps an existing tenure"},
                )

    def start_tenure(
        self,
        *,
        teammate_id: int,
        company_id: int,
        position_id: int,
        started_at: date,
        manager_person_id: Optional[int] = None,
        ended_at: Optional[date] = None,
    ) -> int:
        self._validate_new_tenure(
            teammate_id=teammate_id,
            company_id=company_id,
            position_id=position_id,
            started_at=started_at,
            manager_person_id=manager_person_id,
            ended_at=ended_at,
        )
        tenure_id = self._tenures.create(
            teammate_id=teammate_id,
            company_id=company_id,
            position_id=position_id,
            manager_person_id=manager_person_id,
            started_at=started_at,
            ended_at=ended_at,
        )
        logger.info("Started employment tenure %s for teammate %s at company %s", tenure_id, teammate_id, company_id)
        return tenure_id

    def change_employment(
        self,
        *,
        teammate_id: int,
        company_id: int,
        position_id: int,
        started_at: date,
        manager_person_id: Optional[int] = None,
    ) -> Optional[int]:
        """Start a tenure; a job change ends the active tenure on the new start date first.

        Returns the new tenure id, or None when position and manager are unchanged.
        """
        active = self.current_for(teammate_id, company_id)
        if active is None:
            return self.start_tenure(
                teammate_id=teammate_id,
                company_id=company_id,
                position_id=position_id,
                started_at=started_at,
                manager_person_id=manager_person_id,
            )

        if active.position_id == position_id and active.manager_person_id == manager_person_id:
            logger.info("Employment for teammate %s at company %s unchanged", teammate_id, company_id)
            return None
        if started_at <= active.started_at:
            raise ValidationError(
                "Started at must be after the current tenure started", {"started_at": "must be after the current tenure"}
            )
        self._validate_new_tenure(
            teammate_id=teammate_id,
            company_id=company_id,
            position_id=position_id,
            started_at=started_at,
            manager_person_id=manager_person_id,
            ended_at=None,
            replacing=active,
        )
        self.end_tenure(teammate_id=teammate_id, company_id=company_id, ended_at=started_at)
        return self.start_tenure(
            teammate_id=teammate_id,
            company_id=company_id,
            position_id=position_id,
            started_at=started_at,
            manager_person_id=manager_person_id,
        )

    def end_tenure(self, *, teammate_id: int, company_id: int, ended_at: date) -> None:
        active = self._tenures.get_active(teammate_id, company_id)
        if active is None:
            raise ValidationError("No active employment tenure to end")
        if ended_at <= active.started_at:
            raise ValidationError("Ended at must be after started at", {"ended_at": "must be after started at"})
        if not self._tenures.end(active.tenure_id, ended_at=ended_at):
            raise ValidationError("Ending the employment tenure failed")
        logger.info("Ended employment tenure %s on %s", active.tenure_id, ended_at)
