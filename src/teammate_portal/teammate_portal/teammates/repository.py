from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Teammate


class TeammateRepository(Protocol):
    def get_by_id(self, teammate_id: int) -> Optional[Teammate]:
        raise NotImplementedError

    def get_for_person_and_organization(self, person_id: int, organization_id: int) -> Optional[Teammate]:
        raise NotImplementedError

    def list_for_person(self, person_id: int) -> Sequence[Teammate]:
        raise NotImplementedError
