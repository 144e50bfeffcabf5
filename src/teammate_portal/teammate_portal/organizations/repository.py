from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Organization


class OrganizationRepository(Protocol):
    def get_by_id(self, organization_id: int) -> Optional[Organization]:
        raise NotImplementedError

    def list_by_ids(self, organization_ids: Sequence[int]) -> Sequence[Organization]:
        raise NotImplementedError
