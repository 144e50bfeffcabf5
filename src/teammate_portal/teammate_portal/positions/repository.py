from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Position


class PositionRepository(Protocol):
    def get_by_id(self, position_id: int) -> Optional[Position]:
        raise NotImplementedError

    def list_for_organization(self, organization_id: int) -> Sequence[Position]:
        raise NotImplementedError
