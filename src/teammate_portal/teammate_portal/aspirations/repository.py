from __future__ import annotations

from typing import Protocol, Sequence

from .model import Aspiration


class AspirationRepository(Protocol):
    def list_for_organization(self, organization_id: int) -> Sequence[Aspiration]:
        """Ordered by sort_order, then name."""
        raise NotImplementedError
