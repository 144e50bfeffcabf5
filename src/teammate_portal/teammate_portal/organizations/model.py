from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import OrganizationType


@dataclass(frozen=True)
class Organization:
    """Domain entity: an organization or company."""

    organization_id: int
    name: str
    org_type: OrganizationType = OrganizationType.ORGANIZATION
    parent_id: Optional[int] = None

    @property
    def is_company(self) -> bool:
        return self.org_type == OrganizationType.COMPANY
