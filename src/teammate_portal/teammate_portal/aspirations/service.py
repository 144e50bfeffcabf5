from __future__ import annotations

from typing import Sequence

from ..core.exceptions import NotFoundError
from ..organizations.model import Organization
from ..organizations.repository import OrganizationRepository
from .model import Aspiration
from .repository import AspirationRepository


class AspirationService:
    def __init__(self, aspirations: AspirationRepository, organizations: OrganizationRepository):
        self._aspirations = aspirations
        self._organizations = organizations

    def list_for_organization(self, organization_id: int) -> tuple[Organization, Sequence[Aspiration]]:
        organization = self._organizations.get_by_id(organization_id)
        if organization is None:
            raise NotFoundError(f"Organization {organization_id} not found")
        return organization, self._aspirations.list_for_organization(organization_id)
