from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Aspiration:
    """Domain entity: a growth aspiration defined by an organization."""

    aspiration_id: int
    organization_id: int
    name: str
    description: Optional[str] = None
    sort_order: int = 0
