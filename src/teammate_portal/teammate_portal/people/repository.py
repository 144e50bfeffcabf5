from __future__ import annotations

from typing import Optional, Protocol

from .model import Person, ProfileChanges


class PersonRepository(Protocol):
    """Repository interface for Person.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, person_id: int) -> Optional[Person]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Person]:
        raise NotImplementedError

    def get_by_phone_number(self, phone_number: str) -> Optional[Person]:
        raise NotImplementedError

    def update_profile(self, person_id: int, changes: ProfileChanges) -> bool:
        raise NotImplementedError
