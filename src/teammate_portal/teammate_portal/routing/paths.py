"""Canonical paths for the nested organization/person resources."""
from __future__ import annotations

from typing import Optional

from flask import url_for


def person_path(organization_id: int, person_id: int) -> str:
    return url_for("person_show", organization_id=organization_id, person_id=person_id)


def check_ins_path(organization_id: int, person_id: int, *, view: Optional[str] = None) -> str:
    if view:
        return url_for("check_ins_show", organization_id=organization_id, person_id=person_id, view=view)
    return url_for("check_ins_show", organization_id=organization_id, person_id=person_id)


def check_ins_finalize_path(organization_id: int, person_id: int, *, view: Optional[str] = None) -> str:
    if view:
        return url_for("check_ins_finalize", organization_id=organization_id, person_id=person_id, view=view)
    return url_for("check_ins_finalize", organization_id=organization_id, person_id=person_id)


def employment_tenures_path(organization_id: int, person_id: int) -> str:
    return url_for("employment_tenures_create", organization_id=organization_id, person_id=person_id)


def end_employment_path(organization_id: int, person_id: int) -> str:
    return url_for("employment_tenures_end", organization_id=organization_id, person_id=person_id)


def aspirations_path(organization_id: int) -> str:
    return url_for("aspirations_index", organization_id=organization_id)


def profile_path() -> str:
    return url_for("profile_show")


def is_local_path(target: Optional[str]) -> bool:
    """Only same-site absolute paths are accepted as redirect targets."""
    if not target:
        return False
    return target.startswith("/") and not target.startswith("//") and "\\" not in target
