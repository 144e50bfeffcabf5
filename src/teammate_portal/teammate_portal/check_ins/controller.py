from __future__ import annotations

import logging
import re
from functools import wraps

from flask import Flask, flash, g, redirect, render_template, request, url_for
from werkzeug.datastructures import MultiDict

from ..core.constants import POSITION_RATING_MAX, POSITION_RATING_MIN
from ..core.enums import CheckInRating, PersonalAlignment, ViewLayout
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..container import Container
from ..routing.paths import aspirations_path, check_ins_finalize_path, check_ins_path, is_local_path

logger = logging.getLogger(__name__)

SAVED_MESSAGE = "Check-ins saved successfully."
FINALIZED_MESSAGE = "Check-ins finalized successfully."

_FIELD_NAME = re.compile(r"^(assignment|aspiration)_check_ins\[(\d+)\]\[(\w+)\]$")
_POSITION_FIELD_NAME = re.compile(r"^position_check_in\[(\w+)\]$")

ParsedForm = tuple[dict[int, dict[str, str]], dict[int, dict[str, str]], dict[str, str]]


def parse_check_in_form(form: MultiDict) -> ParsedForm:
    """Split ``assignment_check_ins[<id>][<field>]`` and ``position_check_in[<field>]`` keys into dicts."""
    parsed: dict[str, dict[int, dict[str, str]]] = {"assignment": {}, "aspiration": {}}
    position: dict[str, str] = {}
    for key, value in form.items():
        m = _FIELD_NAME.match(key)
        if m:
            kind, subject_id, name = m.group(1), int(m.group(2)), m.group(3)
            parsed[kind].setdefault(subject_id, {})[name] = value
            continue
        m = _POSITION_FIELD_NAME.match(key)
        if m:
            position[m.group(1)] = value
    return parsed["assignment"], parsed["aspiration"], position


def register(app: Flask, container: Container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            context = container.access_resolver.resolve()
            if context is None:
                flash("Please log in to continue.", "warning")
                return redirect(url_for("login", next=request.path))
            g.access_context = context
            return view(*args, **kwargs)

        return wrapper

    def _requested_view() -> str | None:
        raw = request.values.get("view")
        if not raw:
            return None
        return ViewLayout.parse(raw, ViewLayout.parse(app.config.get("DEFAULT_CHECK_IN_VIEW"))).value

    def _render(page, *, errors=None, status=200):
        org_id = page.target.organization.organization_id
        person_id = page.target.person.person_id
        return (
            render_template(
                "check_ins/show.html",
                page=page,
                errors=errors or {},
                self_path=check_ins_path(org_id, person_id, view=_requested_view()),
                finalize_path=check_ins_finalize_path(org_id, person_id, view=_requested_view()),
                aspirations_url=aspirations_path(org_id),
                ratings=list(CheckInRating),
                alignments=list(PersonalAlignment),
                position_ratings=list(range(POSITION_RATING_MIN, POSITION_RATING_MAX + 1)),
            ),
            status,
        )

    def _save(organization_id: int, person_id: int):
        assignment_params, aspiration_params, position_params = parse_check_in_form(request.form)
        container.check_in_service.save(
            g.access_context,
            organization_id,
            person_id,
            assignment_params=assignment_params,
            aspiration_params=aspiration_params,
            position_params=position_params or None,
        )

    def _invalid(organization_id: int, person_id: int, e: ValidationError):
        flash(str(e), "danger")
        page = container.check_in_service.build_page(
            g.access_context, organization_id, person_id, view=request.values.get("view")
        )
        return _render(page, errors=e.errors, status=422)

    @app.route(
        "/organizations/<int:organization_id>/people/<int:person_id>/check_ins",
        methods=["GET"],
        endpoint="check_ins_show",
    )
    @login_required
    def show(organization_id: int, person_id: int):
        page = container.check_in_service.build_page(
            g.access_context, organization_id, person_id, view=request.args.get("view")
        )
        return _render(page)

    @app.route(
        "/organizations/<int:organization_id>/people/<int:person_id>/check_ins",
        methods=["POST"],
        endpoint="check_ins_update",
    )
    @login_required
    def update(organization_id: int, person_id: int):
        target = check_ins_path(organization_id, person_id, view=_requested_view())
        try:
            _save(organization_id, person_id)
        except ValidationError as e:
            return _invalid(organization_id, person_id, e)
        except (AuthorizationError, NotFoundError):
            raise
        except Exception:
            logger.exception("saving check-ins failed for person %s in organization %s", person_id, organization_id)
            flash("System error while saving check-ins", "danger")
            return redirect(target)

        flash(SAVED_MESSAGE, "success")
        return redirect(target)

    @app.route(
        "/organizations/<int:organization_id>/people/<int:person_id>/check_ins/save_and_redirect",
        methods=["POST"],
        endpoint="check_ins_save_and_redirect",
    )
    @login_required
    def save_and_redirect(organization_id: int, person_id: int):
        fallback = check_ins_path(organization_id, person_id, view=_requested_view())
        redirect_url = request.form.get("redirect_url")
        if redirect_url and not is_local_path(redirect_url):
            logger.warning("ignoring non-local redirect_url %r", redirect_url)
            redirect_url = None
        try:
            _save(organization_id, person_id)
        except ValidationError as e:
            return _invalid(organization_id, person_id, e)
        except (AuthorizationError, NotFoundError):
            raise
        except Exception:
            logger.exception("saving check-ins failed for person %s in organization %s", person_id, organization_id)
            flash("System error while saving check-ins", "danger")
            return redirect(fallback)

        flash(SAVED_MESSAGE, "success")
        return redirect(redirect_url or fallback)

    @app.route(
        "/organizations/<int:organization_id>/people/<int:person_id>/check_ins/finalize",
        methods=["POST"],
        endpoint="check_ins_finalize",
    )
    @login_required
    def finalize(organization_id: int, person_id: int):
        target = check_ins_path(organization_id, person_id, view=_requested_view())
        assignment_params, aspiration_params, position_params = parse_check_in_form(request.form)
        try:
            container.check_in_finalization_service.finalize(
                g.access_context,
                organization_id,
                person_id,
                assignment_params=assignment_params,
                aspiration_params=aspiration_params,
                position_params=position_params or None,
            )
        except ValidationError as e:
            return _invalid(organization_id, person_id, e)
        except (AuthorizationError, NotFoundError):
            raise
        except Exception:
            logger.exception("finalizing check-ins failed for person %s in organization %s", person_id, organization_id)
            flash("System error while finalizing check-ins", "danger")
            return redirect(target)

        flash(FINALIZED_MESSAGE, "success")
        return redirect(target)
