from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, flash, g, redirect, request, url_for

from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..container import Container
from ..routing.paths import person_path

logger = logging.getLogger(__name__)


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

    def _run(action, organization_id: int, person_id: int):
        try:
            message = action(g.access_context, organization_id, person_id, request.form)
        except ValidationError as e:
            details = "; ".join(e.errors.values())
            flash(f"{e}: {details}" if details else str(e), "danger")
        except (AuthorizationError, NotFoundError):
            raise
        except Exception:
            logger.exception("changing employment failed for person %s in organization %s", person_id, organization_id)
            flash("System error while changing employment", "danger")
        else:
            flash(message, "success")
        return redirect(person_path(organization_id, person_id))

    @app.route(
        "/organizations/<int:organization_id>/people/<int:person_id>/employment_tenures",
        methods=["POST"],
        endpoint="employment_tenures_create",
    )
    @login_required
    def create(organization_id: int, person_id: int):
        return _run(container.employment_management_service.start, organization_id, person_id)

    @app.route(
        "/organizations/<int:organization_id>/people/<int:person_id>/employment_tenures/end",
        methods=["POST"],
        endpoint="employment_tenures_end",
    )
    @login_required
    def end(organization_id: int, person_id: int):
        return _run(container.employment_management_service.end, organization_id, person_id)
