from __future__ import annotations

import logging
from datetime import timedelta
from functools import wraps

from flask import Flask, flash, g, redirect, render_template, request, session, url_for

from ..access.context import SESSION_ORGANIZATION_KEY, SESSION_PERSON_KEY
from ..common import timezones
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container
from ..routing.paths import check_ins_path, is_local_path, profile_path

logger = logging.getLogger(__name__)

PROFILE_UPDATED_MESSAGE = "Profile updated successfully!"


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

    @app.route("/", methods=["GET"], endpoint="index")
    def index():
        if container.access_resolver.resolve() is None:
            return redirect(url_for("login"))
        return redirect(profile_path())

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            remember = request.form.get("remember_me")

            try:
                person = container.auth_service.authenticate(email, password)

                session.clear()
                session.permanent = bool(remember)
                app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
                session[SESSION_PERSON_KEY] = person.person_id
                session[SESSION_ORGANIZATION_KEY] = person.current_organization_id

                flash(f"Welcome back, {person.casual_name}!", "success")
                next_url = request.args.get("next")
                return redirect(next_url if is_local_path(next_url) else profile_path())
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception:
                logger.exception("login failed")
                flash("System error while signing in", "danger")

        return render_template("login.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("You have been signed out.", "info")
        return redirect(url_for("login"))

    @app.route("/profile", methods=["GET"], endpoint="profile_show")
    @login_required
    def profile_show():
        profile = container.profile_service.get_profile(g.access_context.person_id)
        return render_template("profile/show.html", profile=profile)

    def _render_edit(values, *, errors=None, status=200):
        return (
            render_template(
                "profile/edit.html",
                values=values,
                errors=errors or {},
                timezone_choices=timezones.timezone_choices(),
            ),
            status,
        )

    @app.route("/profile/edit", methods=["GET"], endpoint="profile_edit")
    @login_required
    def profile_edit():
        values = container.profile_service.form_values(
            g.access_context.person, accept_language=request.headers.get("Accept-Language")
        )
        return _render_edit(values)

    @app.route("/profile", methods=["POST"], endpoint="profile_update")
    @login_required
    def profile_update():
        try:
            container.profile_service.update_profile(g.access_context.person_id, request.form)
        except ValidationError as e:
            flash(str(e), "danger")
            return _render_edit(request.form.to_dict(), errors=e.errors, status=422)

        flash(PROFILE_UPDATED_MESSAGE, "success")
        return redirect(profile_path())

    @app.route("/organizations/<int:organization_id>/people/<int:person_id>", methods=["GET"], endpoint="person_show")
    @login_required
    def person_show(organization_id: int, person_id: int):
        page = container.person_page_service.build(g.access_context, organization_id, person_id)
        return render_template(
            "people/show.html",
            page=page,
            check_ins_url=check_ins_path(organization_id, person_id),
        )
