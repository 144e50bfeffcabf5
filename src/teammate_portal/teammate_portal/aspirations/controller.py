from __future__ import annotations

from functools import wraps

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..container import Container


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

    @app.route("/organizations/<int:organization_id>/aspirations", methods=["GET"], endpoint="aspirations_index")
    @login_required
    def index(organization_id: int):
        organization, aspirations = container.aspiration_service.list_for_organization(organization_id)
        return render_template("aspirations/index.html", organization=organization, aspirations=aspirations)
