"""Error pages: unmatched routes, missing records and denied access."""
from __future__ import annotations

import logging

from flask import Flask, render_template, request
from werkzeug.exceptions import NotFound

from ..core.exceptions import AuthorizationError, NotFoundError

logger = logging.getLogger(__name__)

NO_ROUTE_MESSAGE = "No route matches"


def register(app: Flask) -> None:
    @app.errorhandler(NotFound)
    def no_route(e: NotFound):
        logger.info("%s [%s] %r", NO_ROUTE_MESSAGE, request.method, request.path)
        return (
            render_template(
                "errors/routing_error.html",
                message=NO_ROUTE_MESSAGE,
                method=request.method,
                path=request.path,
            ),
            404,
        )

    @app.errorhandler(NotFoundError)
    def record_not_found(e: NotFoundError):
        logger.info("not found: %s", e)
        return render_template("errors/not_found.html", message=str(e)), 404

    @app.errorhandler(AuthorizationError)
    def forbidden(e: AuthorizationError):
        logger.info("forbidden %s: %s", request.path, e)
        return render_template("403.html", message=str(e)), 403
