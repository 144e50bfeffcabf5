"""Teammate Portal package.

This package is organized by feature modules (people, employment, check_ins, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, g

from config import get_settings_module

from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_logins, list_tables
from .database.connection import DBConfig

from .container import Container, build_container
from .core.constants import DEFAULT_CHECK_IN_VIEW
from .routing.errors import register as register_error_pages
from .routing import paths
from .aspirations.controller import register as register_aspirations
from .check_ins.controller import register as register_check_ins
from .employment.controller import register as register_employment
from .people.controller import register as register_people

logger = logging.getLogger(__name__)

_DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger().setLevel(level)


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DEFAULT_CHECK_IN_VIEW"] = str(getattr(settings, "DEFAULT_CHECK_IN_VIEW", DEFAULT_CHECK_IN_VIEW))
    _configure_logging(getattr(settings, "LOG_LEVEL", "DEBUG" if app.config["DEBUG"] else "INFO"))

    if container is None:
        logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=_DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=_DATABASE_DIR / "seed.sql")
            ensure_demo_logins(db_config)
            logger.info("demo seed ready")

        container = build_container(db_config=db_config, default_check_in_view=app.config["DEFAULT_CHECK_IN_VIEW"])

    app.extensions["teammate_portal.container"] = container

    @app.context_processor
    def inject_helpers():
        return {
            "access_context": g.get("access_context"),
            "check_ins_path": paths.check_ins_path,
            "person_path": paths.person_path,
            "aspirations_path": paths.aspirations_path,
            "profile_path": paths.profile_path,
            "employment_tenures_path": paths.employment_tenures_path,
            "end_employment_path": paths.end_employment_path,
        }

    register_error_pages(app)
    register_people(app, container)
    register_check_ins(app, container)
    register_aspirations(app, container)
    register_employment(app, container)

    return app
