"""Shared defaults read from the environment; settings modules build on these."""
import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "teammate-portal-secret"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "teammate_portal")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    # card | table
    DEFAULT_CHECK_IN_VIEW = os.environ.get("DEFAULT_CHECK_IN_VIEW", "card")

    # Dev helpers
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))
    AUTO_SEED_DB = bool(int(os.environ.get("AUTO_SEED_DB", "0")))

    @classmethod
    def db_config(cls, **overrides) -> dict:
        cfg = {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
        cfg.update(overrides)
        return cfg
