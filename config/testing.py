import os

from .config import Config

SECRET_KEY = "test-secret"

DB_CONFIG = Config.db_config(database=os.getenv("DB_NAME", "teammate_portal_test"))

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
DEFAULT_CHECK_IN_VIEW = "card"

AUTO_INIT_DB = False
AUTO_SEED_DB = False
