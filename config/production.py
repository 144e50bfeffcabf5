import os

from .config import Config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = Config.db_config()

DEBUG = False
TESTING = False
LOG_LEVEL = Config.LOG_LEVEL
DEFAULT_CHECK_IN_VIEW = Config.DEFAULT_CHECK_IN_VIEW

AUTO_INIT_DB = Config.AUTO_INIT_DB
AUTO_SEED_DB = Config.AUTO_SEED_DB
