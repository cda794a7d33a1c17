import os

from .config import Config

SECRET_KEY = Config.SECRET_KEY

DB_CONFIG = Config.db_config()

STORAGE_BACKEND = Config.STORAGE_BACKEND
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
KEY_CONFLICT_RETRIES = Config.KEY_CONFLICT_RETRIES

DEBUG = True

# If enabled, app will apply database/schema.sql on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
