from .config import Config

SECRET_KEY = "test-secret"

DB_CONFIG = Config.db_config()

STORAGE_BACKEND = "memory"
LOG_LEVEL = "WARNING"
KEY_CONFLICT_RETRIES = 1

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
