import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "ponto-dev-secret"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "ponto_db")

    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "mysql")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    KEY_CONFLICT_RETRIES = int(os.environ.get("KEY_CONFLICT_RETRIES", "1"))

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))

    @classmethod
    def db_config(cls) -> dict:
        return {
            "host": cls.DB_HOST,
            "port": cls.DB_PORT,
            "user": cls.DB_USER,
            "password": cls.DB_PASSWORD,
            "database": cls.DB_NAME,
        }
