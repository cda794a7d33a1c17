from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .monitoring.controller import register as register_monitoring
from .periods.controller import register as register_periods
from .records.controller import register as register_records

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    db_config = getattr(settings, "DB_CONFIG")
    storage = str(getattr(settings, "STORAGE_BACKEND", "mysql"))
    logger.info("settings=%s storage=%s", settings_module, storage)

    if container is None:
        if storage == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info(
                "schema ready on %s@%s:%s/%s (tables=%s)",
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
                len(list_tables(db_config)),
            )
        container = build_container(
            db_config=db_config,
            storage=storage,
            key_conflict_retries=int(getattr(settings, "KEY_CONFLICT_RETRIES", 1)),
        )

    app.extensions["ponto_container"] = container

    register_periods(app, container)
    register_records(app, container)
    register_monitoring(app, container)

    return app
