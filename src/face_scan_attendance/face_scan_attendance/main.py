from __future__ import annotations

import importlib
import logging
from dataclasses import asdict
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.log import configure_logging
from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .settings import AppSettings

logger = logging.getLogger(__name__)


def create_app(settings: AppSettings | None = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    settings = settings or AppSettings.from_module(module)
    app.secret_key = getattr(module, "SECRET_KEY")
    app.config["DEBUG"] = settings.debug

    configure_logging(settings.log_level, settings.log_file)
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        settings.db.user,
        settings.db.host,
        settings.db.port,
        settings.db.database,
    )

    if settings.auto_init_db:
        db_config = asdict(settings.db)
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    if not settings.oracle.api_key:
        logger.warning("ORACLE_API_KEY is not set; face scans will fail with config_error")

    container = build_container(settings=settings)
    register_attendance(app, container)

    return app
