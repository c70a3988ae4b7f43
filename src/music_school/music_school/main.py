from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .catalog.controller import register as register_catalog
from .common.logging_utils import setup_logger
from .common.web import register_error_handlers
from .container import build_container
from .core.enums import DataMode
from .database.bootstrap import ensure_collections, list_tables, seed_defaults
from .database.connection import DBConfig
from .finance.controller import register as register_finance
from .inquiries.controller import register as register_inquiries
from .lessons.controller import register as register_lessons
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports
from .roster.controller import register as register_roster
from .storage.controller import register as register_data
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logger(level=getattr(settings, "LOG_LEVEL", "INFO"), log_file=getattr(settings, "LOG_FILE", None))

    backend = getattr(settings, "STORAGE_BACKEND", "mysql")
    default_mode = DataMode(getattr(settings, "DEFAULT_DATA_MODE", DataMode.PRODUCTION.value))
    logger.info(
        "settings=%s backend=%s db=%s default_mode=%s",
        settings_module, backend, DBConfig.from_dict(db_config).describe(), default_mode.value,
    )

    if backend == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        for mode in DataMode:
            ensure_collections(db_config, mode)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(db_config=db_config, backend=backend, default_mode=default_mode)

    # A fresh memory store is empty, so it always gets the default admin.
    if backend == "memory" or bool(getattr(settings, "AUTO_SEED_DB", False)):
        for mode in DataMode:
            seed_defaults(container.services(mode).store)

    register_error_handlers(app)
    register_users(app, container)
    register_data(app, container)
    register_catalog(app, container)
    register_roster(app, container)
    register_lessons(app, container)
    register_payroll(app, container)
    register_reports(app, container)
    register_finance(app, container)
    register_inquiries(app, container)

    return app
