from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .payroll.cli import register as register_payroll_cli
from .payroll.controller import register as register_payroll
from .salaries.controller import register as register_salaries
from .work_calendar.controller import register as register_calendar

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["SCHOOL_ID"] = getattr(settings, "SCHOOL_ID", None)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s school=%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
        app.config["SCHOOL_ID"] or "-",
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(db_config=db_config, school_id=app.config["SCHOOL_ID"])

    register_payroll(app, container)
    register_salaries(app, container)
    register_calendar(app, container)
    register_payroll_cli(app, container)

    return app
