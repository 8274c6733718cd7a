from __future__ import annotations

import importlib
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .accounts.controller import register as register_accounts
from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container, connect
from .core.constants import DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, list_tables
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Tests pass a ready ``container`` (in-memory repositories); otherwise the
    MySQL-backed container is built from the selected settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))
    app.permanent_session_lifetime = timedelta(days=app.config["SESSION_DAYS"])

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        conn = connect(db_config)

        if app.config["DEBUG"]:
            print("[wagetrack] settings=", settings_module, " db=", conn.config.describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(conn)
            if app.config["DEBUG"]:
                print(f"[wagetrack] schema ready (tables={len(list_tables(conn))})")

        container = build_container(conn=conn)

    app.extensions["wagetrack"] = container

    register_accounts(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_payroll(app, container)

    return app
