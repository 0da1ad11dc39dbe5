from __future__ import annotations

import atexit
import importlib
import logging
from datetime import timedelta
from decimal import Decimal
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.web import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_CURRENCY_SYMBOL, DEFAULT_MONTHLY_DUE_AMOUNT, DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_accounts, list_tables
from .dues.controller import register as register_dues
from .expenses.controller import register as register_expenses
from .groups.controller import register as register_groups
from .identity.controller import register as register_identity
from .members.controller import register as register_members

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["CURRENCY_SYMBOL"] = getattr(settings, "CURRENCY_SYMBOL", DEFAULT_CURRENCY_SYMBOL)
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))
    monthly_due_amount = Decimal(str(getattr(settings, "MONTHLY_DUE_AMOUNT", DEFAULT_MONTHLY_DUE_AMOUNT)))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_accounts(db_config)
            logger.info("demo seed ready")

        container = build_container(db_config=db_config, monthly_due_amount=monthly_due_amount)
        atexit.register(container.close)

    app.extensions["membership_container"] = container

    register_error_handlers(app)
    register_identity(app, container)
    register_members(app, container)
    register_attendance(app, container)
    register_dues(app, container)
    register_expenses(app, container)
    register_groups(app, container)

    return app
