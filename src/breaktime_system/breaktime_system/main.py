from __future__ import annotations

import importlib
import weakref
from datetime import datetime
from typing import Callable, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .breaks.controller import register as register_breaks
from .common.datetime_utils import now_local
from .common.http_errors import register_error_handlers
from .container import build_container
from .core.constants import DEFAULT_DAILY_BREAK_BUDGET_MINUTES
from .logging import configure_logging, get_logger
from .users.controller import register as register_users


def create_app(
    settings_module: Optional[str] = None,
    *,
    clock: Callable[[], datetime] = now_local,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["DAILY_BREAK_BUDGET_MINUTES"] = int(
        getattr(settings, "DAILY_BREAK_BUDGET_MINUTES", DEFAULT_DAILY_BREAK_BUDGET_MINUTES)
    )
    app.json.sort_keys = False

    configure_logging(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")),
        format_json=bool(getattr(settings, "LOG_JSON", False)),
    )
    logger = get_logger(__name__)

    container = build_container(
        daily_budget_minutes=app.config["DAILY_BREAK_BUDGET_MINUTES"],
        seed_defaults=bool(getattr(settings, "SEED_DEFAULTS", True)),
        clock=clock,
    )
    app.extensions["breaktime_container"] = container
    # Runs once: when the app is collected or at interpreter exit.
    app.extensions["breaktime_container_close"] = weakref.finalize(app, container.close)

    logger.info(
        "app_started",
        settings=settings_module,
        daily_budget_minutes=app.config["DAILY_BREAK_BUDGET_MINUTES"],
        break_types=len(container.break_types_repo.list_all()),
    )

    register_error_handlers(app)
    register_users(app, container)
    register_breaks(app, container)

    return app
