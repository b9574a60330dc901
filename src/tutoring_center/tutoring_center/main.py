from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, list_tables

from .container import Container, build_container
from .chat.controller import register as register_chat
from .files.controller import register as register_files
from .leaderboard.controller import register as register_leaderboard
from .payments.controller import register as register_payments
from .presence.controller import register as register_presence
from .quizzes.controller import register as register_quizzes
from .students.controller import register as register_students

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parents[3]


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["MAX_CONTENT_LENGTH"] = getattr(settings, "MAX_UPLOAD_BYTES", None)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "DEBUG" if app.config["DEBUG"] else "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        if app.config["DEBUG"]:
            logger.info(
                "settings=%s db=%s@%s:%s/%s",
                settings_module,
                db_config.get("user"),
                db_config.get("host"),
                db_config.get("port", 3306),
                db_config.get("database"),
            )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=ROOT_DIR / "database" / "schema.sql")
            if app.config["DEBUG"]:
                logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(db_config=db_config, settings=settings)

    register_students(app, container)
    register_presence(app, container)
    register_leaderboard(app, container)
    register_payments(app, container)
    register_quizzes(app, container)
    register_files(app, container)
    register_chat(app, container)

    return app
