from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .attendance.controller import register as register_attendance
from .persons.controller import register as register_persons
from .sections.controller import register as register_sections
from .system.controller import register as register_system


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.logger.setLevel(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        container = build_container(
            db_config=db_config,
            default_location_id=int(getattr(settings, "DEFAULT_LOCATION_ID")),
            default_room_number=getattr(settings, "DEFAULT_ROOM_NUMBER"),
            default_sections=getattr(settings, "DEFAULT_SECTIONS"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            tables = container.schema.initialize()
            app.logger.info("schema ready (tables=%d)", len(tables))

    app.extensions["rfid_attendance"] = container

    register_system(app, container)
    register_sections(app, container)
    register_persons(app, container)
    register_attendance(app, container)

    return app
