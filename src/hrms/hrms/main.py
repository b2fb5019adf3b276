from __future__ import annotations

import importlib
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from config import get_settings_module

from .container import build_container
from .core.constants import DEFAULT_DATA_FILE, DEFAULT_PORT, DEFAULT_STORAGE_TIMEOUT_SECONDS
from .realtime.controller import register as register_realtime
from .realtime.notifier import EventPublisher
from .records.controller import register as register_records
from .storage.json_store import JSONFileStore
from .storage.repository import DocumentStore
from .users.controller import register as register_users

REPO_ROOT = Path(__file__).resolve().parents[3]

logger = logging.getLogger(__name__)


def _data_file(settings) -> Path:
    path = Path(getattr(settings, "DATA_FILE", DEFAULT_DATA_FILE))
    return path if path.is_absolute() else REPO_ROOT / path


def create_app(
    settings_module: Optional[str] = None,
    *,
    store: Optional[DocumentStore] = None,
    publisher: Optional[EventPublisher] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, static_folder=str(REPO_ROOT / "public"), static_url_path="")

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["PORT"] = int(getattr(settings, "PORT", DEFAULT_PORT))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    cors_origins = getattr(settings, "CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": cors_origins}})

    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=getattr(settings, "SOCKETIO_ASYNC_MODE", "threading"),
    )

    if store is None:
        store = JSONFileStore(
            _data_file(settings),
            timeout=float(getattr(settings, "STORAGE_TIMEOUT_SECONDS", DEFAULT_STORAGE_TIMEOUT_SECONDS)),
        )
        logger.info("settings=%s data_file=%s", settings_module, store.path)

    container = build_container(store=store, emit=socketio.emit, publisher=publisher)
    app.extensions["hrms"] = container

    register_users(app, container)
    register_records(app, container)
    register_realtime(socketio, container)

    return app


def run() -> None:
    app = create_app()
    socketio: SocketIO = app.extensions["socketio"]
    port = int(os.getenv("PORT", app.config["PORT"]))
    logger.info("HRMS running at http://localhost:%s", port)
    socketio.run(app, host="0.0.0.0", port=port, allow_unsafe_werkzeug=True)
