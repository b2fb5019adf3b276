from __future__ import annotations

import logging

from flask import request
from flask_socketio import SocketIO

from ..container import Container

logger = logging.getLogger(__name__)


def register(socketio: SocketIO, container: Container) -> None:
    @socketio.on("connect")
    def on_connect(auth=None):
        container.registry.connect(request.sid)
        logger.info("Client connected: %s", request.sid)

    @socketio.on("disconnect")
    def on_disconnect(*args):
        container.registry.disconnect(request.sid)
        logger.info("Client disconnected: %s", request.sid)
