from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.responses import json_endpoint
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _credentials():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            body = {}
        return body.get("username"), body.get("password")

    @app.route("/api/create-super", methods=["POST"], endpoint="create_super")
    @json_endpoint
    def create_super():
        username, password = _credentials()
        container.auth_service.create_superadmin(username, password)
        return jsonify({"ok": True})

    @app.route("/api/login", methods=["POST"], endpoint="login")
    @json_endpoint
    def login():
        username, password = _credentials()
        user = container.auth_service.authenticate(username, password)
        return jsonify(user.to_dict())
