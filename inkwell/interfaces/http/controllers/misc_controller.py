# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pathlib import Path

from flask import Blueprint, Response, jsonify, send_from_directory

from inkwell.infrastructure.health import check_database


class MiscController:
    def __init__(self, *, upload_dir: Path | None = None) -> None:
        self._upload_dir = upload_dir

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        if self._upload_dir is not None:
            bp.add_url_rule("/uploads/<path:filename>", view_func=self.uploads, methods=["GET"])
        return bp

    def health(self) -> tuple[Response, int]:
        database_ok = check_database()
        status: dict[str, object] = {
            "ok": database_ok,
            "database": "ok" if database_ok else "error",
        }
        return jsonify(status), 200 if database_ok else 503

    def uploads(self, filename: str) -> Response:
        # send_from_directory rejects paths escaping the directory with 404.
        return send_from_directory(self._upload_dir.resolve(), filename, max_age=86400)
