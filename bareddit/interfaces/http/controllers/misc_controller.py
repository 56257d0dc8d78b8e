# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from bareddit.domain.users.exceptions import KeyValueStoreError
from bareddit.domain.users.repositories import KeyValueStore
from bareddit.infrastructure.db import Database
from bareddit.shared.logging import logger


class MiscController:
    def __init__(self, *, database: Database, kv_store: KeyValueStore) -> None:
        self._database = database
        self._kv_store = kv_store

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/api/health", view_func=self.health, methods=["GET"])
        return bp

    def health(self):
        status: dict[str, object] = {"ok": True}
        try:
            self._database.check()
            status["database"] = "ok"
        except SQLAlchemyError as exc:
            logger.error(f"health: database check failed: {type(exc).__name__}")
            status["ok"] = False
            status["database"] = "error"

        try:
            self._kv_store.ping()
            status["store"] = "ok"
        except KeyValueStoreError as exc:
            logger.error(f"health: session store check failed: {exc.context}")
            status["ok"] = False
            status["store"] = "error"
        return jsonify(status), 200 if status["ok"] else 503
