from __future__ import annotations

from unittest.mock import MagicMock

from flask import Flask
from sqlalchemy.exc import OperationalError

from bareddit.domain.users.exceptions import KeyValueStoreError
from bareddit.infrastructure.kv_store import InMemoryKeyValueStore
from bareddit.interfaces.http.controllers.misc_controller import MiscController


def _get_health(database: MagicMock, kv_store: object):
    app = Flask(__name__)
    app.register_blueprint(MiscController(database=database, kv_store=kv_store).as_blueprint())
    with app.test_client() as client:
        return client.get("/api/health")


def test_health_ok() -> None:
    response = _get_health(MagicMock(), InMemoryKeyValueStore())

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "database": "ok", "store": "ok"}


def test_health_reports_store_outage() -> None:
    kv_store = MagicMock()
    kv_store.ping.side_effect = KeyValueStoreError("ping")

    response = _get_health(MagicMock(), kv_store)

    assert response.status_code == 503
    assert response.get_json() == {"ok": False, "database": "ok", "store": "error"}


def test_health_reports_database_outage() -> None:
    database = MagicMock()
    database.check.side_effect = OperationalError("SELECT 1", {}, Exception("down"))

    response = _get_health(database, InMemoryKeyValueStore())

    assert response.status_code == 503
    assert response.get_json()["database"] == "error"
