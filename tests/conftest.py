from __future__ import annotations

from datetime import datetime

import pytest

from office_portal.common.csrf import CSRF_SESSION_KEY
from office_portal.container import build_container
from office_portal.database.bootstrap import ensure_tables_exist
from office_portal.main import create_app


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 10, 0, 0)


@pytest.fixture
def db_path(tmp_path) -> str:
    return str(tmp_path / "office_portal_test.db")


@pytest.fixture
def container(db_path):
    c = build_container(db_config={"path": db_path})
    ensure_tables_exist(c)
    return c


@pytest.fixture
def app(monkeypatch, db_path):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(DB_CONFIG={"path": db_path})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_container(app):
    return app.extensions["office_portal"]


@pytest.fixture
def csrf_token(client):
    """Anti-forgery token bound to the test client's session."""

    client.get("/Employee/Create")
    with client.session_transaction() as sess:
        return sess[CSRF_SESSION_KEY]
