"""Unexpected failures still answer with the result envelope."""

import logging

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from docs_service.database import get_db
from docs_service.main import app
from docs_service.services import DirectoryService


@pytest.fixture()
def failing_client(db, monkeypatch):
    """Client that returns 500 responses instead of re-raising, with a broken directory read."""

    def _broken_read(self, directory_id, user_id):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(DirectoryService, "get_directory", _broken_read)

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


class TestUnhandledErrors:

    def test_database_failure_is_internal_error_envelope(self, failing_client, headers_for):
        resp = failing_client.get("/api/directories/1", headers=headers_for(1))
        assert resp.status_code == 500
        assert resp.headers["content-type"].startswith("application/json")
        body = resp.json()
        assert body["success"] is False
        assert body["code"] == "INTERNAL_ERROR"
        assert body["message"] == "Internal server error"
        assert body["data"] is None

    def test_request_id_is_echoed_on_failure(self, failing_client, headers_for):
        headers = {**headers_for(1), "X-Request-ID": "fail-42"}
        resp = failing_client.get("/api/directories/1", headers=headers)
        assert resp.status_code == 500
        assert resp.headers["x-request-id"] == "fail-42"

    def test_failed_request_is_logged_at_error(self, failing_client, headers_for, caplog):
        caplog.set_level(logging.ERROR, logger="docs_service.middleware.request_context")
        failing_client.get("/api/directories/1", headers=headers_for(1))

        access = [
            r for r in caplog.records
            if r.name == "docs_service.middleware.request_context" and r.levelno == logging.ERROR
        ]
        assert len(access) == 1
        assert access[0].status_code == 500
        assert "/api/directories/1" in access[0].getMessage()

    def test_other_routes_unaffected(self, failing_client, headers_for):
        resp = failing_client.get("/api/directories/parents/1", headers=headers_for(1))
        assert resp.status_code == 200
        assert resp.json()["code"] == "OK"
