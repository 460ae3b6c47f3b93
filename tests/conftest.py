"""Shared test fixtures for the docs service test suite.

Tests run against a throwaway SQLite file (override with TEST_DATABASE_URL).
Tables are created once per session and emptied before every test, so each
test starts from a clean store. Authentication is enabled with a test secret;
``headers_for(user_id)`` mints a bearer token for any acting user.
"""

import os
import tempfile

# Configure the app before anything imports it.
_DB_DIR = tempfile.mkdtemp(prefix="docs_service_test_")
os.environ["DATABASE_URL"] = os.environ.get(
    "TEST_DATABASE_URL", f"sqlite:///{_DB_DIR}/test.db"
)
os.environ["AUTH_ENABLED"] = "true"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_FORMAT"] = "text"

import pytest
from fastapi.testclient import TestClient

from docs_service.database import Base, SessionLocal, get_db, init_db
from docs_service.main import app
from docs_service.core.token_factory import create_token
from docs_service.models import Directory, Document

U1 = 1
U2 = 2
P1 = 100


@pytest.fixture(scope="session", autouse=True)
def _schema():
    init_db()
    yield


@pytest.fixture(autouse=True)
def _clean_tables(_schema):
    """Empty every table before each test (children before parents)."""
    db = SessionLocal()
    try:
        for table in reversed(Base.metadata.sorted_tables):
            db.execute(table.delete())
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture()
def db():
    """Per-test database session."""
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client(db):
    """TestClient with the DB dependency overridden to use the test session."""

    def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def headers_for():
    """Return a function minting Authorization headers for a user id."""

    def _headers(user_id: int) -> dict:
        token = create_token(user_id, secret="test-secret")
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def make_directory(db):
    """Insert a directory row directly, bypassing service checks."""

    def _make(name: str = "Dir", parent_id: int = 0, owner_id: int = U1,
              project_id: int = P1, sort_code: int = 0) -> Directory:
        directory = Directory(
            project_id=project_id,
            parent_id=parent_id,
            owner_id=owner_id,
            name=name,
            sort_code=sort_code,
        )
        db.add(directory)
        db.commit()
        db.refresh(directory)
        return directory

    return _make


@pytest.fixture()
def make_document(db):
    """Insert a document row directly, bypassing service checks."""

    def _make(directory_id: int, name: str = "Doc", content: str = "",
              owner_id: int = U1, sort_code: int = 0) -> Document:
        document = Document(
            directory_id=directory_id,
            owner_id=owner_id,
            name=name,
            content=content,
            sort_code=sort_code,
        )
        db.add(document)
        db.commit()
        db.refresh(document)
        return document

    return _make


@pytest.fixture()
def scenario(make_directory, make_document):
    """D1 (root of P1) > D2 > Doc1 with content "v1", all owned by U1."""
    d1 = make_directory(name="D1")
    d2 = make_directory(name="D2", parent_id=d1.id)
    doc1 = make_document(d2.id, name="Doc1", content="v1")
    return {"d1": d1, "d2": d2, "doc1": doc1}
