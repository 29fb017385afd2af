# File: tests/conftest.py

import os

# Must be set before anything imports marketplace.core.config
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from marketplace.api.deps import get_db
from marketplace.db.session import enable_sqlite_foreign_keys
from marketplace.main import app
from marketplace.models.base import Base
from marketplace.db import init_db  # noqa: F401  (registers every model on Base.metadata)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def signup(client, username, role, password="pw", **extra):
    body = {
        "username": username,
        "LEI": f"LEI-{username}",
        "email": f"{username}@market.io",
        "phone": "555-0100",
        "role": role,
        "city": "Lyon",
        "address1": "1 Main St",
        "address2": "",
        "password": password,
    }
    body.update(extra)
    return client.post("/api/auth/signup", json=body)


@pytest.fixture()
def supplier(client):
    resp = signup(client, "alice", "supplier", "pw1")
    assert resp.status_code == 201
    return {"id": resp.json()["user"]["id"], "username": "alice", "password": "pw1"}


@pytest.fixture()
def buyer(client):
    resp = signup(client, "bob", "buyer", "pw2")
    assert resp.status_code == 201
    return {"id": resp.json()["user"]["id"], "username": "bob", "password": "pw2"}


@pytest.fixture()
def register(client):
    def _register(username, role, password="pw", **extra):
        return signup(client, username, role, password, **extra)

    return _register


def creds(account, **body):
    """JSON body carrying the account's credentials plus any extra fields."""
    return {"username": account["username"], "password": account["password"], **body}


@pytest.fixture()
def as_user():
    return creds
