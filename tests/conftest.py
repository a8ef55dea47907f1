"""
pytest configuration for the AgriAI backend test suite

Every test gets a fresh in-memory SQLite database wired in through the
get_db dependency override.
"""

import os

# must be set before agriai.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from agriai import models  # noqa: F401  registers tables
from agriai.db import Base, get_db
from agriai.main import app


@pytest.fixture
def db_session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(db_session_factory):
    session = db_session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session_factory):
    def override_get_db():
        session = db_session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def register_and_login(client, username, email, password="s3cret-pass"):
    r = client.post("/api/v1/users/register", json={
        "fullName": username.title(),
        "username": username,
        "email": email,
        "password": password,
    })
    assert r.status_code == 201, r.text
    r = client.post("/api/v1/users/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['data']['accessToken']}"}


@pytest.fixture
def auth_headers(client):
    return register_and_login(client, "farmer", "farmer@example.com")


@pytest.fixture
def other_headers(client):
    return register_and_login(client, "neighbour", "neighbour@example.com")


@pytest.fixture
def field_payload():
    return {
        "fieldId": "A-1",
        "name": "North Corn Field",
        "location": {"latitude": 40.7128, "longitude": -74.0060},
        "area": 25.5,
        "cropType": "Corn",
        "plantingDate": "2024-03-15",
        "expectedHarvestDate": "2024-09-15",
    }


@pytest.fixture
def field(client, auth_headers, field_payload):
    r = client.post("/api/v1/fields/create-field", json=field_payload, headers=auth_headers)
    assert r.status_code == 201, r.text
    return r.json()["data"]
