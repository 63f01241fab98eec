"""
Shared fixtures: an in-memory database rebuilt for every test, a
session for service-level tests and an authenticated API client.
"""

import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "test-password"
os.environ["ANALYTICS_TIMEZONE"] = "UTC"
os.environ.pop("ADMIN_PASSWORD_HASH", None)

import pytest
from fastapi.testclient import TestClient

from app.core.cats import create_cat
from app.database import Base, SessionLocal, engine
from app.main import app
from app.schemas.cat_schema import CatCreate


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin_headers(client):
    response = client.post(
        "/auth/login",
        json={"username": "admin", "password": "test-password"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


def cat_fields(**overrides):
    fields = {
        "name": "Luna",
        "subtitle": "Seal point ragdoll",
        "image": "https://cdn.example.com/luna.jpg",
        "description": "Calm and affectionate.",
        "age": "2 years",
        "color": "Seal point",
        "status": "Breeding queen",
        "gallery": [],
        "gender": "female",
        "birth_date": "2024-01-10",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def make_cat(db):
    def _make(**overrides):
        return create_cat(db, CatCreate(**cat_fields(**overrides)))

    return _make
