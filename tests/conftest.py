"""Shared fixtures: a fresh seeded database per test and a logged-in admin."""

import pytest
from sqlmodel import Session
from starlette.testclient import TestClient

from db import engine, init_db
from routers.auth import ADMIN_EMAIL, ADMIN_PASSWORD


@pytest.fixture
def client():
    """Test client for the app; startup reseeds the in-memory database."""
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    """The same client, holding a valid admin session cookie."""
    resp = client.post(
        "/admin/login",
        data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        follow_redirects=False,
    )
    assert resp.status_code == 303
    return client


@pytest.fixture
def session():
    """A session on a freshly seeded database, for tests that skip HTTP."""
    init_db()
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def fresh_session():
    """Open a new session so reads see what the app just committed."""

    def _open() -> Session:
        return Session(engine)

    return _open


PERSONAL = {
    "full_name": "Ada Obi",
    "email": "ada.obi@email.com",
    "phone": "+234 807 000 1111",
    "address": "Onitsha, Nigeria",
    "age": "40",
    "gender": "female",
}

AILMENT = {
    "ailment_type": "chronic-illness",
    "description": "Kidney disease needing dialysis twice a week.",
    "treatment_progress": "Started dialysis last month.",
}


@pytest.fixture
def personal_info():
    return dict(PERSONAL)


@pytest.fixture
def ailment_info():
    return dict(AILMENT)
