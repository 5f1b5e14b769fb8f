"""
Shared fixtures.

The environment is configured *before* any application module is imported:
core.config builds its Settings singleton at import time.  Every test gets a
fresh in-memory SQLite database (StaticPool, so all sessions share the one
connection) and the app's get_db dependency is pointed at it.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-0123456789-abcdefghijklmnop"
os.environ["JWT_ISSUER"] = "RecipeApp"
os.environ["PASSWORD_HASH_ROUNDS"] = "1000"
os.environ["FIRST_ADMIN_EMAIL"] = ""
os.environ["FIRST_ADMIN_PASSWORD"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from auth.bootstrap import seed_roles_and_admin  # noqa: E402
from database import get_db, init_db  # noqa: E402
from main import app  # noqa: E402

ADMIN_EMAIL = "admin@recipes.test"
ADMIN_PASSWORD = "admin123"


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    # No context manager: the lifespan (which talks to the real DATABASE_URL)
    # is not run; tests seed what they need themselves.
    yield TestClient(app)
    app.dependency_overrides.clear()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, email="cook@example.com", display_name="Cook", password="secret1"):
    res = client.post(
        "/api/auth/register",
        json={"email": email, "displayName": display_name, "password": password},
    )
    assert res.status_code == 200, res.text
    return res.json()


@pytest.fixture
def admin_token(client, db_session):
    seed_roles_and_admin(db_session, ADMIN_EMAIL, ADMIN_PASSWORD, "Admin")
    res = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert res.status_code == 200, res.text
    assert res.json()["isAdmin"] is True
    return res.json()["token"]


@pytest.fixture
def user_token(client):
    return register(client)["token"]
