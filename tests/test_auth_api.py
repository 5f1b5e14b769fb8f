from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, bearer, register
from core.security import decode_access_token


def test_register_returns_token_and_profile(client):
    data = register(client, email="new@example.com", display_name="Newbie")

    assert set(data) == {"token", "userId", "email", "displayName", "isAdmin"}
    assert data["email"] == "new@example.com"
    assert data["displayName"] == "Newbie"
    assert data["isAdmin"] is False

    claims = decode_access_token(data["token"])
    assert claims["sub"] == str(data["userId"])
    assert claims["is_admin"] is False


def test_register_same_email_twice_in_any_casing_fails(client):
    register(client, email="dup@example.com")
    res = client.post(
        "/api/auth/register",
        json={"email": "DUP@Example.com", "displayName": "Again", "password": "secret2"},
    )
    assert res.status_code == 409
    assert res.json() == {"message": "Email is already in use."}


def test_register_weak_password_lists_reasons(client):
    res = client.post(
        "/api/auth/register",
        json={"email": "weak@example.com", "displayName": "Weak", "password": "abc"},
    )
    assert res.status_code == 400
    body = res.json()
    assert body["message"] == "Registration failed."
    assert len(body["errors"]) == 2


def test_register_missing_field_is_a_validation_error(client):
    res = client.post("/api/auth/register", json={"email": "x@example.com", "password": "secret1"})
    assert res.status_code == 400
    body = res.json()
    assert body["message"] == "Validation failed."
    assert any(e.startswith("displayName") for e in body["errors"])


def test_register_overlong_display_name_is_a_validation_error(client):
    res = client.post(
        "/api/auth/register",
        json={"email": "x@example.com", "displayName": "x" * 101, "password": "secret1"},
    )
    assert res.status_code == 400
    assert any(e.startswith("displayName") for e in res.json()["errors"])


def test_login_with_correct_password(client):
    registered = register(client, email="cook@example.com", password="secret1")
    res = client.post("/api/auth/login", json={"email": "Cook@Example.com", "password": "secret1"})

    assert res.status_code == 200
    data = res.json()
    assert data["userId"] == registered["userId"]
    assert data["isAdmin"] is False
    assert decode_access_token(data["token"])["email"] == "cook@example.com"


def test_login_failures_are_indistinguishable(client):
    register(client, email="cook@example.com", password="secret1")

    unknown = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": "secret1"})
    wrong = client.post("/api/auth/login", json={"email": "cook@example.com", "password": "wrong99"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {"message": "Invalid email or password."}


def test_admin_login_reports_admin(client, admin_token):
    claims = decode_access_token(admin_token)
    assert claims["is_admin"] is True
    assert claims["email"] == ADMIN_EMAIL

    res = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert res.json()["isAdmin"] is True


def test_me_returns_profile(client):
    data = register(client, email="me@example.com", display_name="Me")
    res = client.get("/api/auth/me", headers=bearer(data["token"]))

    assert res.status_code == 200
    assert res.json() == {
        "userId": data["userId"],
        "email": "me@example.com",
        "displayName": "Me",
        "isAdmin": False,
    }


def test_me_requires_a_token(client):
    res = client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.headers["WWW-Authenticate"] == "Bearer"


def test_me_rejects_a_bad_token(client):
    res = client.get("/api/auth/me", headers=bearer("garbage"))
    assert res.status_code == 401
    assert res.json() == {"message": "Invalid or expired token."}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
