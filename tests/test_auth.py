import base64
import json

import pytest

from medilearn.core.security import create_session_token


def _login(client, email, password):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_register_sets_cookie_and_me_returns_user(test_client, registered_user):
    assert registered_user["email"] == "ada@example.com"
    assert "password_hash" not in registered_user

    r = test_client.get("/api/auth/me")
    assert r.status_code == 200, r.text
    user = r.json()["user"]
    assert user["id"] == registered_user["id"]
    assert user["name"] == "Ada"
    assert "password_hash" not in user


def test_login_success(test_client, registered_user):
    test_client.cookies.clear()

    r = _login(test_client, "ADA@example.com ", "correct-horse")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["message"] == "Login successful"
    assert body["user"]["id"] == registered_user["id"]
    assert body["user"]["last_login_at"] is not None

    cookie = r.headers["set-cookie"]
    assert "auth-token=" in cookie
    assert "HttpOnly" in cookie
    assert "Max-Age=604800" in cookie

    assert test_client.get("/api/auth/me").status_code == 200


@pytest.mark.parametrize("email", ["ada@example.com", "nobody@example.com"])
def test_login_wrong_password_is_401_whether_or_not_email_exists(test_client, registered_user, email):
    test_client.cookies.clear()
    r = _login(test_client, email, "wrong-password")
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}
    assert "set-cookie" not in r.headers


@pytest.mark.parametrize("payload", [
    {"email": "ada@example.com"},
    {"password": "x"},
    {"email": "  ", "password": "x"},
    {},
])
def test_login_missing_fields_is_400(test_client, payload):
    r = test_client.post("/api/auth/login", json=payload)
    assert r.status_code == 400
    assert r.json()["error"] == "Email and password are required"


def test_login_malformed_body_is_400(test_client):
    r = test_client.post("/api/auth/login", json=["not", "an", "object"])
    assert r.status_code == 400
    assert "error" in r.json()


def test_register_duplicate_email(test_client, registered_user):
    r = test_client.post(
        "/api/auth/register",
        json={"email": "Ada@Example.com", "password": "another-pass"},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Email already registered"


@pytest.mark.parametrize("password", ["short", "é" * 40])
def test_register_rejects_bad_passwords(test_client, password):
    r = test_client.post("/api/auth/register", json={"email": "bob@example.com", "password": password})
    assert r.status_code == 400


def test_logout_clears_cookie(test_client, registered_user):
    r = test_client.post("/api/auth/logout")
    assert r.status_code == 200
    assert test_client.get("/api/auth/me").status_code == 401


def test_me_without_cookie(test_client):
    r = test_client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json() == {"error": "Not authenticated"}


def test_me_rejects_raw_identifier(test_client, registered_user):
    test_client.cookies.clear()
    test_client.cookies.set("auth-token", str(registered_user["id"]))
    r = test_client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid authentication token"}


def test_me_rejects_unsigned_payload(test_client, registered_user):
    def b64(obj):
        return base64.urlsafe_b64encode(json.dumps(obj).encode()).decode().rstrip("=")

    forged = f"{b64({'alg': 'none', 'typ': 'JWT'})}.{b64({'id': registered_user['id'], 'sub': str(registered_user['id'])})}.x"
    test_client.cookies.clear()
    test_client.cookies.set("auth-token", forged)
    assert test_client.get("/api/auth/me").status_code == 401


def test_me_for_deleted_user_is_404(test_client):
    test_client.cookies.set("auth-token", create_session_token("424242"))
    r = test_client.get("/api/auth/me")
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}
