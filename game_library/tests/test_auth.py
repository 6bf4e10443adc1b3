from __future__ import annotations

from fastapi.testclient import TestClient

from game_library.app import app
from game_library.auth.config import AuthConfig
from game_library.auth.users import authenticate, is_authorized_admin

client = TestClient(app)


# ── Login / Logout ───────────────────────────────────────────────────────


def test_login_success_admin():
    resp = client.post("/auth/login", json={"email": "admin@example.com", "password": "admin123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["user"] == {"email": "admin@example.com", "role": "admin"}


def test_login_email_is_case_insensitive():
    resp = client.post("/auth/login", json={"email": "Staff@Example.com", "password": "staff123"})
    assert resp.status_code == 200
    assert resp.json()["user"] == {"email": "staff@example.com", "role": "user"}


def test_login_wrong_password():
    resp = client.post("/auth/login", json={"email": "admin@example.com", "password": "wrong"})
    assert resp.status_code == 401


def test_login_unknown_user():
    resp = client.post("/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert resp.status_code == 401


def test_auth_me_when_logged_in():
    client.post("/auth/login", json={"email": "staff@example.com", "password": "staff123"})
    resp = client.get("/auth/me")
    assert resp.status_code == 200
    assert resp.json()["email"] == "staff@example.com"


def test_auth_me_not_logged_in():
    c = TestClient(app)
    assert c.get("/auth/me").status_code == 401


def test_logout():
    client.post("/auth/login", json={"email": "staff@example.com", "password": "staff123"})
    resp = client.post("/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["status"] == "logged_out"
    assert client.get("/auth/me").status_code == 401


# ── Admin allowlist ──────────────────────────────────────────────────────


def test_allowlist_matches_case_insensitively():
    config = AuthConfig(admin_emails=("owner@library.test",))
    assert is_authorized_admin("Owner@Library.test", config)
    assert not is_authorized_admin("guest@library.test", config)


def test_allowlist_empty_or_missing_email():
    assert not is_authorized_admin("owner@library.test", AuthConfig(admin_emails=()))
    assert not is_authorized_admin(None)
    assert not is_authorized_admin("")


def test_authenticate_returns_none_for_bad_password():
    assert authenticate("staff@example.com", "nope") is None
