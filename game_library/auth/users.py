from __future__ import annotations

from typing import Any

import bcrypt

from .config import DEFAULT_AUTH_CONFIG, AuthConfig

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _seed_users() -> None:
    """Pre-seed demo accounts on import."""
    register_user("admin@example.com", "admin123")
    register_user("staff@example.com", "staff123")


def register_user(email: str, password: str) -> None:
    _users[email.strip().lower()] = {"password_hash": _hash_password(password)}


def is_authorized_admin(email: str | None, config: AuthConfig = DEFAULT_AUTH_CONFIG) -> bool:
    """True when *email* is on the admin allowlist (case-insensitive)."""
    if not email or not config.admin_emails:
        return False
    return email.strip().lower() in config.admin_emails


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{email, role}`` or ``None``."""
    key = email.strip().lower()
    record = _users.get(key)
    if record and _verify_password(password, record["password_hash"]):
        role = "admin" if is_authorized_admin(key) else "user"
        return {"email": key, "role": role}
    return None


_seed_users()
