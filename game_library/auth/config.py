from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _email_list(raw: str) -> tuple[str, ...]:
    return tuple(e.strip().lower() for e in raw.split(",") if e.strip())


@dataclass(frozen=True)
class AuthConfig:
    session_secret: str = os.getenv("SESSION_SECRET", "game-library-secret-change-in-production")
    admin_emails: tuple[str, ...] = field(
        default_factory=lambda: _email_list(os.getenv("ADMIN_EMAILS", "admin@example.com"))
    )


DEFAULT_AUTH_CONFIG = AuthConfig()
