from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class BGGConfig:
    api_token: str = os.getenv("BGG_API_TOKEN", "")
    base_url: str = "https://boardgamegeek.com/xmlapi2"
    user_agent: str = "GameLibrary/1.0"
    timeout: float = 30.0
    rate_limit_seconds: float = float(os.getenv("BGG_RATE_LIMIT_SECONDS", "5"))
    retry_delay_seconds: float = 2.0
    max_retries: int = 5
    description_limit: int = 1000


DEFAULT_BGG_CONFIG = BGGConfig()
