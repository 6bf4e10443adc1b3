from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class StoreConfig:
    path: Path = Path(os.getenv("GAMES_DB_PATH", str(_DATA_DIR / "games.json")))
    collection: str = "games"


DEFAULT_STORE_CONFIG = StoreConfig()
