from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pandas as pd
from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_PATH = Path(__file__).resolve().parent.parent / "data" / "subscribers.csv"

_path = Path(os.getenv("SUBSCRIBERS_CSV", str(_DEFAULT_PATH)))


def configure_subscribers(path: Path) -> None:
    global _path
    _path = path


def add_subscriber(email: str) -> None:
    """Append ``timestamp,email`` to the subscribers file."""
    _path.parent.mkdir(parents=True, exist_ok=True)
    row = pd.DataFrame([[datetime.now().strftime("%Y-%m-%d %H:%M:%S"), email]])
    row.to_csv(_path, mode="a", header=False, index=False)


def get_subscribers() -> list[str]:
    if not _path.exists():
        return []
    df = pd.read_csv(_path, header=None, names=["timestamp", "email"], dtype=str)
    return df["email"].tolist()
