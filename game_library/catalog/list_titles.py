"""
Print stored game titles, a quick check that the catalog is reachable.

Usage:
    python -m game_library.catalog.list_titles [--limit 50]
"""
from __future__ import annotations

import argparse

from .store import list_games


def list_titles(limit: int = 50) -> list[str]:
    return [g.title for g in list_games()[:limit]]


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--limit", type=int, default=50)
    args = parser.parse_args()
    for title in list_titles(args.limit):
        print(title)
