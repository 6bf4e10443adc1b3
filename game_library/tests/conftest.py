from __future__ import annotations

import pytest

from game_library.catalog.config import StoreConfig
from game_library.catalog.store import configure_store, set_game
from game_library.subscribers.store import configure_subscribers

SAMPLE_GAMES: dict[str, dict] = {
    "catan": {
        "title": "Catan",
        "gameId": "TOF-BG-0001",
        "publisher": "Kosmos",
        "playerCountMin": 3,
        "playerCountMax": "4",
        "playTimeMin": 60,
        "playTimeMax": 120,
        "age": "10+",
        "gameMode": "Competitive",
        "inventoryCategory": "Base Game",
        "categories": ["Strategy", "Negotiation"],
        "complexity": "2.3",
        "rating": 7.1,
        "description": "Trade, build and settle the island of Catan.",
        "searchIndex": "catan kosmos competitive",
    },
    "pandemic": {
        "title": "Pandemic",
        "gameId": "TOF-BG-0002",
        "publisher": "Z-Man Games",
        "playerCountMin": 2,
        "playerCountMax": "4",
        "playTimeMin": 45,
        "playTimeMax": 45,
        "age": "8+",
        "gameMode": "Cooperative",
        "inventoryCategory": "Base Game",
        "categories": ["Medical", "Strategy"],
        "complexity": "2.4",
        "rating": 7.6,
        "staffRecommendations": [{"staffName": "Sam", "reason": "Great first co-op"}],
        "searchIndex": "pandemic z-man games cooperative",
    },
    "codenames": {
        "title": "Codenames",
        "gameId": "TOF-BG-0003",
        "publisher": "Czech Games Edition",
        "playerCountMin": 2,
        "playerCountMax": "8+",
        "playTimeMin": 15,
        "playTimeMax": 15,
        "age": "14+",
        "gameMode": "Party",
        "inventoryCategory": "Base Game",
        "categories": ["Party Game", "Word Game"],
        "complexity": "1.3",
        "rating": 7.6,
        "searchIndex": "codenames czech games edition party",
    },
    "seafarers": {
        "title": "Catan: Seafarers",
        "gameId": "TOF-EX-0001",
        "publisher": "Kosmos",
        "playerCountMin": 3,
        "playerCountMax": "4",
        "playTimeMin": 60,
        "playTimeMax": 120,
        "age": "10+",
        "gameMode": "Competitive",
        "inventoryCategory": "Expansion",
        "complexity": "2.5",
        "rating": 7.2,
        "searchIndex": "catan: seafarers kosmos competitive",
    },
    "gloomhaven": {
        "title": "Gloomhaven",
        "gameId": "TOF-BG-0004",
        "publisher": "Cephalofair Games",
        "playerCountMin": 1,
        "playerCountMax": "4",
        "playTimeMin": 60,
        "playTimeMax": 120,
        "age": "14+",
        "gameMode": "Cooperative",
        "inventoryCategory": "Base Game",
        "categories": ["Adventure", "Exploration", "Fantasy"],
        "complexity": "3.9",
        "rating": 8.6,
        "searchIndex": "gloomhaven cephalofair games cooperative",
    },
}


@pytest.fixture(autouse=True)
def sample_catalog(tmp_path):
    """Point the store and subscriber sink at temp files seeded with SAMPLE_GAMES."""
    configure_store(StoreConfig(path=tmp_path / "games.json"))
    configure_subscribers(tmp_path / "subscribers.csv")
    for doc_id, doc in SAMPLE_GAMES.items():
        set_game(doc_id, doc)
    yield tmp_path
    configure_store()
