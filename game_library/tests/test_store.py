import json

import pytest

from game_library.catalog.config import StoreConfig
from game_library.catalog.store import (
    GameNotFoundError,
    add_game,
    configure_store,
    delete_game,
    find_by_field,
    get_game,
    list_games,
)


def _ids(games):
    return sorted(g.id for g in games)


def test_find_by_field_matches_strings_exactly():
    assert _ids(find_by_field("publisher", "Kosmos")) == ["catan", "seafarers"]
    assert find_by_field("publisher", "kosmos") == []


def test_find_by_field_matches_numbers():
    assert _ids(find_by_field("playerCountMin", 2)) == ["codenames", "pandemic"]
    assert _ids(find_by_field("rating", 7.6)) == ["codenames", "pandemic"]


def test_find_by_field_without_hits():
    assert find_by_field("gameMode", "Solo") == []
    assert find_by_field("noSuchField", "x") == []


def test_list_games_order_by_field():
    ordered = [g.id for g in list_games(order_by="playTimeMin")]
    assert ordered[0] == "codenames"
    assert ordered[1] == "pandemic"


def test_add_game_generates_id_and_persists(sample_catalog):
    doc_id = add_game({"title": "Azul", "publisher": "Plan B Games"})
    assert len(doc_id) == 20

    raw = json.loads((sample_catalog / "games.json").read_text(encoding="utf-8"))
    assert raw["games"][doc_id]["title"] == "Azul"

    configure_store(StoreConfig(path=sample_catalog / "games.json"))
    assert get_game(doc_id).publisher == "Plan B Games"


def test_delete_unknown_game():
    with pytest.raises(GameNotFoundError):
        delete_game("nope")
