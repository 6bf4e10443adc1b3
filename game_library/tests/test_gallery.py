from __future__ import annotations

import pytest

from game_library.catalog.store import list_games
from game_library.recommendations.gallery import (
    filter_games,
    format_play_time,
    format_player_count,
    sort_games,
    to_card,
)
from game_library.recommendations.models import Game


def _ids(games):
    return sorted(g.id for g in games)


def test_no_filters_returns_everything():
    games = list_games()
    assert _ids(filter_games(games)) == _ids(games)


def test_search_matches_search_index():
    assert _ids(filter_games(list_games(), search="  KOSMOS ")) == ["catan", "seafarers"]


@pytest.mark.parametrize(
    "players, expected",
    [
        ("1", ["gloomhaven"]),
        ("2", ["codenames", "gloomhaven", "pandemic"]),
        ("3-4", ["catan", "codenames", "gloomhaven", "pandemic", "seafarers"]),
        ("5+", ["codenames"]),
    ],
)
def test_player_filter(players, expected):
    assert _ids(filter_games(list_games(), players=players)) == expected


def test_player_filter_accepts_open_ended_max():
    game = Game(id="big", player_count_min=3, player_count_max="4+")
    assert filter_games([game], players="5+") == [game]


def test_mode_filter_is_case_insensitive_substring():
    assert _ids(filter_games(list_games(), mode="coop")) == ["gloomhaven", "pandemic"]


def test_category_filter_is_exact():
    assert _ids(filter_games(list_games(), category="Expansion")) == ["seafarers"]
    assert filter_games(list_games(), category="expansion") == []


def test_filters_combine():
    result = filter_games(list_games(), search="kosmos", category="Base Game")
    assert _ids(result) == ["catan"]


def test_empty_catalog():
    assert filter_games([], search="x") == []
    assert sort_games([]) == []


def test_sort_by_title_ignores_case():
    games = [Game(id="1", title="azul"), Game(id="2", title="Catan"), Game(id="3", title="Brass")]
    assert [g.title for g in sort_games(games, "title")] == ["azul", "Brass", "Catan"]


def test_sort_by_rating_descending_and_stable():
    titles = [g.title for g in sort_games(sort_games(list_games(), "title"), "rating")]
    assert titles == ["Gloomhaven", "Codenames", "Pandemic", "Catan: Seafarers", "Catan"]


def test_sort_by_play_time_and_players_ascending():
    games = list_games()
    assert sort_games(games, "playTimeMin")[0].id == "codenames"
    assert sort_games(games, "playerCountMin")[0].id == "gloomhaven"


def test_unknown_sort_keeps_order():
    games = list_games()
    assert [g.id for g in sort_games(games, "price")] == [g.id for g in games]


@pytest.mark.parametrize(
    "lo, hi, expected",
    [(0, "", ""), (2, "", "2"), (2, "2", "2"), (2, "4", "2-4"), (2, "8+", "2-8+")],
)
def test_format_player_count(lo, hi, expected):
    assert format_player_count(lo, hi) == expected


@pytest.mark.parametrize(
    "lo, hi, expected",
    [(0, 0, ""), (30, 0, "30m"), (30, 30, "30m"), (30, 60, "30-60m")],
)
def test_format_play_time(lo, hi, expected):
    assert format_play_time(lo, hi) == expected


def test_card_fills_placeholders():
    card = to_card(Game(id="x"))
    assert card.title == "Untitled Game"
    assert card.publisher == "Unknown Publisher"
    assert card.players == ""
