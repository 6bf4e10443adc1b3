from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from .models import Game, GameCard
from .numeric import parse_int

PLAYER_FILTERS = ("1", "2", "3-4", "5+")
SORT_FIELDS = ("title", "rating", "playTimeMin", "playerCountMin")


def _to_frame(games: Sequence[Game]) -> pd.DataFrame:
    df = pd.DataFrame(
        {
            "title": [g.title for g in games],
            "search_index": [g.search_index for g in games],
            "player_count_min": [g.player_count_min for g in games],
            "player_count_max": [g.player_count_max for g in games],
            "play_time_min": [g.play_time_min for g in games],
            "game_mode": [g.game_mode for g in games],
            "inventory_category": [g.inventory_category for g in games],
            "rating": [g.rating for g in games],
        }
    )
    df["max_int"] = df["player_count_max"].apply(parse_int)
    return df


def _player_mask(df: pd.DataFrame, players: str) -> pd.Series:
    lo = df["player_count_min"]
    hi = df["max_int"]
    if players == "1":
        return lo == 1
    if players == "2":
        return (lo <= 2) & ((df["player_count_max"] == "2") | (hi >= 2))
    if players == "3-4":
        return (lo <= 4) & (hi >= 3)
    if players == "5+":
        return (hi >= 5) | df["player_count_max"].str.contains("+", regex=False)
    return pd.Series(True, index=df.index)


def filter_games(
    games: Sequence[Game],
    search: str | None = None,
    players: str | None = None,
    mode: str | None = None,
    category: str | None = None,
) -> list[Game]:
    """Apply the gallery's search box and drop-down filters."""
    if not games:
        return []
    df = _to_frame(games)
    mask = pd.Series(True, index=df.index)

    term = (search or "").strip().lower()
    if term:
        mask = mask & df["search_index"].str.contains(term, regex=False)

    if players:
        mask = mask & _player_mask(df, players)

    if mode:
        mask = mask & df["game_mode"].str.lower().str.contains(mode.lower(), regex=False)

    if category:
        mask = mask & (df["inventory_category"] == category)

    return [games[i] for i in df.index[mask.to_numpy()]]


def sort_games(games: Sequence[Game], sort_by: str = "title") -> list[Game]:
    """Order games for display. Unknown sort keys keep the given order."""
    if not games:
        return []
    df = _to_frame(games)

    if sort_by == "title":
        df = df.sort_values("title", key=lambda s: s.str.lower(), kind="stable")
    elif sort_by == "rating":
        df = df.sort_values("rating", ascending=False, kind="stable")
    elif sort_by == "playTimeMin":
        df = df.sort_values("play_time_min", kind="stable")
    elif sort_by == "playerCountMin":
        df = df.sort_values("player_count_min", kind="stable")

    return [games[i] for i in df.index]


def format_player_count(lo: int, hi: str | int | None) -> str:
    if not lo and not hi:
        return ""
    if not hi or str(hi) == str(lo):
        return f"{lo}"
    return f"{lo}-{hi}"


def format_play_time(lo: int, hi: int | None) -> str:
    if not lo and not hi:
        return ""
    if not hi or hi == lo:
        return f"{lo}m"
    return f"{lo}-{hi}m"


def to_card(game: Game) -> GameCard:
    return GameCard(
        id=game.id,
        title=game.title or "Untitled Game",
        publisher=game.publisher or "Unknown Publisher",
        image_url=game.image_url,
        inventory_category=game.inventory_category,
        game_mode=game.game_mode,
        players=format_player_count(game.player_count_min, game.player_count_max),
        play_time=format_play_time(game.play_time_min, game.play_time_max),
        age=game.age,
        rating=game.rating,
    )
