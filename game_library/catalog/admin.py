from __future__ import annotations

from collections.abc import Sequence

from ..recommendations.models import Game
from ..recommendations.numeric import parse_int


def validate_game(game: Game) -> list[str]:
    """Return the form errors for *game*; empty when it can be saved."""
    errors: list[str] = []

    if not game.title.strip():
        errors.append("Game title is required")
    if not game.game_id.strip():
        errors.append("Game ID is required")
    if not game.publisher.strip():
        errors.append("Publisher is required")

    if game.player_count_min and game.player_count_max:
        max_players = parse_int(game.player_count_max)
        if max_players > 0 and game.player_count_min > max_players:
            errors.append("Min players cannot be greater than max players")

    if game.play_time_min and game.play_time_max:
        if game.play_time_min > game.play_time_max:
            errors.append("Min play time cannot be greater than max play time")

    if game.rating and not 0 <= game.rating <= 10:
        errors.append("Rating must be between 0 and 10")

    return errors


def generate_search_index(game: Game) -> str:
    fields = [game.title, game.publisher, game.game_mode, game.theme, game.tags]
    return " ".join(f for f in fields if f).lower()


def admin_search(games: Sequence[Game], term: str | None) -> list[Game]:
    """Filter the admin game list on title, publisher, id, theme and tags."""
    term = (term or "").strip().lower()
    if not term:
        return list(games)
    return [
        g
        for g in games
        if term in " ".join([g.title, g.publisher, g.game_id, g.theme, g.tags]).lower()
    ]
