from __future__ import annotations

from collections.abc import Sequence

from .models import Game
from .numeric import average_play_time, effective_max_players, parse_age

PLAYER_WEIGHT = 40.0
TIME_WEIGHT = 30.0
AGE_WEIGHT = 30.0

# Play-time differences up to this many minutes score in full,
# then decay linearly to zero over the next _TIME_DECAY minutes.
_TIME_FULL = 30
_TIME_DECAY = 60
_AGE_DECAY = 4


def _player_score(reference: Game, candidate: Game) -> float:
    if not reference.player_count_min or not candidate.player_count_min:
        return 0.0
    ref_min = reference.player_count_min
    ref_max = effective_max_players(ref_min, reference.player_count_max)
    cand_min = candidate.player_count_min
    cand_max = effective_max_players(cand_min, candidate.player_count_max)
    if cand_min <= ref_max and cand_max >= ref_min:
        return PLAYER_WEIGHT
    return 0.0


def _time_score(reference: Game, candidate: Game) -> float:
    if not reference.play_time_min or not candidate.play_time_min:
        return 0.0
    diff = abs(
        average_play_time(reference.play_time_min, reference.play_time_max)
        - average_play_time(candidate.play_time_min, candidate.play_time_max)
    )
    if diff <= _TIME_FULL:
        return TIME_WEIGHT
    if diff <= _TIME_FULL + _TIME_DECAY:
        return TIME_WEIGHT * (1 - (diff - _TIME_FULL) / _TIME_DECAY)
    return 0.0


def _age_score(reference: Game, candidate: Game) -> float:
    if not reference.age or not candidate.age:
        return 0.0
    ref_age = parse_age(reference.age)
    cand_age = parse_age(candidate.age)
    # Unparseable ages ("All ages", "Adult") carry no signal
    if not ref_age or not cand_age:
        return 0.0
    diff = abs(ref_age - cand_age)
    if diff == 0:
        return AGE_WEIGHT
    if diff <= _AGE_DECAY:
        return AGE_WEIGHT * (1 - diff / _AGE_DECAY)
    return 0.0


def similarity_score(reference: Game, candidate: Game) -> float:
    """Score how alike two games play, from 0 to 100.

    Player-count overlap is worth 40, play-time closeness 30 and minimum-age
    closeness 30. A term is skipped when either game lacks the data for it.
    """
    return (
        _player_score(reference, candidate)
        + _time_score(reference, candidate)
        + _age_score(reference, candidate)
    )


def find_similar(reference: Game, catalog: Sequence[Game], limit: int = 4) -> list[Game]:
    """Return up to *limit* games most like *reference*, best first.

    The reference itself and games with no similarity are left out. Ties keep
    catalog order.
    """
    scored: list[tuple[float, Game]] = []
    for game in catalog:
        if game.id == reference.id:
            continue
        score = similarity_score(reference, game)
        if score > 0:
            scored.append((score, game))

    # sorted() is stable, so equal scores stay in catalog order
    scored = sorted(scored, key=lambda pair: pair[0], reverse=True)
    return [game for _, game in scored[: max(limit, 0)]]
