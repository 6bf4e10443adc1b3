"""
"What should we play?" survey matcher.

Scores every base game in the catalog against the six survey answers and
returns one game drawn at random from the five best, so that repeating the
same answers does not always surface the same title.

Weights: group size 30, time 20, mood 20, complexity 15, experience 10,
familiarity 5, plus flat bonuses for staff picks (5) and highly rated
games (3).
"""
from __future__ import annotations

import logging
import random
from collections.abc import Callable, Mapping, Sequence

from .models import BASE_GAME, Game
from .numeric import average_play_time, open_ended_max_players, parse_float

logger = logging.getLogger(__name__)

TOP_N = 5
STAFF_PICK_BONUS = 5.0
HIGH_RATING_BONUS = 3.0
HIGH_RATING = 7.5

Chooser = Callable[[int], int]

SURVEY_QUESTIONS: list[dict] = [
    {
        "key": "groupSize",
        "question": "How many people are playing?",
        "options": [
            {"value": "1", "label": "Just me"},
            {"value": "2", "label": "Two of us"},
            {"value": "3-4", "label": "3-4 players"},
            {"value": "5-6", "label": "5-6 players"},
            {"value": "7+", "label": "7 or more"},
        ],
    },
    {
        "key": "timeAvailable",
        "question": "How much time do you have?",
        "options": [
            {"value": "quick", "label": "Under 30 minutes"},
            {"value": "medium", "label": "About an hour"},
            {"value": "long", "label": "1-2 hours"},
            {"value": "epic", "label": "All evening"},
        ],
    },
    {
        "key": "mood",
        "question": "What's the mood?",
        "options": [
            {"value": "competitive", "label": "Competitive"},
            {"value": "cooperative", "label": "Work together"},
            {"value": "social", "label": "Social and chatty"},
            {"value": "strategic", "label": "Deep thinking"},
        ],
    },
    {
        "key": "complexity",
        "question": "How complex should it be?",
        "options": [
            {"value": "light", "label": "Light"},
            {"value": "medium-light", "label": "Medium-light"},
            {"value": "medium", "label": "Medium"},
            {"value": "heavy", "label": "Heavy"},
        ],
    },
    {
        "key": "experience",
        "question": "What kind of experience?",
        "options": [
            {"value": "party", "label": "Party game"},
            {"value": "strategy", "label": "Strategy"},
            {"value": "adventure", "label": "Adventure"},
            {"value": "any", "label": "Surprise me"},
        ],
    },
    {
        "key": "familiar",
        "question": "How often do you play board games?",
        "options": [
            {"value": "beginner", "label": "Never or rarely"},
            {"value": "casual", "label": "Now and then"},
            {"value": "regular", "label": "Regularly"},
            {"value": "enthusiast", "label": "All the time"},
        ],
    },
]

# (lower, upper) complexity bands, upper bound exclusive
_COMPLEXITY_BANDS: dict[str, tuple[float, float]] = {
    "light": (1.0, 2.0),
    "medium-light": (1.5, 2.75),
    "medium": (2.5, 3.75),
    "heavy": (3.5, float("inf")),
}


def _group_size_score(answer: str | None, game: Game) -> float:
    lo = game.player_count_min
    hi = open_ended_max_players(lo, game.player_count_max)

    if answer == "1":
        full = lo == 1
    elif answer == "2":
        full = lo <= 2 <= hi
    elif answer == "3-4":
        full = lo <= 4 and hi >= 3
    elif answer == "5-6":
        full = lo <= 6 and hi >= 5
    elif answer == "7+":
        full = hi >= 7
    else:
        return 0.0

    if full:
        return 30.0
    if answer == "7+" and hi >= 5:
        return 10.0
    if answer == "5-6" and hi >= 4:
        return 10.0
    return 0.0


def _time_score(answer: str | None, game: Game) -> float:
    if not game.play_time_min:
        return 0.0
    avg = average_play_time(game.play_time_min, game.play_time_max)

    if answer == "quick":
        if avg <= 30:
            return 20.0
        return 10.0 if avg <= 45 else 0.0
    if answer == "medium":
        if 20 < avg <= 60:
            return 20.0
        return 10.0 if avg <= 90 else 0.0
    if answer == "long":
        if 45 < avg <= 120:
            return 20.0
        return 10.0 if avg > 30 else 0.0
    if answer == "epic":
        return 20.0 if avg > 90 else 0.0
    return 0.0


def _mood_score(answer: str | None, game: Game) -> float:
    mode = game.game_mode.lower()
    if answer == "competitive" and "competitive" in mode:
        return 20.0
    if answer == "cooperative" and ("cooperative" in mode or "coop" in mode):
        return 20.0
    if answer == "social" and ("party" in mode or "conversation" in mode):
        return 20.0
    if answer == "strategic" and "competitive" in mode:
        return 15.0
    return 0.0


def _complexity_score(answer: str | None, complexity: float) -> float:
    band = _COMPLEXITY_BANDS.get(answer or "")
    if band is None or complexity <= 0:
        return 0.0
    lower, upper = band
    return 15.0 if lower <= complexity < upper else 5.0


def _experience_score(answer: str | None, game: Game) -> float:
    if answer == "any":
        return 10.0
    categories = [c.lower() for c in game.categories]
    if answer == "party":
        hit = any("party" in c for c in categories) or "party" in game.game_mode.lower()
    elif answer == "strategy":
        hit = any("strategy" in c for c in categories)
    elif answer == "adventure":
        hit = any("adventure" in c or "exploration" in c for c in categories)
    else:
        hit = False
    return 10.0 if hit else 0.0


def _familiarity_score(answer: str | None, complexity: float) -> float:
    if answer == "beginner" and complexity < 2:
        return 5.0
    if answer == "casual" and complexity < 2.5:
        return 5.0
    if answer == "regular":
        return 5.0
    if answer == "enthusiast" and complexity >= 2.5:
        return 5.0
    return 0.0


def score_game(answers: Mapping[str, str], game: Game) -> float:
    """Sum every survey term and bonus for one game. Missing answers score 0."""
    complexity = parse_float(game.complexity)
    score = (
        _group_size_score(answers.get("groupSize"), game)
        + _time_score(answers.get("timeAvailable"), game)
        + _mood_score(answers.get("mood"), game)
        + _complexity_score(answers.get("complexity"), complexity)
        + _experience_score(answers.get("experience"), game)
        + _familiarity_score(answers.get("familiar"), complexity)
    )
    if game.staff_recommendations:
        score += STAFF_PICK_BONUS
    if game.rating >= HIGH_RATING:
        score += HIGH_RATING_BONUS
    return score


def rank_candidates(answers: Mapping[str, str], catalog: Sequence[Game]) -> list[tuple[float, Game]]:
    """Score the base games in *catalog*, best first, dropping zero scores."""
    scored = [
        (score_game(answers, game), game)
        for game in catalog
        if game.inventory_category == BASE_GAME
    ]
    scored = [pair for pair in scored if pair[0] > 0]
    return sorted(scored, key=lambda pair: pair[0], reverse=True)


def _random_index(n: int) -> int:
    return random.randrange(n)


def match_game(
    answers: Mapping[str, str],
    catalog: Sequence[Game],
    chooser: Chooser | None = None,
) -> Game | None:
    """Pick a game for the survey answers, or ``None`` when nothing fits.

    *chooser* receives the size of the shortlist and returns the index to
    pick; it defaults to a fresh uniform draw on every call.
    """
    ranked = rank_candidates(answers, catalog)
    if not ranked:
        logger.info("No base game matched survey answers %s", dict(answers))
        return None

    shortlist = ranked[:TOP_N]
    index = (chooser or _random_index)(len(shortlist))
    score, game = shortlist[index]
    logger.debug("Matched %s (score %.1f) from %d candidates", game.id, score, len(ranked))
    return game
