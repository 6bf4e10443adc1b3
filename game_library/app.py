from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from starlette.middleware.sessions import SessionMiddleware

from .auth.config import DEFAULT_AUTH_CONFIG
from .auth.dependencies import require_admin, require_user
from .auth.users import authenticate
from .catalog.admin import admin_search, generate_search_index, validate_game
from .catalog.store import (
    GameNotFoundError,
    add_game,
    delete_game,
    get_game,
    list_games,
    update_game,
)
from .recommendations.gallery import (
    PLAYER_FILTERS,
    SORT_FIELDS,
    filter_games,
    format_play_time,
    format_player_count,
    sort_games,
    to_card,
)
from .recommendations.matcher import SURVEY_QUESTIONS, match_game
from .recommendations.models import (
    Game,
    GameCard,
    GameDetailResponse,
    GameListResponse,
    LoginRequest,
    MatchResponse,
    SubscribeRequest,
    SurveyAnswers,
)
from .recommendations.similarity import find_similar
from .subscribers.store import add_subscriber

logger = logging.getLogger(__name__)

app = FastAPI(title="Board Game Library API", version="1.0.0")
app.add_middleware(SessionMiddleware, secret_key=DEFAULT_AUTH_CONFIG.session_secret)

SIMILAR_ON_DETAIL = 4


def _get_or_404(game_id: str) -> Game:
    try:
        return get_game(game_id)
    except GameNotFoundError:
        raise HTTPException(status_code=404, detail="Game not found")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    games = list_games()
    return {
        "modes": sorted({g.game_mode for g in games if g.game_mode}),
        "inventoryCategories": sorted({g.inventory_category for g in games if g.inventory_category}),
        "playerFilters": list(PLAYER_FILTERS),
        "sortFields": list(SORT_FIELDS),
    }


@app.get("/games", response_model=GameListResponse)
def games(
    search: str | None = None,
    players: str | None = None,
    mode: str | None = None,
    category: str | None = None,
    sort: str = "title",
) -> GameListResponse:
    matched = filter_games(list_games(), search=search, players=players, mode=mode, category=category)
    ordered = sort_games(matched, sort)
    return GameListResponse(games=[to_card(g) for g in ordered], total=len(ordered))


@app.get("/games/{game_id}", response_model=GameDetailResponse)
def game_detail(game_id: str) -> GameDetailResponse:
    game = _get_or_404(game_id)
    similar = find_similar(game, list_games(), SIMILAR_ON_DETAIL)
    return GameDetailResponse(
        game=game,
        players=format_player_count(game.player_count_min, game.player_count_max),
        play_time=format_play_time(game.play_time_min, game.play_time_max),
        similar=[to_card(g) for g in similar],
    )


@app.get("/games/{game_id}/similar", response_model=list[GameCard])
def similar_games(game_id: str, limit: int = Query(default=4, ge=1, le=50)) -> list[GameCard]:
    game = _get_or_404(game_id)
    return [to_card(g) for g in find_similar(game, list_games(), limit)]


@app.get("/survey/questions")
def survey_questions() -> list[dict]:
    return SURVEY_QUESTIONS


@app.post("/survey/match", response_model=MatchResponse)
def survey_match(body: SurveyAnswers) -> MatchResponse:
    game = match_game(body.as_answer_set(), list_games())
    if game is None:
        return MatchResponse(
            game=None,
            message="No game in the library fits those answers. Try loosening a preference.",
        )
    return MatchResponse(game=game, message=f"We think you'll enjoy {game.title}!")


@app.post("/subscribe")
def subscribe(body: SubscribeRequest) -> dict[str, str]:
    add_subscriber(body.email)
    logger.info("New mailing-list subscriber")
    return {"status": "subscribed"}


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/admin/games", response_model=list[Game])
def admin_games(search: str | None = None, user: dict = Depends(require_admin)) -> list[Game]:
    return admin_search(list_games(order_by="title"), search)


@app.post("/admin/games", response_model=Game, status_code=201)
def admin_create_game(body: Game, user: dict = Depends(require_admin)) -> Game:
    errors = validate_game(body)
    if errors:
        raise HTTPException(status_code=422, detail=errors)
    body.search_index = generate_search_index(body)
    doc_id = add_game(body.to_document())
    logger.info("%s created game %s (%s)", user["email"], doc_id, body.title)
    return get_game(doc_id)


@app.put("/admin/games/{game_id}", response_model=Game)
def admin_update_game(game_id: str, body: Game, user: dict = Depends(require_admin)) -> Game:
    existing = _get_or_404(game_id)
    # Only the submitted form fields change; staff picks and BGG data stay.
    changes = body.model_dump(by_alias=True, exclude_unset=True, exclude={"id"})
    candidate = Game.model_validate({**existing.to_document(), **changes, "id": game_id})
    errors = validate_game(candidate)
    if errors:
        raise HTTPException(status_code=422, detail=errors)
    changes["searchIndex"] = generate_search_index(candidate)
    try:
        updated = update_game(game_id, changes)
    except GameNotFoundError:
        raise HTTPException(status_code=404, detail="Game not found. It may have been deleted.")
    logger.info("%s updated game %s", user["email"], game_id)
    return updated


@app.delete("/admin/games/{game_id}")
def admin_delete_game(game_id: str, user: dict = Depends(require_admin)) -> dict:
    try:
        delete_game(game_id)
    except GameNotFoundError:
        raise HTTPException(status_code=404, detail="Game not found")
    logger.info("%s deleted game %s", user["email"], game_id)
    return {"status": "deleted", "id": game_id}
