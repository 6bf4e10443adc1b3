from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from game_library.app import app
from game_library.catalog.store import get_game
from game_library.subscribers.store import get_subscribers

client = TestClient(app)

ANSWERS = {
    "groupSize": "3-4",
    "timeAvailable": "medium",
    "mood": "cooperative",
    "complexity": "medium-light",
    "experience": "strategy",
    "familiar": "casual",
}


def test_health():
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_metadata_lists_modes_and_categories():
    body = client.get("/metadata").json()
    assert body["modes"] == ["Competitive", "Cooperative", "Party"]
    assert body["inventoryCategories"] == ["Base Game", "Expansion"]
    assert "5+" in body["playerFilters"]
    assert body["sortFields"] == ["title", "rating", "playTimeMin", "playerCountMin"]


def test_games_lists_whole_catalog_sorted_by_title():
    body = client.get("/games").json()
    assert body["total"] == 5
    titles = [g["title"] for g in body["games"]]
    assert titles == sorted(titles, key=str.lower)


def test_games_card_shape():
    body = client.get("/games", params={"search": "codenames"}).json()
    card = body["games"][0]
    assert card["id"] == "codenames"
    assert card["players"] == "2-8+"
    assert card["playTime"] == "15m"


def test_games_filters_and_sort():
    resp = client.get("/games", params={"mode": "cooperative", "sort": "rating"})
    assert [g["id"] for g in resp.json()["games"]] == ["gloomhaven", "pandemic"]


def test_games_filter_without_results():
    body = client.get("/games", params={"search": "nonexistent12345"}).json()
    assert body == {"games": [], "total": 0}


def test_game_detail_includes_similar_games():
    resp = client.get("/games/catan")
    assert resp.status_code == 200
    body = resp.json()
    assert body["game"]["title"] == "Catan"
    assert body["players"] == "3-4"
    assert body["playTime"] == "60-120m"
    similar_ids = [g["id"] for g in body["similar"]]
    assert "catan" not in similar_ids
    assert similar_ids[0] == "seafarers"
    assert len(similar_ids) <= 4


def test_game_detail_unknown_id():
    assert client.get("/games/nope").status_code == 404


def test_similar_games_respects_limit():
    resp = client.get("/games/catan/similar", params={"limit": 1})
    assert resp.status_code == 200
    assert [g["id"] for g in resp.json()] == ["seafarers"]


def test_similar_games_rejects_bad_limit():
    assert client.get("/games/catan/similar", params={"limit": 0}).status_code == 422


def test_survey_questions():
    body = client.get("/survey/questions").json()
    assert len(body) == 6
    assert body[0]["key"] == "groupSize"


def test_survey_match_returns_base_game():
    resp = client.post("/survey/match", json=ANSWERS)
    assert resp.status_code == 200
    body = resp.json()
    assert body["game"]["inventoryCategory"] == "Base Game"
    assert body["game"]["id"] != "seafarers"


def test_survey_match_requires_every_answer():
    partial = {k: v for k, v in ANSWERS.items() if k != "mood"}
    assert client.post("/survey/match", json=partial).status_code == 422


def test_survey_match_rejects_unknown_option():
    assert client.post("/survey/match", json={**ANSWERS, "groupSize": "12"}).status_code == 422


def test_survey_match_without_candidates():
    expansion = get_game("seafarers")
    with patch("game_library.app.list_games", return_value=[expansion]):
        resp = client.post("/survey/match", json=ANSWERS)
    assert resp.status_code == 200
    body = resp.json()
    assert body["game"] is None
    assert "No game" in body["message"]


def test_subscribe_appends_email():
    resp = client.post("/subscribe", json={"email": "fan@example.com"})
    assert resp.status_code == 200
    assert resp.json() == {"status": "subscribed"}
    assert get_subscribers() == ["fan@example.com"]


def test_subscribe_rejects_invalid_email():
    assert client.post("/subscribe", json={"email": "not-an-email"}).status_code == 422
    assert get_subscribers() == []
