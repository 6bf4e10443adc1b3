from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from ..recommendations.models import Game
from .config import DEFAULT_STORE_CONFIG, StoreConfig

logger = logging.getLogger(__name__)

_config: StoreConfig = DEFAULT_STORE_CONFIG
_docs: dict[str, dict[str, Any]] | None = None


class GameNotFoundError(KeyError):
    """Raised when no document exists for a game id."""


def _load() -> dict[str, dict[str, Any]]:
    if not _config.path.exists():
        return {}
    raw = json.loads(_config.path.read_text(encoding="utf-8") or "{}")
    return dict(raw.get(_config.collection, {}))


def _flush() -> None:
    _config.path.parent.mkdir(parents=True, exist_ok=True)
    payload = {_config.collection: _collection()}
    _config.path.write_text(json.dumps(payload, indent=2, default=str), encoding="utf-8")


def _collection() -> dict[str, dict[str, Any]]:
    """Return the in-memory collection, loading it on first call."""
    global _docs
    if _docs is None:
        _docs = _load()
        logger.info("Loaded %d games from %s", len(_docs), _config.path)
    return _docs


def _to_game(doc_id: str, doc: dict[str, Any]) -> Game:
    return Game.model_validate({**doc, "id": doc_id})


def configure_store(config: StoreConfig = DEFAULT_STORE_CONFIG) -> None:
    """Point the store at another backing file and drop the cached copy."""
    global _config, _docs
    _config = config
    _docs = None


def list_games(order_by: str | None = None) -> list[Game]:
    games = [_to_game(doc_id, doc) for doc_id, doc in _collection().items()]
    if order_by:
        games.sort(key=lambda g: _sort_key(g.to_document().get(order_by)))
    return games


def _sort_key(value: Any) -> tuple[int, Any]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value)
    if value is None or value == "":
        return (2, "")
    return (1, str(value).lower())


def get_game(doc_id: str) -> Game:
    doc = _collection().get(doc_id)
    if doc is None:
        raise GameNotFoundError(doc_id)
    return _to_game(doc_id, doc)


def find_by_field(field: str, value: Any) -> list[Game]:
    return [
        _to_game(doc_id, doc)
        for doc_id, doc in _collection().items()
        if doc.get(field) == value
    ]


def add_game(data: dict[str, Any]) -> str:
    """Store a new document under a generated id and return the id."""
    doc_id = uuid.uuid4().hex[:20]
    set_game(doc_id, data)
    return doc_id


def set_game(doc_id: str, data: dict[str, Any]) -> None:
    """Create or replace the document at *doc_id*."""
    doc = Game.model_validate({**data, "id": doc_id}).to_document()
    _collection()[doc_id] = doc
    _flush()


def update_game(doc_id: str, data: dict[str, Any]) -> Game:
    """Merge *data* into an existing document."""
    existing = _collection().get(doc_id)
    if existing is None:
        raise GameNotFoundError(doc_id)
    merged = Game.model_validate({**existing, **data, "id": doc_id})
    _collection()[doc_id] = merged.to_document()
    _flush()
    return merged


def delete_game(doc_id: str) -> None:
    if _collection().pop(doc_id, None) is None:
        raise GameNotFoundError(doc_id)
    _flush()
