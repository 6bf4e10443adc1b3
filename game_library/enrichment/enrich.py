"""
Fill in missing catalog details from BoardGameGeek.

Usage:
    python -m game_library.enrichment.enrich [--limit N] [--all] [--force]

By default only games without an image or a description are looked up;
``--all`` and ``--force`` look up every game. Fields that already hold a
value are never overwritten.
"""
from __future__ import annotations

import argparse
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from ..catalog.store import get_game, list_games, update_game
from ..recommendations.models import Game
from .bgg_client import BGGClient, BGGDetails, BGGError, BGGSearchHit

logger = logging.getLogger(__name__)

_PARENTHESISED = re.compile(r"\([^)]*\)")

# BGG detail attribute -> catalog document field
_ENRICHED_FIELDS: dict[str, str] = {
    "description": "description",
    "image_url": "imageUrl",
    "thumbnail_url": "thumbnailUrl",
    "images": "images",
    "rating": "rating",
    "complexity": "complexity",
    "bgg_id": "bggId",
    "year_published": "yearPublished",
    "categories": "categories",
    "mechanics": "mechanics",
    "bgg_rank": "bggRank",
    "recommended_players": "recommendedPlayers",
}


@dataclass(frozen=True)
class EnrichOptions:
    limit: Optional[int] = None
    missing_images_only: bool = True
    missing_descriptions_only: bool = True
    force: bool = False


@dataclass
class EnrichResult:
    candidates: int = 0
    succeeded: int = 0
    failed: int = 0


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == 0 or value == []


def needs_enrichment(game: Game, options: EnrichOptions) -> bool:
    if options.force or not (options.missing_images_only or options.missing_descriptions_only):
        return True
    needs_image = options.missing_images_only and not game.image_url
    needs_description = options.missing_descriptions_only and not game.description
    return needs_image or needs_description


def merge_missing_fields(existing: dict[str, Any], details: BGGDetails) -> dict[str, Any]:
    """Return the document fields BGG can fill that are empty in *existing*."""
    updates: dict[str, Any] = {}
    for attr, field in _ENRICHED_FIELDS.items():
        value = getattr(details, attr)
        if _is_empty(value):
            continue
        if _is_empty(existing.get(field)):
            updates[field] = value
    return updates


def _search_once(client: BGGClient, name: str) -> Optional[BGGSearchHit]:
    try:
        return client.search(name)
    except BGGError:
        logger.warning("BGG search failed for %r", name, exc_info=True)
        return None


def search_with_fallbacks(client: BGGClient, title: str) -> Optional[BGGSearchHit]:
    """Search by full title, then without "(...)" parts, then before a colon."""
    logger.info("Searching BGG for: %s", title)
    hit = _search_once(client, title)

    if hit is None and "(" in title:
        cleaned = _PARENTHESISED.sub("", title).strip()
        if cleaned and cleaned != title:
            logger.info("Retrying search with cleaned name: %s", cleaned)
            client.sleep(client.config.retry_delay_seconds)
            hit = _search_once(client, cleaned)

    if hit is None and ":" in title:
        base = title.split(":")[0].strip()
        if base and base != title:
            logger.info("Retrying search with base name: %s", base)
            client.sleep(client.config.retry_delay_seconds)
            hit = _search_once(client, base)

    if hit is None:
        logger.info("No results found for: %s", title)
    return hit


def enrich_game(client: BGGClient, game: Game) -> bool:
    """Look one game up on BGG and store any fields it was missing."""
    hit = search_with_fallbacks(client, game.title)
    client.sleep(client.config.rate_limit_seconds)
    if hit is None:
        logger.warning("Could not find %s on BGG", game.title)
        return False

    try:
        details = client.fetch_details(hit.id)
    except BGGError:
        logger.warning("Fetching BGG id %s failed", hit.id, exc_info=True)
        details = None
    client.sleep(client.config.rate_limit_seconds)
    if details is None:
        logger.warning("Could not fetch details for %s", game.title)
        return False

    existing = get_game(game.id).to_document()
    updates = merge_missing_fields(existing, details)
    if not updates:
        logger.info("Skipped %s - all fields already populated", game.id)
        return True

    update_game(game.id, updates)
    logger.info("Updated %s with %d BGG fields", game.id, len(updates))
    return True


def run_enrichment(
    options: EnrichOptions = EnrichOptions(),
    client: Optional[BGGClient] = None,
) -> EnrichResult:
    client = client or BGGClient()
    games = list_games()
    if options.limit:
        games = games[: options.limit]
    logger.info("Found %d games in the catalog", len(games))

    to_enrich = [g for g in games if needs_enrichment(g, options)]
    result = EnrichResult(candidates=len(to_enrich))
    logger.info("%d games need enrichment", len(to_enrich))

    for i, game in enumerate(to_enrich, start=1):
        logger.info("[%d/%d] Processing: %s", i, len(to_enrich), game.title)
        if enrich_game(client, game):
            result.succeeded += 1
        else:
            result.failed += 1

    logger.info(
        "Enrichment complete: %d succeeded, %d failed, %d total",
        result.succeeded,
        result.failed,
        result.candidates,
    )
    return result


def parse_args(argv: Optional[list[str]] = None) -> EnrichOptions:
    parser = argparse.ArgumentParser(description="Enrich catalog games from BoardGameGeek")
    parser.add_argument("--limit", type=int, default=None, help="only look at the first N games")
    parser.add_argument("--all", action="store_true", help="look up every game")
    parser.add_argument("--force", action="store_true", help="same as --all")
    args = parser.parse_args(argv)

    lookup_all = args.all or args.force
    return EnrichOptions(
        limit=args.limit,
        missing_images_only=not lookup_all,
        missing_descriptions_only=not lookup_all,
        force=args.force,
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run_enrichment(parse_args())
