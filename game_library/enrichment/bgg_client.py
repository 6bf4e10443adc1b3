from __future__ import annotations

import html
import logging
import re
import time
import xml.etree.ElementTree as ET
from typing import Any, Callable, Optional

import requests
from pydantic import BaseModel, Field

from ..recommendations.numeric import parse_float, parse_int
from .config import DEFAULT_BGG_CONFIG, BGGConfig

logger = logging.getLogger(__name__)

_TAGS = re.compile(r"<[^>]*>")


class BGGError(Exception):
    pass


class BGGSearchHit(BaseModel):
    id: str
    name: str = ""
    year_published: Optional[int] = None


class BGGDetails(BaseModel):
    bgg_id: str
    name: str = ""
    description: str = ""
    image_url: str = ""
    thumbnail_url: str = ""
    images: list[str] = Field(default_factory=list)
    rating: Optional[float] = None
    complexity: Optional[str] = None
    min_players: Optional[int] = None
    max_players: Optional[int] = None
    min_play_time: Optional[int] = None
    max_play_time: Optional[int] = None
    age: Optional[str] = None
    year_published: Optional[int] = None
    categories: list[str] = Field(default_factory=list)
    mechanics: list[str] = Field(default_factory=list)
    bgg_rank: Optional[int] = None
    recommended_players: Optional[str] = None


def _value(item: ET.Element, tag: str) -> Optional[str]:
    node = item.find(tag)
    return node.get("value") if node is not None else None


def _optional_int(raw: Optional[str]) -> Optional[int]:
    if not raw:
        return None
    return parse_int(raw) or None


def clean_description(raw: str, limit: int = DEFAULT_BGG_CONFIG.description_limit) -> str:
    """Strip markup and decode entities in a BGG description."""
    text = html.unescape(_TAGS.sub("", raw or ""))
    return text.strip()[:limit]


def _primary_name(item: ET.Element) -> str:
    names = item.findall("name")
    for node in names:
        if node.get("type") == "primary":
            return node.get("value", "")
    return names[0].get("value", "") if names else ""


def _best_player_counts(item: ET.Element) -> Optional[str]:
    """Player counts with the most "Best" votes in the community poll."""
    poll = next(
        (p for p in item.findall("poll") if p.get("name") == "suggested_numplayers"),
        None,
    )
    if poll is None:
        return None

    best_votes = -1
    best_counts: list[str] = []
    for results in poll.findall("results"):
        best = next((r for r in results.findall("result") if r.get("value") == "Best"), None)
        if best is None:
            continue
        votes = parse_int(best.get("numvotes"))
        if votes > best_votes:
            best_votes = votes
            best_counts = [results.get("numplayers", "")]
        elif votes == best_votes:
            best_counts.append(results.get("numplayers", ""))

    if best_counts and best_votes > 0:
        return ", ".join(best_counts)
    return None


def _board_game_rank(ratings: Optional[ET.Element]) -> Optional[int]:
    if ratings is None:
        return None
    for rank in ratings.findall("ranks/rank"):
        if rank.get("name") == "boardgame":
            value = rank.get("value")
            if value and value != "Not Ranked":
                return parse_int(value) or None
    return None


def parse_search_results(root: ET.Element, name: str) -> Optional[BGGSearchHit]:
    """Pick the exact (case-insensitive) title match, else BGG's first hit."""
    items = root.findall("item")
    if not items:
        return None

    def _hit(item: ET.Element) -> BGGSearchHit:
        return BGGSearchHit(
            id=item.get("id", ""),
            name=_value(item, "name") or "",
            year_published=_optional_int(_value(item, "yearpublished")),
        )

    wanted = name.lower()
    for item in items:
        if (_value(item, "name") or "").lower() == wanted:
            return _hit(item)
    return _hit(items[0])


def parse_thing(item: ET.Element, config: BGGConfig = DEFAULT_BGG_CONFIG) -> BGGDetails:
    """Build :class:`BGGDetails` from a ``<item>`` of the /thing endpoint."""
    images = [node.text.strip() for node in item.findall("image") if node.text]
    thumbnail = item.findtext("thumbnail", default="").strip()
    ratings = item.find("statistics/ratings")

    rating = _value(ratings, "average") if ratings is not None else None
    weight = _value(ratings, "averageweight") if ratings is not None else None
    min_age = _value(item, "minage")

    links = item.findall("link")
    return BGGDetails(
        bgg_id=item.get("id", ""),
        name=_primary_name(item),
        description=clean_description(item.findtext("description", default=""), config.description_limit),
        image_url=images[0] if images else "",
        thumbnail_url=thumbnail or (images[0] if images else ""),
        images=images,
        rating=round(parse_float(rating), 1) if rating else None,
        complexity=f"{parse_float(weight):.2f}" if weight else None,
        min_players=_optional_int(_value(item, "minplayers")),
        max_players=_optional_int(_value(item, "maxplayers")),
        min_play_time=_optional_int(_value(item, "minplaytime")),
        max_play_time=_optional_int(_value(item, "maxplaytime")),
        age=f"{min_age}+" if min_age else None,
        year_published=_optional_int(_value(item, "yearpublished")),
        categories=[l.get("value", "") for l in links if l.get("type") == "boardgamecategory"],
        mechanics=[l.get("value", "") for l in links if l.get("type") == "boardgamemechanic"],
        bgg_rank=_board_game_rank(ratings),
        recommended_players=_best_player_counts(item),
    )


class BGGClient:
    """Minimal client for the BoardGameGeek XML API2."""

    def __init__(
        self,
        config: BGGConfig = DEFAULT_BGG_CONFIG,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], Any] = time.sleep,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.sleep = sleep
        self.session.headers.update({
            "User-Agent": config.user_agent,
            "Accept": "application/xml, text/xml, */*",
        })
        if config.api_token:
            self.session.headers["Authorization"] = f"Bearer {config.api_token}"

    def _get(self, path: str, params: dict[str, str]) -> ET.Element:
        """GET an XML document, retrying while BGG answers 202 (queued)."""
        url = f"{self.config.base_url}{path}"
        last_exc: Optional[Exception] = None

        for _ in range(self.config.max_retries):
            try:
                resp = self.session.get(url, params=params, timeout=self.config.timeout)
            except requests.RequestException as exc:
                last_exc = exc
                self.sleep(self.config.retry_delay_seconds)
                continue

            if resp.status_code == 202:
                self.sleep(self.config.retry_delay_seconds)
                continue
            if resp.status_code != 200:
                raise BGGError(f"BGG API error: {resp.status_code} for {path}")

            try:
                return ET.fromstring(resp.content)
            except ET.ParseError as exc:
                raise BGGError(f"Malformed XML from {path}") from exc

        raise BGGError(f"Gave up on {path} after {self.config.max_retries} attempts: {last_exc!r}")

    def search(self, name: str) -> Optional[BGGSearchHit]:
        root = self._get("/search", {"query": name, "type": "boardgame"})
        return parse_search_results(root, name)

    def fetch_details(self, bgg_id: str) -> Optional[BGGDetails]:
        root = self._get("/thing", {"id": str(bgg_id), "stats": "1"})
        item = root.find("item")
        if item is None:
            return None
        return parse_thing(item, self.config)
