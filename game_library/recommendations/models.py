from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .numeric import parse_float, parse_int

BASE_GAME = "Base Game"

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class _CamelModel(BaseModel):
    # Documents in the games collection use camelCase keys
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StaffRecommendation(_CamelModel):
    staff_name: str = ""
    reason: str = ""


def _split_list(value: Any) -> list[str]:
    if value is None or value == "":
        return []
    if isinstance(value, str):
        return [s.strip() for s in value.split(",") if s.strip()]
    return [str(s).strip() for s in value if str(s).strip()]


class Game(_CamelModel):
    id: str = ""
    title: str = ""
    game_id: str = ""
    publisher: str = ""
    description: str = ""
    image_url: str = ""
    thumbnail_url: str = ""
    images: list[str] = Field(default_factory=list)

    player_count_min: int = 0
    player_count_max: str = ""
    play_time_min: int = 0
    play_time_max: int = 0
    age: str = ""
    game_mode: str = ""
    rating: float = 0.0
    complexity: str = ""

    inventory_category: str = ""
    type: str = ""
    theme: str = ""
    vibe: str = ""
    categories: list[str] = Field(default_factory=list)
    mechanics: list[str] = Field(default_factory=list)
    game_mechanics: str = ""
    tags: str = ""
    staff_recommendations: list[StaffRecommendation] = Field(default_factory=list)

    quantity_library: int = 0
    quantity_retail: int = 0
    upc: str = ""
    vendor: str = ""
    purchase_date: str = ""
    unit_cost: str = ""
    rules_url: str = ""
    play_tested: str = ""
    notes: str = ""

    bgg_id: str = ""
    bgg_rank: int | None = None
    year_published: int | None = None
    recommended_players: str = ""
    search_index: str = ""

    @field_validator(
        "player_count_min",
        "play_time_min",
        "play_time_max",
        "quantity_library",
        "quantity_retail",
        mode="before",
    )
    @classmethod
    def _coerce_int(cls, value: Any) -> int:
        return parse_int(value)

    @field_validator("rating", mode="before")
    @classmethod
    def _coerce_rating(cls, value: Any) -> float:
        return parse_float(value)

    @field_validator(
        "id",
        "game_id",
        "player_count_max",
        "age",
        "complexity",
        "bgg_id",
        "unit_cost",
        "recommended_players",
        mode="before",
    )
    @classmethod
    def _coerce_str(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("bgg_rank", "year_published", mode="before")
    @classmethod
    def _coerce_optional_int(cls, value: Any) -> int | None:
        return parse_int(value) or None

    @field_validator("categories", "mechanics", "images", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[str]:
        return _split_list(value)

    @field_validator("staff_recommendations", mode="before")
    @classmethod
    def _coerce_staff(cls, value: Any) -> list[Any]:
        return value or []

    def to_document(self) -> dict[str, Any]:
        """Serialise to a camelCase document, without the store-assigned id."""
        return self.model_dump(by_alias=True, exclude={"id"})


GroupSize = Literal["1", "2", "3-4", "5-6", "7+"]
TimeAvailable = Literal["quick", "medium", "long", "epic"]
Mood = Literal["competitive", "cooperative", "social", "strategic"]
ComplexityPreference = Literal["light", "medium-light", "medium", "heavy"]
Experience = Literal["party", "strategy", "adventure", "any"]
Familiarity = Literal["beginner", "casual", "regular", "enthusiast"]


class SurveyAnswers(_CamelModel):
    group_size: GroupSize
    time_available: TimeAvailable
    mood: Mood
    complexity: ComplexityPreference
    experience: Experience
    familiar: Familiarity

    def as_answer_set(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class GameCard(_CamelModel):
    id: str
    title: str
    publisher: str
    image_url: str
    inventory_category: str
    game_mode: str
    players: str
    play_time: str
    age: str
    rating: float


class GameListResponse(_CamelModel):
    games: list[GameCard]
    total: int


class GameDetailResponse(_CamelModel):
    game: Game
    players: str
    play_time: str
    similar: list[GameCard]


class MatchResponse(_CamelModel):
    game: Game | None = None
    message: str


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class SubscribeRequest(BaseModel):
    email: str

    @field_validator("email")
    @classmethod
    def _valid_email(cls, value: str) -> str:
        value = value.strip()
        if not _EMAIL_RE.match(value):
            raise ValueError("Invalid email address")
        return value
