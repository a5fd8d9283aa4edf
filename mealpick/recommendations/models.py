from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

CUISINE_TYPES = ("korean", "chinese", "japanese", "western", "bunsik", "asian", "other")
BASE_TYPES = ("rice", "noodle", "bread", "salad", "other")
PROTEIN_TYPES = ("pork", "beef", "chicken", "seafood", "vegetarian", "mixed")
MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")
PRICE_RANGES = ("low", "medium", "high")
FEEDBACK_ACTIONS = ("select", "reject", "skip")
FITNESS_GOALS = ("none", "diet", "muscle")
MATCH_TYPES = ("exact", "alias", "normalized", "partial", "chosung", "fuzzy", "decomposed", "none")

CuisineType = Literal["korean", "chinese", "japanese", "western", "bunsik", "asian", "other"]
BaseType = Literal["rice", "noodle", "bread", "salad", "other"]
ProteinType = Literal["pork", "beef", "chicken", "seafood", "vegetarian", "mixed"]
MealType = Literal["breakfast", "lunch", "dinner", "snack"]
PriceRange = Literal["low", "medium", "high"]
FeedbackAction = Literal["select", "reject", "skip"]
FitnessGoal = Literal["none", "diet", "muscle"]
MatchType = Literal[
    "exact", "alias", "normalized", "partial", "chosung", "fuzzy", "decomposed", "none",
]

CUISINE_LABELS: dict[str, str] = {
    "korean": "한식",
    "chinese": "중식",
    "japanese": "일식",
    "western": "양식",
    "bunsik": "분식",
    "asian": "아시안",
    "other": "기타",
}

BASE_LABELS: dict[str, str] = {
    "rice": "밥",
    "noodle": "면",
    "bread": "빵",
    "salad": "샐러드",
    "other": "기타",
}

PROTEIN_LABELS: dict[str, str] = {
    "pork": "돼지고기",
    "beef": "소고기",
    "chicken": "닭고기",
    "seafood": "해산물",
    "vegetarian": "채식",
    "mixed": "혼합",
}

MEAL_TYPE_LABELS: dict[str, str] = {
    "breakfast": "아침",
    "lunch": "점심",
    "dinner": "저녁",
    "snack": "간식",
}

PRICE_LABELS: dict[str, str] = {
    "low": "저가",
    "medium": "중가",
    "high": "고가",
}


class CamelModel(BaseModel):
    """Base for wire models: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Menu(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(..., min_length=1)
    canonical_name: str
    display_name: str = Field(..., min_length=1)
    cuisine: CuisineType
    base: BaseType
    has_soup: bool
    protein: ProteinType
    spicy_level: int = Field(..., ge=0, le=3)
    heavy_level: int = Field(..., ge=1, le=3)
    price_range: PriceRange
    synonyms: tuple[str, ...] = ()


class MealRecordCreate(CamelModel):
    date: dt.date
    meal_type: MealType
    menu_text: str = Field(..., min_length=1, max_length=200)


class MealRecord(MealRecordCreate):
    id: str
    canonical_menu_id: str | None = None


class MealRecordCreated(MealRecord):
    matched_menu_id: str | None = None
    match_confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    match_type: MatchType = "none"
    original_input: str | None = None


class UserPreferences(CamelModel):
    preferred_cuisines: list[CuisineType] = Field(default_factory=list)
    preferred_bases: list[BaseType] = Field(default_factory=list)
    preferred_proteins: list[ProteinType] = Field(default_factory=list)
    prefer_soup: bool | None = None
    max_spicy_level: int = Field(default=2, ge=0, le=3)
    preferred_heavy_level: int = Field(default=2, ge=1, le=3)
    preferred_price_range: list[PriceRange] = Field(
        default_factory=lambda: ["low", "medium", "high"],
    )
    excluded_ingredients: list[str] = Field(default_factory=list)
    favorite_menu_ids: list[str] = Field(default_factory=list)
    prefer_healthy: bool = False
    fitness_goal: FitnessGoal = "none"
    onboarding_completed: bool = False


class FeedbackCreate(CamelModel):
    menu_id: str = Field(..., min_length=1)
    action: FeedbackAction


class Feedback(FeedbackCreate):
    id: str
    timestamp: dt.datetime


class Recommendation(CamelModel):
    menu: Menu
    score: float
    preference_score: float
    diversity_bonus: float
    repetition_penalty: float
    feedback_weight: float
    reason: str


class InsightSummary(CamelModel):
    recent_category_distribution: dict[str, int] = Field(default_factory=dict)
    recent_base_distribution: dict[str, int] = Field(default_factory=dict)
    top_liked: list[str] = Field(default_factory=list)
    top_disliked: list[str] = Field(default_factory=list)
    diversity_score: int = Field(default=0, ge=0, le=100)
    total_records: int = 0
    total_feedback: int = 0
