from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from typing import Literal

from .models import (
    CUISINE_TYPES,
    Feedback,
    MealRecord,
    MealType,
    Menu,
    Recommendation,
    UserPreferences,
)
from .reasons import ReasonContext, generate_reason

MAX_RECOMMENDATIONS = 13
MIN_SCORE = -50
CANDIDATES_PER_CUISINE = 8

# Kept as published; consumers depend on the resulting score scale.
SCORE_WEIGHTS: dict[str, float] = {
    "preference": 0.25,
    "diversity": 0.20,
    "repetition": 0.25,
    "feedback": 0.10,
    "meal_type": 0.10,
    "health": 0.05,
    "favorite": 0.05,
}

FEEDBACK_DELTAS: dict[str, int] = {"select": 15, "reject": -25, "skip": 0}
FEEDBACK_LIMIT = 50
FAVORITE_BONUS = 20

# meal type -> (min heavy level, max heavy level, ideal heavy level)
MEAL_TYPE_HEAVY_TARGETS: dict[str, tuple[int, int, int]] = {
    "breakfast": (1, 2, 1),
    "lunch": (1, 3, 2),
    "dinner": (2, 3, 3),
    "snack": (1, 1, 1),
}


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def resolve_record_menu(record: MealRecord, catalog: Sequence[Menu]) -> Menu | None:
    """First catalog menu matching the record's canonical id or its text."""
    text = record.menu_text.lower()
    for menu in catalog:
        if menu.id == record.canonical_menu_id or menu.display_name.lower() == text:
            return menu
    return None


def count_categories(
    records: Iterable[MealRecord],
    catalog: Sequence[Menu],
    category: Literal["cuisine", "base"],
) -> dict[str, int]:
    counts: dict[str, int] = {}
    for record in records:
        menu = resolve_record_menu(record, catalog)
        if menu is not None:
            value = getattr(menu, category)
            counts[value] = counts.get(value, 0) + 1
    return counts


def calculate_feedback_weights(feedback: Iterable[Feedback]) -> dict[str, float]:
    weights: dict[str, float] = {}
    for fb in feedback:
        weights[fb.menu_id] = weights.get(fb.menu_id, 0) + FEEDBACK_DELTAS.get(fb.action, 0)
    return {
        menu_id: _clamp(weight, -FEEDBACK_LIMIT, FEEDBACK_LIMIT)
        for menu_id, weight in weights.items()
    }


def calculate_preference_score(menu: Menu, preferences: UserPreferences) -> float:
    score = 50

    if preferences.preferred_cuisines:
        score += 20 if menu.cuisine in preferences.preferred_cuisines else -5

    if preferences.preferred_bases:
        score += 15 if menu.base in preferences.preferred_bases else -3

    if preferences.preferred_proteins:
        score += 15 if menu.protein in preferences.preferred_proteins else -3

    if preferences.prefer_soup is not None:
        score += 10 if menu.has_soup == preferences.prefer_soup else -5

    if menu.spicy_level > preferences.max_spicy_level:
        score -= (menu.spicy_level - preferences.max_spicy_level) * 15
    elif menu.spicy_level == preferences.max_spicy_level:
        score += 5

    score -= abs(menu.heavy_level - preferences.preferred_heavy_level) * 8

    if menu.price_range not in preferences.preferred_price_range:
        score -= 10

    return _clamp(score, 0, 100)


def calculate_diversity_bonus(
    menu: Menu,
    recent_cuisines: dict[str, int],
    recent_bases: dict[str, int],
    total_records: int,
) -> float:
    if total_records == 0:
        return 50

    bonus = 50.0

    cuisine_ratio = recent_cuisines.get(menu.cuisine, 0) / total_records
    if cuisine_ratio == 0:
        bonus += 30
    elif cuisine_ratio < 0.2:
        bonus += 20
    elif cuisine_ratio < 0.4:
        bonus += 5
    else:
        bonus -= cuisine_ratio * 30

    base_ratio = recent_bases.get(menu.base, 0) / total_records
    if base_ratio == 0:
        bonus += 20
    elif base_ratio < 0.3:
        bonus += 10
    else:
        bonus -= base_ratio * 20

    return _clamp(bonus, 0, 100)


def calculate_repetition_penalty(
    menu: Menu,
    recent_menu_ids: set[str],
    recent_menu_texts: set[str],
    recent_cuisines: dict[str, int],
) -> float:
    penalty = 100

    if menu.id in recent_menu_ids:
        penalty -= 80

    # Catches free-text records the matcher could not resolve.
    if menu.display_name.lower() in recent_menu_texts:
        penalty -= 70

    cuisine_count = recent_cuisines.get(menu.cuisine, 0)
    if cuisine_count >= 3:
        penalty -= 30
    elif cuisine_count >= 2:
        penalty -= 15

    return max(0, penalty)


def calculate_meal_type_bonus(menu: Menu, meal_type: MealType | None) -> float:
    if meal_type is None:
        return 0
    low, high, ideal = MEAL_TYPE_HEAVY_TARGETS.get(meal_type, (1, 3, 2))
    if not low <= menu.heavy_level <= high:
        return -20
    return 25 if menu.heavy_level == ideal else 15


def calculate_health_bonus(menu: Menu, preferences: UserPreferences) -> float:
    if not preferences.prefer_healthy:
        return 0

    bonus = 0
    if menu.protein == "vegetarian" or menu.base == "salad":
        bonus = 20
    if menu.heavy_level == 1:
        bonus += 10
    if menu.heavy_level == 3:
        bonus -= 15

    if preferences.fitness_goal == "diet":
        if menu.heavy_level == 1:
            bonus += 15
        if menu.base == "salad":
            bonus += 10
        if menu.heavy_level == 3:
            bonus -= 20
    elif preferences.fitness_goal == "muscle":
        if menu.protein in ("chicken", "beef"):
            bonus += 20
        if menu.protein in ("seafood", "pork"):
            bonus += 10
        if menu.heavy_level >= 2:
            bonus += 5

    return bonus


def calculate_recommendations(
    catalog: Sequence[Menu],
    records: Sequence[MealRecord],
    preferences: UserPreferences,
    feedback: Sequence[Feedback],
    meal_type: MealType | None = None,
    exclude_ids: Iterable[str] | None = None,
    rng: random.Random | None = None,
) -> list[Recommendation]:
    """Rank the catalog for the next meal.

    Returns at most ``MAX_RECOMMENDATIONS`` items with score above ``MIN_SCORE``,
    best first. The sort is stable, so equal scores keep catalog order.
    """
    feedback_weights = calculate_feedback_weights(feedback)
    recent_menu_ids = {r.canonical_menu_id for r in records if r.canonical_menu_id}
    recent_menu_texts = {r.menu_text.lower() for r in records}
    recent_cuisines = count_categories(records, catalog, "cuisine")
    recent_bases = count_categories(records, catalog, "base")
    excluded = set(exclude_ids or ())
    w = SCORE_WEIGHTS

    scored: list[Recommendation] = []
    for menu in catalog:
        if menu.id in excluded:
            continue

        preference_score = calculate_preference_score(menu, preferences)
        diversity_bonus = calculate_diversity_bonus(
            menu, recent_cuisines, recent_bases, len(records),
        )
        repetition_penalty = calculate_repetition_penalty(
            menu, recent_menu_ids, recent_menu_texts, recent_cuisines,
        )
        feedback_weight = feedback_weights.get(menu.id, 0)
        meal_type_bonus = calculate_meal_type_bonus(menu, meal_type)
        health_bonus = calculate_health_bonus(menu, preferences)
        favorite_bonus = FAVORITE_BONUS if menu.id in preferences.favorite_menu_ids else 0

        score = (
            preference_score * w["preference"]
            + diversity_bonus * w["diversity"]
            + repetition_penalty * w["repetition"]
            + feedback_weight * w["feedback"]
            + meal_type_bonus * w["meal_type"]
            + health_bonus * w["health"]
            + favorite_bonus * w["favorite"]
        )

        reason = generate_reason(
            ReasonContext(
                menu=menu,
                records=records,
                preferences=preferences,
                recent_cuisines=recent_cuisines,
                recent_bases=recent_bases,
                feedback_weight=feedback_weight,
                meal_type=meal_type,
            ),
            rng,
        )

        scored.append(Recommendation(
            menu=menu,
            score=score,
            preference_score=preference_score,
            diversity_bonus=diversity_bonus,
            repetition_penalty=repetition_penalty,
            feedback_weight=feedback_weight,
            reason=reason,
        ))

    ranked = sorted(
        (r for r in scored if r.score > MIN_SCORE),
        key=lambda r: r.score,
        reverse=True,
    )
    return ranked[:MAX_RECOMMENDATIONS]


def get_menu_candidates_by_category(
    catalog: Sequence[Menu],
    preferences: UserPreferences,
    rng: random.Random | None = None,
) -> dict[str, list[Menu]]:
    """Random sample of up to eight tolerable menus per cuisine, for onboarding."""
    rng = rng or random.Random()
    result: dict[str, list[Menu]] = {}
    for cuisine in CUISINE_TYPES:
        candidates = [
            m for m in catalog
            if m.cuisine == cuisine and m.spicy_level <= preferences.max_spicy_level
        ]
        rng.shuffle(candidates)
        result[cuisine] = candidates[:CANDIDATES_PER_CUISINE]
    return result
