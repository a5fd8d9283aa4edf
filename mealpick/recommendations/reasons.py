from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .models import BASE_LABELS, CUISINE_LABELS, MealRecord, MealType, Menu, UserPreferences

FRESH_START_REASON = "새로운 시작! 이 메뉴로 오늘의 첫 식사를 즐겨보세요."

FALLBACK_REASONS: tuple[str, ...] = (
    "오늘의 기분 전환에 딱 맞는 메뉴예요.",
    "균형 잡힌 식사로 추천해요.",
    "새로운 맛을 경험해보세요!",
    "당신의 취향에 맞을 거예요.",
)

DOMINANT_CUISINE_RATIO = 0.4
DOMINANT_BASE_RATIO = 0.5
SPICY_MARKERS = ("매운", "불")


@dataclass(frozen=True)
class ReasonContext:
    menu: Menu
    records: Sequence[MealRecord]
    preferences: UserPreferences
    recent_cuisines: dict[str, int]
    recent_bases: dict[str, int]
    feedback_weight: float
    meal_type: MealType | None = None


def _most_common(counts: dict[str, int]) -> tuple[str, int] | None:
    if not counts:
        return None
    return max(counts.items(), key=lambda item: item[1])


def _meal_type_fit(ctx: ReasonContext) -> str | None:
    heavy = ctx.menu.heavy_level
    if ctx.meal_type == "breakfast" and heavy == 1:
        return "아침에 딱 맞는 가벼운 메뉴예요."
    if ctx.meal_type == "dinner" and heavy == 3:
        return "저녁에 든든하게 드시기 좋은 메뉴예요."
    if ctx.meal_type == "lunch" and heavy == 2:
        return "점심으로 적당한 메뉴예요."
    return None


def _healthy_pick(ctx: ReasonContext) -> str | None:
    if ctx.preferences.prefer_healthy and (
        ctx.menu.protein == "vegetarian" or ctx.menu.base == "salad"
    ):
        return "건강을 생각하시는 분께 추천해요."
    return None


def _not_eaten_recently(ctx: ReasonContext) -> str | None:
    if ctx.recent_cuisines.get(ctx.menu.cuisine, 0) == 0:
        return f"최근 7일 동안 {CUISINE_LABELS[ctx.menu.cuisine]}을(를) 드시지 않아서 추천했어요."
    return None


def _other_cuisine_dominated(ctx: ReasonContext) -> str | None:
    top = _most_common(ctx.recent_cuisines)
    if top and top[0] != ctx.menu.cuisine and top[1] / len(ctx.records) > DOMINANT_CUISINE_RATIO:
        return f"{CUISINE_LABELS[top[0]]}이(가) 많았어서 다른 종류를 추천했어요."
    return None


def _other_base_dominated(ctx: ReasonContext) -> str | None:
    top = _most_common(ctx.recent_bases)
    if top and top[0] != ctx.menu.base and top[1] / len(ctx.records) > DOMINANT_BASE_RATIO:
        return (
            f"{BASE_LABELS[top[0]]} 요리가 많아 오늘은 "
            f"{BASE_LABELS[ctx.menu.base]} 메뉴를 추천했어요."
        )
    return None


def _soup_preference(ctx: ReasonContext) -> str | None:
    prefer_soup = ctx.preferences.prefer_soup
    if ctx.menu.has_soup and prefer_soup is True:
        return "국물 있는 메뉴를 선호하셔서 추천했어요."
    if not ctx.menu.has_soup and prefer_soup is False:
        return "비국물 메뉴를 선호하셔서 추천했어요."
    return None


def _picked_before(ctx: ReasonContext) -> str | None:
    if ctx.feedback_weight > 10:
        return "이전에 선택하신 적이 있어서 다시 추천해요."
    return None


def _preferred_cuisine(ctx: ReasonContext) -> str | None:
    if ctx.menu.cuisine in ctx.preferences.preferred_cuisines:
        return f"선호하시는 {CUISINE_LABELS[ctx.menu.cuisine]}이에요."
    return None


def _spicy_affinity(ctx: ReasonContext) -> str | None:
    # Literal text markers in recent entries, not a structured spicy history.
    if not 0 < ctx.menu.spicy_level <= ctx.preferences.max_spicy_level:
        return None
    if any(marker in r.menu_text for r in ctx.records for marker in SPICY_MARKERS):
        return "매운 음식을 좋아하시는 것 같아 추천했어요."
    return None


REASON_RULES: tuple[Callable[[ReasonContext], str | None], ...] = (
    _meal_type_fit,
    _healthy_pick,
    _not_eaten_recently,
    _other_cuisine_dominated,
    _other_base_dominated,
    _soup_preference,
    _picked_before,
    _preferred_cuisine,
    _spicy_affinity,
)


def generate_reason(ctx: ReasonContext, rng: random.Random | None = None) -> str:
    """Return the message of the first rule that applies, else a random fallback."""
    if not ctx.records:
        return FRESH_START_REASON

    for rule in REASON_RULES:
        message = rule(ctx)
        if message:
            return message

    return (rng or random).choice(FALLBACK_REASONS)
