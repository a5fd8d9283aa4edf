from __future__ import annotations

import datetime as dt
import random

import pytest

from mealpick.recommendations.catalog import get_catalog
from mealpick.recommendations.engine import (
    MAX_RECOMMENDATIONS,
    calculate_feedback_weights,
    calculate_health_bonus,
    calculate_meal_type_bonus,
    calculate_preference_score,
    calculate_recommendations,
    calculate_repetition_penalty,
    count_categories,
    get_menu_candidates_by_category,
)
from mealpick.recommendations.models import (
    CUISINE_TYPES,
    Feedback,
    MealRecord,
    Menu,
    UserPreferences,
)
from mealpick.recommendations.reasons import FALLBACK_REASONS, FRESH_START_REASON

TODAY = dt.date(2026, 10, 16)


def _menu(menu_id: str = "a", **overrides) -> Menu:
    fields = {
        "id": menu_id,
        "canonical_name": menu_id,
        "display_name": f"메뉴{menu_id}",
        "cuisine": "korean",
        "base": "rice",
        "has_soup": False,
        "protein": "pork",
        "spicy_level": 0,
        "heavy_level": 2,
        "price_range": "medium",
    }
    fields.update(overrides)
    return Menu(**fields)


def _record(text: str, menu_id: str | None = None, days_ago: int = 0) -> MealRecord:
    return MealRecord(
        id=f"r-{text}-{days_ago}",
        date=TODAY - dt.timedelta(days=days_ago),
        meal_type="lunch",
        menu_text=text,
        canonical_menu_id=menu_id,
    )


def _feedback(menu_id: str, action: str, n: int = 0) -> Feedback:
    return Feedback(
        id=f"f-{menu_id}-{n}",
        menu_id=menu_id,
        action=action,
        timestamp=dt.datetime(2026, 10, 16, 12, 0, n, tzinfo=dt.timezone.utc),
    )


# ── Scenarios ────────────────────────────────────────────────────────────


def test_fresh_start_scenario():
    recs = calculate_recommendations([_menu("a")], [], UserPreferences(), [])
    assert len(recs) == 1
    rec = recs[0]
    assert rec.reason == FRESH_START_REASON
    assert rec.preference_score == 50
    assert rec.diversity_bonus == 50
    assert rec.repetition_penalty == 100
    assert rec.feedback_weight == 0


def test_feedback_weight_clamps_at_fifty():
    feedback = [_feedback("a", "select", n) for n in range(4)]
    assert calculate_feedback_weights(feedback) == {"a": 50}
    recs = calculate_recommendations([_menu("a")], [], UserPreferences(), feedback)
    assert recs[0].feedback_weight == 50


def test_feedback_weight_mixes_actions():
    feedback = [
        _feedback("a", "select", 0),
        _feedback("a", "reject", 1),
        _feedback("b", "skip", 2),
        _feedback("c", "reject", 3),
        _feedback("c", "reject", 4),
        _feedback("c", "reject", 5),
    ]
    assert calculate_feedback_weights(feedback) == {"a": -10, "b": 0, "c": -50}


# ── Preference score ─────────────────────────────────────────────────────


def test_matching_preferences_beat_neutral_preferences():
    menu = _menu("a", has_soup=True, spicy_level=1, heavy_level=2, price_range="low")
    prefs = UserPreferences(
        preferred_cuisines=["korean"],
        preferred_bases=["rice"],
        preferred_proteins=["pork"],
        prefer_soup=True,
        max_spicy_level=1,
        preferred_heavy_level=2,
        preferred_price_range=["low"],
    )
    neutral = UserPreferences(max_spicy_level=3)
    assert calculate_preference_score(menu, neutral) == 50
    # 50 + 20 + 15 + 15 + 10 + 5
    assert calculate_preference_score(menu, prefs) == 100


def test_preference_penalties():
    menu = _menu("a", cuisine="chinese", spicy_level=3, heavy_level=3, price_range="high")
    prefs = UserPreferences(
        preferred_cuisines=["korean"],
        max_spicy_level=1,
        preferred_heavy_level=1,
        preferred_price_range=["low"],
    )
    # 50 - 5 - 30 - 16 - 10
    assert calculate_preference_score(menu, prefs) == 0


def test_preference_score_clamped_to_range():
    menu = _menu("a", spicy_level=3, heavy_level=3, price_range="high", has_soup=True)
    prefs = UserPreferences(
        preferred_cuisines=["chinese"],
        preferred_bases=["noodle"],
        preferred_proteins=["beef"],
        prefer_soup=False,
        max_spicy_level=0,
        preferred_heavy_level=1,
        preferred_price_range=["low"],
    )
    assert calculate_preference_score(menu, prefs) == 0


# ── Diversity & repetition ───────────────────────────────────────────────


def test_diversity_rewards_unseen_cuisine_and_base():
    korean = _menu("k", display_name="김치찌개")
    western = _menu("w", display_name="파스타", cuisine="western", base="noodle")
    records = [_record("김치찌개", "k", d) for d in range(3)]
    recs = {r.menu.id: r for r in calculate_recommendations([korean, western], records, UserPreferences(), [])}
    assert recs["w"].diversity_bonus == 100
    # ratio 1.0 for both cuisine and base: 50 - 30 - 20
    assert recs["k"].diversity_bonus == 0


def test_repeated_menu_penalty():
    menu = _menu("a", display_name="김치찌개")
    penalty = calculate_repetition_penalty(menu, {"a"}, set(), {})
    assert penalty <= 20
    assert calculate_repetition_penalty(menu, {"a"}, {"김치찌개"}, {"korean": 3}) == 0
    assert calculate_repetition_penalty(menu, set(), set(), {"korean": 2}) == 85


def test_recent_menu_in_history_scores_low_repetition():
    menu = _menu("a", display_name="김치찌개")
    records = [_record("김치찌개", "a")]
    recs = calculate_recommendations([menu], records, UserPreferences(), [])
    assert recs[0].repetition_penalty <= 20


def test_unmatched_text_record_still_penalized():
    menu = _menu("a", display_name="김치찌개")
    records = [_record("김치찌개")]
    recs = calculate_recommendations([menu], records, UserPreferences(), [])
    # text match (-70) plus id resolution by name in category counting
    assert recs[0].repetition_penalty == 30


def test_count_categories_resolves_by_id_or_name():
    catalog = [_menu("a", display_name="김치찌개"), _menu("b", display_name="파스타", cuisine="western")]
    records = [_record("김치찌개"), _record("whatever", "b"), _record("모르는메뉴")]
    assert count_categories(records, catalog, "cuisine") == {"korean": 1, "western": 1}


# ── Meal type, health, favorites ─────────────────────────────────────────


def test_meal_type_bonus():
    light = _menu("l", heavy_level=1)
    heavy = _menu("h", heavy_level=3)
    assert calculate_meal_type_bonus(light, None) == 0
    assert calculate_meal_type_bonus(light, "breakfast") == 25
    assert calculate_meal_type_bonus(heavy, "breakfast") == -20
    assert calculate_meal_type_bonus(heavy, "dinner") == 25
    assert calculate_meal_type_bonus(_menu("m"), "dinner") == 15
    assert calculate_meal_type_bonus(_menu("m"), "snack") == -20


def test_health_bonus_with_fitness_goals():
    salad = _menu("s", base="salad", protein="vegetarian", heavy_level=1)
    steak = _menu("t", protein="beef", heavy_level=3)
    assert calculate_health_bonus(salad, UserPreferences()) == 0
    assert calculate_health_bonus(salad, UserPreferences(prefer_healthy=True)) == 30
    assert calculate_health_bonus(salad, UserPreferences(prefer_healthy=True, fitness_goal="diet")) == 55
    assert calculate_health_bonus(steak, UserPreferences(prefer_healthy=True, fitness_goal="diet")) == -35
    assert calculate_health_bonus(steak, UserPreferences(prefer_healthy=True, fitness_goal="muscle")) == 10


def test_favorite_raises_score():
    plain = _menu("a")
    favorite = _menu("b")
    prefs = UserPreferences(favorite_menu_ids=["b"])
    recs = calculate_recommendations([plain, favorite], [], prefs, [])
    assert [r.menu.id for r in recs] == ["b", "a"]
    assert recs[0].score - recs[1].score == pytest.approx(1.0)


# ── Ranking ──────────────────────────────────────────────────────────────


def test_output_capped_and_sorted():
    catalog = get_catalog()
    records = [_record("김치찌개", "kimchi-jjigae"), _record("짜장면", "jajangmyeon", 1)]
    feedback = [_feedback("pizza", "select"), _feedback("udon", "reject", 1)]
    recs = calculate_recommendations(catalog, records, UserPreferences(), feedback, "lunch")
    assert len(recs) <= MAX_RECOMMENDATIONS
    scores = [r.score for r in recs]
    assert scores == sorted(scores, reverse=True)
    assert all(r.score > -50 for r in recs)


def test_excluded_ids_never_returned():
    catalog = get_catalog()
    excluded = {m.id for m in catalog[:40]}
    recs = calculate_recommendations(catalog, [], UserPreferences(), [], exclude_ids=excluded)
    assert recs
    assert not excluded & {r.menu.id for r in recs}


def test_ties_keep_catalog_order():
    catalog = [_menu(str(i)) for i in range(5)]
    recs = calculate_recommendations(catalog, [], UserPreferences(), [])
    assert [r.menu.id for r in recs] == ["0", "1", "2", "3", "4"]


def test_empty_catalog():
    assert calculate_recommendations([], [], UserPreferences(), []) == []


# ── Onboarding candidates ────────────────────────────────────────────────


def test_candidates_respect_spicy_limit():
    catalog = get_catalog()
    prefs = UserPreferences(max_spicy_level=0)
    for _ in range(2):
        candidates = get_menu_candidates_by_category(catalog, prefs)
        assert list(candidates) == list(CUISINE_TYPES)
        for menus in candidates.values():
            assert len(menus) <= 8
            assert all(m.spicy_level == 0 for m in menus)


def test_candidates_deterministic_with_seeded_rng():
    catalog = get_catalog()
    prefs = UserPreferences(max_spicy_level=3)
    first = get_menu_candidates_by_category(catalog, prefs, random.Random(7))
    second = get_menu_candidates_by_category(catalog, prefs, random.Random(7))
    assert first == second
    assert all(m.cuisine == "korean" for m in first["korean"])


def test_fallback_reason_uses_injected_rng():
    menu = _menu("a", cuisine="korean", base="rice")
    records = [_record("메뉴a", "a")]
    reasons = {
        calculate_recommendations([menu], records, UserPreferences(), [], rng=random.Random(seed))[0].reason
        for seed in range(20)
    }
    assert reasons <= set(FALLBACK_REASONS)
