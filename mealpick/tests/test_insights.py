from __future__ import annotations

import datetime as dt

from mealpick.analytics.insights import calculate_insights
from mealpick.recommendations.models import Feedback, MealRecord, Menu


def _menu(menu_id: str, name: str, cuisine: str, base: str) -> Menu:
    return Menu(
        id=menu_id, canonical_name=menu_id, display_name=name, cuisine=cuisine, base=base,
        has_soup=False, protein="pork", spicy_level=0, heavy_level=2, price_range="medium",
    )


CATALOG = [
    _menu("kimchi", "김치찌개", "korean", "rice"),
    _menu("pasta", "파스타", "western", "noodle"),
    _menu("ramen", "라멘", "japanese", "noodle"),
    _menu("salad", "샐러드", "western", "salad"),
]


def _record(text: str, menu_id: str | None = None) -> MealRecord:
    return MealRecord(
        id=f"r-{text}",
        date=dt.date(2026, 10, 16),
        meal_type="dinner",
        menu_text=text,
        canonical_menu_id=menu_id,
    )


def _feedback(items: list[tuple[str, str]]) -> list[Feedback]:
    start = dt.datetime(2026, 10, 16, 12, tzinfo=dt.timezone.utc)
    return [
        Feedback(id=f"f{i}", menu_id=menu_id, action=action, timestamp=start - dt.timedelta(minutes=i))
        for i, (menu_id, action) in enumerate(items)
    ]


def test_empty_history():
    summary = calculate_insights([], CATALOG, [])
    assert summary.recent_category_distribution == {}
    assert summary.recent_base_distribution == {}
    assert summary.top_liked == []
    assert summary.top_disliked == []
    assert summary.diversity_score == 0
    assert summary.total_records == 0
    assert summary.total_feedback == 0


def test_distributions_and_diversity():
    records = [
        _record("김치찌개", "kimchi"),
        _record("파스타", "pasta"),
        _record("파스타"),
        _record("알수없는메뉴"),
    ]
    summary = calculate_insights(records, CATALOG, [])
    assert summary.recent_category_distribution == {"korean": 1, "western": 2}
    assert summary.recent_base_distribution == {"rice": 1, "noodle": 2}
    # 2 cuisines + 2 bases out of 12
    assert summary.diversity_score == 33
    assert summary.total_records == 4


def test_top_liked_and_disliked():
    feedback = _feedback([
        ("ramen", "select"),
        ("pasta", "select"),
        ("pasta", "select"),
        ("salad", "select"),
        ("kimchi", "select"),
        ("salad", "reject"),
        ("ghost", "reject"),
        ("ramen", "skip"),
    ])
    summary = calculate_insights([], CATALOG, feedback)
    assert summary.top_liked == ["파스타", "라멘", "샐러드"]
    assert summary.top_disliked == ["샐러드"]
    assert summary.total_feedback == 8


def test_insights_are_idempotent():
    records = [_record("라멘", "ramen")]
    feedback = _feedback([("ramen", "select")])
    assert calculate_insights(records, CATALOG, feedback) == calculate_insights(records, CATALOG, feedback)
