from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from ..recommendations.engine import count_categories
from ..recommendations.models import (
    BASE_TYPES,
    CUISINE_TYPES,
    Feedback,
    FeedbackAction,
    InsightSummary,
    MealRecord,
    Menu,
)

TOP_N = 3
MAX_DIVERSITY = len(CUISINE_TYPES) + len(BASE_TYPES)


def _top_menus(
    feedback: Sequence[Feedback],
    catalog_by_id: dict[str, Menu],
    action: FeedbackAction,
) -> list[str]:
    # Counter keeps first-seen order, and most_common() is stable for ties.
    counter: Counter[str] = Counter()
    for fb in feedback:
        if fb.action == action and fb.menu_id in catalog_by_id:
            counter[fb.menu_id] += 1
    return [catalog_by_id[menu_id].display_name for menu_id, _ in counter.most_common(TOP_N)]


def calculate_insights(
    records: Sequence[MealRecord],
    catalog: Sequence[Menu],
    feedback: Sequence[Feedback],
) -> InsightSummary:
    recent_cuisines = count_categories(records, catalog, "cuisine")
    recent_bases = count_categories(records, catalog, "base")

    catalog_by_id: dict[str, Menu] = {}
    for menu in catalog:
        catalog_by_id.setdefault(menu.id, menu)

    diversity = round((len(recent_cuisines) + len(recent_bases)) / MAX_DIVERSITY * 100)

    return InsightSummary(
        recent_category_distribution=recent_cuisines,
        recent_base_distribution=recent_bases,
        top_liked=_top_menus(feedback, catalog_by_id, "select"),
        top_disliked=_top_menus(feedback, catalog_by_id, "reject"),
        diversity_score=min(100, diversity),
        total_records=len(records),
        total_feedback=len(feedback),
    )
