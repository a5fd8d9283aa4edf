from __future__ import annotations

import datetime as dt
import logging

from ..recommendations.models import MealRecordCreate, UserPreferences
from .memory import MemoryStore

logger = logging.getLogger(__name__)

# (days ago, meal type, catalog index); indexes wrap around the catalog size.
DEMO_MEALS: list[tuple[int, str, int]] = [
    (0, "lunch", 0),
    (0, "dinner", 28),
    (1, "breakfast", 81),
    (1, "lunch", 56),
    (1, "dinner", 15),
    (2, "lunch", 38),
    (2, "dinner", 93),
    (3, "lunch", 11),
    (3, "dinner", 44),
    (4, "lunch", 76),
    (4, "dinner", 2),
    (5, "lunch", 29),
    (5, "dinner", 89),
    (6, "lunch", 22),
    (6, "dinner", 51),
]

DEMO_PREFERENCES = UserPreferences(
    preferred_cuisines=["korean", "japanese"],
    preferred_bases=["rice", "noodle"],
    preferred_proteins=["pork", "chicken"],
    prefer_soup=None,
    max_spicy_level=2,
    preferred_heavy_level=2,
    preferred_price_range=["low", "medium"],
    onboarding_completed=True,
)


def fill_demo_data(store: MemoryStore, today: dt.date | None = None) -> int:
    """Replace records and feedback with a week of demo meals. Returns the record count."""
    store.clear_meal_records()
    store.clear_feedback()

    catalog = store.get_catalog()
    today = today or dt.date.today()
    created = 0
    if catalog:
        for days_ago, meal_type, index in DEMO_MEALS:
            menu = catalog[index % len(catalog)]
            store.create_meal_record(
                MealRecordCreate(
                    date=today - dt.timedelta(days=days_ago),
                    meal_type=meal_type,
                    menu_text=menu.display_name,
                ),
                canonical_menu_id=menu.id,
            )
            created += 1

    store.update_preferences(DEMO_PREFERENCES)
    logger.info("Demo data filled: %d meal records", created)
    return created
