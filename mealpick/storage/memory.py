from __future__ import annotations

import datetime as dt
import logging
import uuid
from collections.abc import Sequence

from ..config import DEFAULT_APP_CONFIG
from ..recommendations.catalog import get_catalog
from ..recommendations.models import (
    Feedback,
    FeedbackCreate,
    MealRecord,
    MealRecordCreate,
    Menu,
    UserPreferences,
)

logger = logging.getLogger(__name__)


class MemoryStore:
    """Single-tenant in-memory store for meal records, preferences and feedback.

    Readers get copies, so callers can treat every result as a snapshot.
    """

    def __init__(
        self,
        catalog: Sequence[Menu],
        recent_window_days: int = DEFAULT_APP_CONFIG.recent_window_days,
    ) -> None:
        self._catalog = tuple(catalog)
        self._recent_window_days = recent_window_days
        self._records: dict[str, MealRecord] = {}
        self._preferences = UserPreferences()
        self._feedback: dict[str, Feedback] = {}

    # ── Catalog ─────────────────────────────────────────────────────────

    def get_catalog(self) -> tuple[Menu, ...]:
        return self._catalog

    def find_menu_by_name(self, name: str) -> Menu | None:
        normalized = name.lower().strip()
        for menu in self._catalog:
            if (
                menu.display_name.lower() == normalized
                or menu.canonical_name.lower() == normalized
                or any(s.lower() == normalized for s in menu.synonyms)
            ):
                return menu
        return None

    # ── Meal records ────────────────────────────────────────────────────

    def list_recent_meal_records(self, today: dt.date | None = None) -> list[MealRecord]:
        """Records from the trailing window, newest date first."""
        cutoff = (today or dt.date.today()) - dt.timedelta(days=self._recent_window_days)
        recent = [r for r in self._records.values() if r.date >= cutoff]
        return sorted(recent, key=lambda r: r.date, reverse=True)

    def get_meal_record(self, record_id: str) -> MealRecord | None:
        return self._records.get(record_id)

    def create_meal_record(
        self,
        body: MealRecordCreate,
        canonical_menu_id: str | None = None,
    ) -> MealRecord:
        if canonical_menu_id is None:
            menu = self.find_menu_by_name(body.menu_text)
            canonical_menu_id = menu.id if menu else None
        record = MealRecord(
            **body.model_dump(),
            id=str(uuid.uuid4()),
            canonical_menu_id=canonical_menu_id,
        )
        self._records[record.id] = record
        return record

    def delete_meal_record(self, record_id: str) -> bool:
        return self._records.pop(record_id, None) is not None

    def clear_meal_records(self) -> None:
        self._records.clear()

    # ── Preferences ─────────────────────────────────────────────────────

    def get_preferences(self) -> UserPreferences:
        return self._preferences.model_copy(deep=True)

    def update_preferences(self, preferences: UserPreferences) -> UserPreferences:
        self._preferences = preferences.model_copy(deep=True)
        return self.get_preferences()

    # ── Feedback ────────────────────────────────────────────────────────

    def list_feedback(self) -> list[Feedback]:
        """Feedback log, newest first."""
        return sorted(self._feedback.values(), key=lambda f: f.timestamp, reverse=True)

    def create_feedback(self, body: FeedbackCreate) -> Feedback:
        feedback = Feedback(
            **body.model_dump(),
            id=str(uuid.uuid4()),
            timestamp=dt.datetime.now(dt.timezone.utc),
        )
        self._feedback[feedback.id] = feedback
        return feedback

    def clear_feedback(self) -> None:
        self._feedback.clear()

    def reset(self) -> None:
        self.clear_meal_records()
        self.clear_feedback()
        self._preferences = UserPreferences()


_store: MemoryStore | None = None


def get_store() -> MemoryStore:
    """Return the process-wide store; used as a FastAPI dependency."""
    global _store
    if _store is None:
        _store = MemoryStore(get_catalog())
    return _store
