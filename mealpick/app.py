from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse

from .analytics.insights import calculate_insights
from .config import DEFAULT_APP_CONFIG
from .matching.matcher import MenuMatcher
from .matching.models import SuggestionOut
from .matching.registry import get_menu_matcher
from .recommendations.engine import (
    calculate_recommendations,
    get_menu_candidates_by_category,
)
from .recommendations.models import (
    BASE_LABELS,
    CUISINE_LABELS,
    MEAL_TYPE_LABELS,
    MEAL_TYPES,
    PRICE_LABELS,
    PROTEIN_LABELS,
    Feedback,
    FeedbackCreate,
    InsightSummary,
    MealRecord,
    MealRecordCreate,
    MealRecordCreated,
    Menu,
    Recommendation,
    UserPreferences,
)
from .storage.demo import fill_demo_data
from .storage.memory import MemoryStore, get_store

logging.basicConfig(level=DEFAULT_APP_CONFIG.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Meal Menu Recommendation API", version="1.0.0")


def get_matcher(store: MemoryStore = Depends(get_store)) -> MenuMatcher:
    return get_menu_matcher(store.get_catalog())


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/metadata")
def metadata(store: MemoryStore = Depends(get_store)) -> dict:
    return {
        "menuCount": len(store.get_catalog()),
        "cuisines": CUISINE_LABELS,
        "bases": BASE_LABELS,
        "proteins": PROTEIN_LABELS,
        "mealTypes": MEAL_TYPE_LABELS,
        "priceRanges": PRICE_LABELS,
    }


@app.get("/api/menus", response_model=list[Menu])
def menus(store: MemoryStore = Depends(get_store)) -> list[Menu]:
    return list(store.get_catalog())


# ── Meal records ─────────────────────────────────────────────────────────


@app.get("/api/meal-records", response_model=list[MealRecord])
def list_meal_records(store: MemoryStore = Depends(get_store)) -> list[MealRecord]:
    return store.list_recent_meal_records()


@app.post(
    "/api/meal-records",
    status_code=201,
    response_model=MealRecordCreated,
    response_model_exclude_none=True,
)
def create_meal_record(
    body: MealRecordCreate,
    store: MemoryStore = Depends(get_store),
    matcher: MenuMatcher = Depends(get_matcher),
) -> MealRecordCreated:
    match = matcher.find_best_match(body.menu_text)

    final_text = body.menu_text
    matched_menu_id = None
    if match.menu is not None and match.confidence >= DEFAULT_APP_CONFIG.match_confidence_threshold:
        final_text = match.menu.display_name
        matched_menu_id = match.menu.id

    record = store.create_meal_record(
        body.model_copy(update={"menu_text": final_text}),
        canonical_menu_id=matched_menu_id,
    )
    logger.debug(
        "Meal entry %r resolved as %s (%.2f)", body.menu_text, match.match_type, match.confidence,
    )

    return MealRecordCreated(
        **record.model_dump(),
        matched_menu_id=matched_menu_id,
        match_confidence=match.confidence,
        match_type=match.match_type,
        original_input=body.menu_text if body.menu_text != final_text else None,
    )


@app.delete("/api/meal-records/{record_id}", status_code=204)
def delete_meal_record(record_id: str, store: MemoryStore = Depends(get_store)) -> Response:
    if not store.delete_meal_record(record_id):
        raise HTTPException(status_code=404, detail="Record not found")
    return Response(status_code=204)


@app.get("/api/menu-suggestions", response_model=list[SuggestionOut])
def menu_suggestions(
    q: str = "",
    matcher: MenuMatcher = Depends(get_matcher),
) -> list[SuggestionOut]:
    if not q:
        return []
    suggestions = matcher.find_suggestions(q, DEFAULT_APP_CONFIG.suggestion_limit)
    return [
        SuggestionOut(
            id=s.menu.id,
            display_name=s.menu.display_name,
            cuisine=s.menu.cuisine,
            confidence=s.confidence,
        )
        for s in suggestions
    ]


# ── Preferences ──────────────────────────────────────────────────────────


@app.get("/api/preferences", response_model=UserPreferences)
def get_preferences(store: MemoryStore = Depends(get_store)) -> UserPreferences:
    return store.get_preferences()


@app.put("/api/preferences", response_model=UserPreferences)
def update_preferences(
    body: UserPreferences,
    store: MemoryStore = Depends(get_store),
) -> UserPreferences:
    return store.update_preferences(body)


# ── Recommendations ──────────────────────────────────────────────────────


@app.get("/api/recommendations", response_model=list[Recommendation])
def recommendations(
    meal_type: str | None = Query(default=None, alias="mealType"),
    exclude_ids: str | None = Query(default=None, alias="excludeIds"),
    store: MemoryStore = Depends(get_store),
) -> list[Recommendation]:
    # Unknown meal types are ignored rather than rejected.
    valid_meal_type = meal_type if meal_type in MEAL_TYPES else None
    excluded = [i for i in exclude_ids.split(",") if i] if exclude_ids else None

    return calculate_recommendations(
        store.get_catalog(),
        store.list_recent_meal_records(),
        store.get_preferences(),
        store.list_feedback(),
        valid_meal_type,
        excluded,
    )


@app.get("/api/menu-candidates", response_model=dict[str, list[Menu]])
def menu_candidates(store: MemoryStore = Depends(get_store)) -> dict[str, list[Menu]]:
    return get_menu_candidates_by_category(store.get_catalog(), store.get_preferences())


# ── Feedback & insights ──────────────────────────────────────────────────


@app.post("/api/feedback", status_code=201, response_model=Feedback)
def feedback(body: FeedbackCreate, store: MemoryStore = Depends(get_store)) -> Feedback:
    return store.create_feedback(body)


@app.get("/api/insights", response_model=InsightSummary)
def insights(store: MemoryStore = Depends(get_store)) -> InsightSummary:
    return calculate_insights(
        store.list_recent_meal_records(),
        store.get_catalog(),
        store.list_feedback(),
    )


# ── Demo ─────────────────────────────────────────────────────────────────


@app.post("/api/demo/fill-data")
def demo_fill_data(store: MemoryStore = Depends(get_store)) -> dict:
    created = fill_demo_data(store)
    return {"success": True, "message": "Demo data filled successfully", "records": created}
