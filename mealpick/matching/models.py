from __future__ import annotations

from pydantic import Field

from ..recommendations.models import CamelModel, CuisineType, MatchType, Menu


class MatchResult(CamelModel):
    menu: Menu | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    match_type: MatchType = "none"


class MenuSuggestion(CamelModel):
    menu: Menu
    confidence: float = Field(..., ge=0.0, le=1.0)


class SuggestionOut(CamelModel):
    id: str
    display_name: str
    cuisine: CuisineType
    confidence: float
