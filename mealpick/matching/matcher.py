"""
Menu matcher: resolve free-text dish names to catalog menus.

Resolution is a cascade from near-certain to noisy signals; the first step
that succeeds decides the result:

exact -> alias -> normalized -> partial -> chosung -> fuzzy -> decomposed -> none
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from rapidfuzz import fuzz, process

from ..recommendations.models import Menu
from .aliases import AliasTable
from .hangul import decompose, extract_lead_consonants
from .models import MatchResult, MenuSuggestion

logger = logging.getLogger(__name__)

FIELD_WEIGHTS: dict[str, float] = {
    "display_name": 1.0,
    "synonyms": 1.0,
    "decomposed": 0.9,
    "aliases": 0.9,
    "lead_consonants": 0.8,
}
SEARCH_THRESHOLD = 0.4  # max distance kept in the search index
MIN_QUERY_LENGTH = 2

EXACT_CONFIDENCE = 1.0
ALIAS_CONFIDENCE = 0.95
NORMALIZED_CONFIDENCE = 0.95
PARTIAL_CONFIDENCE = 0.85
CHOSUNG_CONFIDENCE = 0.75
FUZZY_MIN_CONFIDENCE = 0.5
DECOMPOSED_MIN_CONFIDENCE = 0.45
MIN_CHOSUNG_LENGTH = 2

_DECORATION_RE = re.compile(r"[~!?.,\s]+")


def _normalize(text: str) -> str:
    return _DECORATION_RE.sub("", text.lower().strip())


@dataclass(frozen=True)
class _SearchFields:
    menu: Menu
    display_name: str
    normalized: str
    decomposed: str
    lead_consonants: str
    aliases: tuple[str, ...]
    synonyms: tuple[str, ...]


class MenuMatcher:
    def __init__(self, catalog: Iterable[Menu]) -> None:
        menus = list(catalog)
        self._aliases = AliasTable(menus)
        self._fields: list[_SearchFields] = []
        self._exact: dict[str, Menu] = {}

        for menu in menus:
            name = menu.display_name.lower()
            self._fields.append(_SearchFields(
                menu=menu,
                display_name=name,
                normalized=_normalize(name),
                decomposed=decompose(name),
                lead_consonants=extract_lead_consonants(name),
                aliases=tuple(a.lower() for a in AliasTable.aliases_for(menu.display_name)),
                synonyms=tuple(s.lower() for s in menu.synonyms),
            ))
            self._exact.setdefault(name, menu)

        # Flat index: one choice string per (menu, field value).
        self._choices: list[str] = []
        self._owners: list[tuple[int, float]] = []
        for position, fields in enumerate(self._fields):
            for field_name, weight in FIELD_WEIGHTS.items():
                values = getattr(fields, field_name)
                if isinstance(values, str):
                    values = (values,)
                for value in values:
                    if value:
                        self._choices.append(value)
                        self._owners.append((position, weight))

        logger.debug(
            "Built menu matcher: %d menus, %d index entries", len(self._fields), len(self._choices),
        )

    @property
    def alias_table(self) -> AliasTable:
        return self._aliases

    def _search(self, query: str) -> list[tuple[Menu, float]]:
        """Weighted approximate search; best similarity first, ties in catalog order."""
        query = query.strip().lower()
        if len(query) < MIN_QUERY_LENGTH or not self._choices:
            return []

        min_similarity = 1.0 - SEARCH_THRESHOLD
        hits = process.extract(
            query,
            self._choices,
            scorer=fuzz.WRatio,
            limit=None,
            score_cutoff=min_similarity * 100,
        )

        best: dict[int, float] = {}
        for _, score, index in hits:
            position, weight = self._owners[index]
            similarity = score / 100 * weight
            if similarity > best.get(position, 0.0):
                best[position] = similarity

        ranked = sorted(
            ((pos, sim) for pos, sim in best.items() if sim >= min_similarity),
            key=lambda item: (-item[1], item[0]),
        )
        return [(self._fields[pos].menu, round(sim, 4)) for pos, sim in ranked]

    def find_best_match(self, text: str) -> MatchResult:
        trimmed = (text or "").lower().strip()
        normalized = _normalize(trimmed)
        if not normalized:
            return MatchResult()

        menu = self._exact.get(trimmed)
        if menu is not None:
            return MatchResult(menu=menu, confidence=EXACT_CONFIDENCE, match_type="exact")

        target = self._aliases.lookup(trimmed)
        if target is not None and target in self._exact:
            return MatchResult(menu=self._exact[target], confidence=ALIAS_CONFIDENCE, match_type="alias")

        for fields in self._fields:
            if fields.normalized == normalized:
                return MatchResult(
                    menu=fields.menu, confidence=NORMALIZED_CONFIDENCE, match_type="normalized",
                )

        for fields in self._fields:
            if normalized in fields.normalized or fields.normalized in normalized:
                return MatchResult(menu=fields.menu, confidence=PARTIAL_CONFIDENCE, match_type="partial")

        lead = extract_lead_consonants(trimmed)
        if len(lead) >= MIN_CHOSUNG_LENGTH:
            for fields in self._fields:
                if fields.lead_consonants == lead:
                    return MatchResult(
                        menu=fields.menu, confidence=CHOSUNG_CONFIDENCE, match_type="chosung",
                    )

        hits = self._search(trimmed)
        if hits and hits[0][1] >= FUZZY_MIN_CONFIDENCE:
            menu, confidence = hits[0]
            return MatchResult(menu=menu, confidence=confidence, match_type="fuzzy")

        hits = self._search(decompose(trimmed))
        if hits and hits[0][1] >= DECOMPOSED_MIN_CONFIDENCE:
            menu, confidence = hits[0]
            return MatchResult(menu=menu, confidence=confidence, match_type="decomposed")

        return MatchResult()

    def find_suggestions(self, text: str, limit: int = 5) -> list[MenuSuggestion]:
        if not text or limit < 1:
            return []
        return [
            MenuSuggestion(menu=menu, confidence=confidence)
            for menu, confidence in self._search(text)[:limit]
        ]
