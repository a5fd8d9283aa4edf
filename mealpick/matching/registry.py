from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Sequence

from ..recommendations.models import Menu
from .matcher import MenuMatcher

logger = logging.getLogger(__name__)

_matchers: dict[str, MenuMatcher] = {}
_hits: int = 0
_misses: int = 0


def catalog_fingerprint(catalog: Sequence[Menu]) -> str:
    normalized = json.dumps(
        [menu.model_dump(mode="json") for menu in catalog],
        sort_keys=True,
        ensure_ascii=False,
    )
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def get_menu_matcher(catalog: Sequence[Menu]) -> MenuMatcher:
    """Return the matcher for *catalog*, building it once per distinct catalog."""
    global _hits, _misses
    key = catalog_fingerprint(catalog)
    matcher = _matchers.get(key)
    if matcher is not None:
        _hits += 1
        logger.debug("Menu matcher cache hit for catalog %s", key)
        return matcher
    _misses += 1
    logger.debug("Building menu matcher for catalog %s", key)
    matcher = MenuMatcher(catalog)
    _matchers[key] = matcher
    return matcher


def get_matcher_stats() -> dict:
    total = _hits + _misses
    return {
        "size": len(_matchers),
        "hits": _hits,
        "misses": _misses,
        "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
    }


def reset_menu_matchers() -> None:
    global _hits, _misses
    _matchers.clear()
    _hits = 0
    _misses = 0
