from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from ..config import DEFAULT_APP_CONFIG
from .models import Menu

logger = logging.getLogger(__name__)

CATALOG_COLUMNS: list[str] = [
    "id",
    "canonical_name",
    "display_name",
    "cuisine",
    "base",
    "has_soup",
    "protein",
    "spicy_level",
    "heavy_level",
    "price_range",
    "synonyms",
]

_catalog: tuple[Menu, ...] | None = None


def _split_synonyms(raw: str) -> tuple[str, ...]:
    return tuple(s.strip() for s in raw.split("|") if s.strip())


def load_catalog(path: Path) -> tuple[Menu, ...]:
    """Read and validate a menu catalog CSV. Raises ``ValueError`` on bad rows."""
    df = pd.read_csv(path, dtype={"id": str, "synonyms": str})

    missing = [c for c in CATALOG_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Catalog {path} is missing columns: {missing}")

    df["synonyms"] = df["synonyms"].fillna("").apply(_split_synonyms)

    duplicated = df.loc[df["id"].duplicated(), "id"].tolist()
    if duplicated:
        raise ValueError(f"Duplicate menu ids in catalog: {duplicated}")

    menus: list[Menu] = []
    for row in df[CATALOG_COLUMNS].to_dict(orient="records"):
        try:
            menus.append(Menu(**row))
        except ValidationError as exc:
            raise ValueError(f"Invalid catalog row {row.get('id')!r}: {exc}") from exc

    logger.info("Loaded %d menus from %s", len(menus), path)
    return tuple(menus)


def get_catalog() -> tuple[Menu, ...]:
    """Return the process-wide menu catalog, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog(DEFAULT_APP_CONFIG.catalog_path)
    return _catalog
