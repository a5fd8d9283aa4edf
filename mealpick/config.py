from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DEFAULT_CATALOG = Path(__file__).resolve().parent / "data" / "menus.csv"


@dataclass(frozen=True)
class AppConfig:
    catalog_path: Path = Path(os.getenv("MEALPICK_CATALOG_PATH", str(_DEFAULT_CATALOG)))
    match_confidence_threshold: float = float(os.getenv("MEALPICK_MATCH_THRESHOLD", "0.5"))
    suggestion_limit: int = int(os.getenv("MEALPICK_SUGGESTION_LIMIT", "8"))
    recent_window_days: int = 7
    log_level: str = os.getenv("MEALPICK_LOG_LEVEL", "INFO")


DEFAULT_APP_CONFIG = AppConfig()
