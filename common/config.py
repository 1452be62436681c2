"""Configuration values for the expense tracker."""

from __future__ import annotations

import os
from typing import Mapping, Optional, Tuple

CATEGORIES_ENV = "EXPENSE_TRACKER_CATEGORIES"
LOG_LEVEL_ENV = "EXPENSE_TRACKER_LOG_LEVEL"

DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "Food",
    "Rent",
    "Transport",
    "Clothing",
    "Internet",
    "Beautiful",
    "Marketplaces",
    "Nalogi",
    "Health",
    "Gifts",
)

DEFAULT_LOG_LEVEL = "INFO"


def split_categories(raw: str) -> Tuple[str, ...]:
    """Split a comma-separated category list, dropping blank entries."""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def categories_from_env(environ: Optional[Mapping[str, str]] = None) -> Tuple[str, ...]:
    env = os.environ if environ is None else environ
    raw = env.get(CATEGORIES_ENV)
    if not raw:
        return DEFAULT_CATEGORIES
    return split_categories(raw) or DEFAULT_CATEGORIES


def log_level_from_env(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return env.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
