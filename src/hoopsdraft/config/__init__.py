"""Configuration helpers for stat categories, player tiers and settings."""

from .stats import (
    STAT_CATEGORY_KEYS,
    STAT_MODES,
    StatCategory,
    get_stat_category,
    iter_stat_categories,
    stat_value,
)
from .tiers import (
    CATEGORY_INFO,
    CategoryInfo,
    PlayerCategory,
    get_category_info,
)

__all__ = [
    "CATEGORY_INFO",
    "CategoryInfo",
    "PlayerCategory",
    "STAT_CATEGORY_KEYS",
    "STAT_MODES",
    "StatCategory",
    "get_category_info",
    "get_stat_category",
    "iter_stat_categories",
    "stat_value",
]
