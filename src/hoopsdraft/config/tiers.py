"""Player category labels, consistency ratings and rank tier bounds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class PlayerCategory(str, Enum):
    ELITE_CONSISTENT = "elite-consistent"
    RISING_STARS = "rising-stars"
    BREAKOUT_CANDIDATES = "breakout-candidates"
    DECLINING = "declining"
    VOLATILE = "volatile"
    RELIABLE_PRODUCERS = "reliable-producers"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CategoryInfo:
    title: str
    description: str
    color: str


CATEGORY_INFO: Dict[PlayerCategory, CategoryInfo] = {
    PlayerCategory.ELITE_CONSISTENT: CategoryInfo(
        title="Elite & Consistent",
        description="Top-tier players (avg rank <= 30) with low volatility. The safest high-end picks.",
        color="#00c851",
    ),
    PlayerCategory.RISING_STARS: CategoryInfo(
        title="Rising Stars",
        description="Players improving significantly (15+ rank improvement). Strong upward trajectory.",
        color="#0066cc",
    ),
    PlayerCategory.BREAKOUT_CANDIDATES: CategoryInfo(
        title="Breakout Candidates",
        description="Young players (<= 26) showing positive trends. High upside potential.",
        color="#ff8800",
    ),
    PlayerCategory.RELIABLE_PRODUCERS: CategoryInfo(
        title="Reliable Producers",
        description="Solid performers (avg rank <= 100) with consistent output. Safe mid-round picks.",
        color="#17a2b8",
    ),
    PlayerCategory.DECLINING: CategoryInfo(
        title="Declining",
        description="Players trending downward (15+ rank drop). Approach with caution.",
        color="#ff4444",
    ),
    PlayerCategory.VOLATILE: CategoryInfo(
        title="Volatile",
        description="Inconsistent performers with high variance. Risk/reward plays.",
        color="#ffc107",
    ),
}

# Ascending strict upper bounds on the rank standard deviation; first match wins.
CONSISTENCY_RATINGS: Tuple[Tuple[float, str], ...] = (
    (10.0, "Elite"),
    (20.0, "Very Good"),
    (30.0, "Good"),
    (50.0, "Average"),
)
CONSISTENCY_FALLBACK = "Volatile"

# Inclusive upper bounds on a rank.
RANK_TIERS: Tuple[Tuple[int, str], ...] = (
    (24, "tier-1"),
    (60, "tier-2"),
    (120, "tier-3"),
)


def get_category_info(category: PlayerCategory | str) -> CategoryInfo:
    """Fetch display info for a category label, raising KeyError if unknown."""

    try:
        key = PlayerCategory(category)
    except ValueError:
        raise KeyError(f"No player category named {category!r}") from None
    return CATEGORY_INFO[key]
