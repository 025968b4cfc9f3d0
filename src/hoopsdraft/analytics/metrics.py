"""Per-player derived metrics: trends, ADP value, consistency and categories.

Every function here is a pure computation over one ``Player``. Seasons are
always processed oldest first; season ids of the form ``YYYY-YYYY`` sort
chronologically. Missing inputs yield ``None`` rather than raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from statistics import fmean, pstdev
from typing import Dict, List, Literal, Optional, Sequence, Tuple

from hoopsdraft.config.stats import STAT_CATEGORY_KEYS, get_stat_category, stat_value
from hoopsdraft.config.tiers import (
    CONSISTENCY_FALLBACK,
    CONSISTENCY_RATINGS,
    RANK_TIERS,
    PlayerCategory,
)
from hoopsdraft.models import Player, SeasonRecord


RankType = Literal["per_game", "total"]
RANK_TYPES: Tuple[str, ...] = ("per_game", "total")

BREAKOUT_THRESHOLD = 4.0
PRIME_AGE_MIN = 22
PRIME_AGE_MAX = 26


@dataclass(frozen=True)
class PlayerTrends:
    rank_change: Optional[int] = None
    rank_slope: Optional[float] = None
    category_trends: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class AdpValue:
    adp: float
    roto_rank: int
    value: float
    percentage: float


@dataclass(frozen=True)
class QualifyingSeason:
    season: str
    rank: int
    games: int
    age: Optional[int]


@dataclass(frozen=True)
class RankProfile:
    """Rank statistics over a player's qualifying seasons."""

    avg_rank: float
    consistency: float
    best_rank: int
    worst_rank: int
    rank_range: int
    rank_trend: int
    age: Optional[int]
    seasons: Tuple[QualifyingSeason, ...]

    @property
    def seasons_analyzed(self) -> int:
        return len(self.seasons)


@dataclass(frozen=True)
class BreakoutScore:
    score: float
    reasons: Tuple[str, ...]
    trends: PlayerTrends
    value: Optional[AdpValue]

    @property
    def qualifies(self) -> bool:
        return self.score >= BREAKOUT_THRESHOLD


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _check_rank_type(rank_type: str) -> None:
    if rank_type not in RANK_TYPES:
        raise ValueError(f"rank_type must be one of {RANK_TYPES}, got {rank_type!r}")


def sorted_seasons(player: Player) -> List[Tuple[str, SeasonRecord]]:
    return sorted(player.seasons.items())


def latest_season(player: Player) -> Optional[SeasonRecord]:
    if not player.seasons:
        return None
    return player.seasons[max(player.seasons)]


def season_data(player: Player, season: str) -> Optional[SeasonRecord]:
    return player.seasons.get(season)


def season_rank(record: SeasonRecord, rank_type: str = "per_game") -> Optional[int]:
    """Rank of the requested type, or None when the season was not ranked."""

    _check_rank_type(rank_type)
    rank = record.ranks.per_game_rank if rank_type == "per_game" else record.ranks.total_rank
    return rank or None


def primary_rank(record: SeasonRecord) -> Optional[int]:
    return record.ranks.per_game_rank or record.ranks.total_rank or None


def games_played(record: SeasonRecord) -> int:
    return record.meta.games_played or 0


def calculate_slope(values: Sequence[float]) -> Optional[float]:
    """Least-squares slope of ``values`` against their index."""

    n = len(values)
    if n < 2:
        return None
    sum_x = n * (n - 1) / 2
    sum_y = sum(values)
    sum_xy = sum(x * y for x, y in enumerate(values))
    sum_xx = sum(x * x for x in range(n))
    return (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)


def calculate_trends(player: Player) -> Optional[PlayerTrends]:
    seasons = [record for _, record in sorted_seasons(player)]
    if len(seasons) < 2:
        return None

    rank_change: Optional[int] = None
    rank_slope: Optional[float] = None
    first_rank = primary_rank(seasons[0])
    last_rank = primary_rank(seasons[-1])
    if first_rank and last_rank:
        rank_change = first_rank - last_rank
        rank_slope = rank_change / (len(seasons) - 1)

    category_trends: Dict[str, float] = {}
    for key in STAT_CATEGORY_KEYS:
        values = [value for value in (stat_value(record, key) for record in seasons) if value is not None]
        slope = calculate_slope(values)
        if slope is not None:
            category_trends[key] = slope

    return PlayerTrends(rank_change=rank_change, rank_slope=rank_slope, category_trends=category_trends)


def value_vs_adp(player: Player) -> Optional[AdpValue]:
    """Compare ADP with the latest season rank; positive value means the player outperformed their ADP."""

    if player.adp is None or not player.adp.value:
        return None
    latest = latest_season(player)
    if latest is None:
        return None
    rank = primary_rank(latest)
    if not rank:
        return None
    adp = player.adp.value
    value = adp - rank
    return AdpValue(adp=adp, roto_rank=rank, value=value, percentage=value / adp * 100)


def standard_deviation(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return pstdev(values)


def consistency_rating(std_dev: float) -> str:
    for bound, label in CONSISTENCY_RATINGS:
        if std_dev < bound:
            return label
    return CONSISTENCY_FALLBACK


def qualifying_seasons(
    player: Player,
    *,
    min_games: int = 20,
    rank_type: str = "per_game",
) -> List[QualifyingSeason]:
    _check_rank_type(rank_type)
    result: List[QualifyingSeason] = []
    for season, record in sorted_seasons(player):
        games = games_played(record)
        if games < min_games:
            continue
        rank = season_rank(record, rank_type)
        if not rank:
            continue
        result.append(QualifyingSeason(season=season, rank=rank, games=games, age=record.meta.age))
    return result


def rank_profile(
    player: Player,
    *,
    min_games: int = 20,
    rank_type: str = "per_game",
) -> Optional[RankProfile]:
    seasons = qualifying_seasons(player, min_games=min_games, rank_type=rank_type)
    if not seasons:
        return None
    ranks = [season.rank for season in seasons]
    best = min(ranks)
    worst = max(ranks)
    return RankProfile(
        avg_rank=fmean(ranks),
        consistency=pstdev(ranks),
        best_rank=best,
        worst_rank=worst,
        rank_range=worst - best,
        rank_trend=ranks[0] - ranks[-1] if len(ranks) > 1 else 0,
        age=seasons[-1].age,
        seasons=tuple(seasons),
    )


def player_consistency(
    player: Player,
    *,
    min_games: int = 20,
    rank_type: str = "per_game",
) -> Optional[float]:
    profile = rank_profile(player, min_games=min_games, rank_type=rank_type)
    return profile.consistency if profile is not None else None


def categorize_player(profile: RankProfile) -> PlayerCategory:
    """Assign exactly one category; rules are checked in priority order."""

    if profile.avg_rank <= 30 and profile.consistency < 15:
        return PlayerCategory.ELITE_CONSISTENT
    if profile.rank_trend > 15 and profile.avg_rank <= 80:
        return PlayerCategory.RISING_STARS
    if profile.rank_trend > 0 and profile.age is not None and profile.age <= 26 and profile.best_rank <= 60:
        return PlayerCategory.BREAKOUT_CANDIDATES
    if profile.rank_trend < -15:
        return PlayerCategory.DECLINING
    if profile.consistency > 50:
        return PlayerCategory.VOLATILE
    return PlayerCategory.RELIABLE_PRODUCERS


def breakout_score(player: Player) -> Optional[BreakoutScore]:
    trends = calculate_trends(player)
    latest = latest_season(player)
    if trends is None or latest is None:
        return None

    score = 0.0
    reasons: List[str] = []

    if trends.rank_change is not None and trends.rank_change > 0:
        score += min(trends.rank_change / 10, 3)
        reasons.append(f"Rank improved by {_round_half_up(trends.rank_change)} spots")

    age = latest.meta.age
    if age and PRIME_AGE_MIN <= age <= PRIME_AGE_MAX:
        score += 2
        reasons.append(f"Prime age ({age})")

    seasons = sorted_seasons(player)
    previous = seasons[-2][1]
    current_games = games_played(latest)
    previous_games = games_played(previous)
    if current_games > previous_games + 10:
        score += 2
        reasons.append(f"Games played increased by {current_games - previous_games}")

    value = value_vs_adp(player)
    if value is not None and value.value > 20:
        score += 3
        reasons.append(f"Outperformed ADP by {_round_half_up(value.value)} spots")

    return BreakoutScore(score=score, reasons=tuple(reasons), trends=trends, value=value)


def rank_tier(rank: Optional[float]) -> str:
    if not rank:
        return ""
    for bound, label in RANK_TIERS:
        if rank <= bound:
            return label
    return ""


def season_display_name(season: str) -> str:
    """Shorten ``2024-2025`` to ``24-25``."""

    start, _, end = season.partition("-")
    if not end:
        return season
    return f"{start[2:]}-{end[2:]}"


def calculate_percentile(value: Optional[float], values: Sequence[float]) -> float:
    if value is None or not values:
        return 0.0
    count = sum(1 for other in values if other <= value)
    return count / len(values) * 100


def format_stat(value: object, stat: str) -> str:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "-"
    if get_stat_category(stat).percentage:
        return f"{value * 100:.1f}%"
    return f"{value:.1f}"
