"""Dashboard queries over the joined player universe."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple

from hoopsdraft.config.stats import iter_stat_categories, stat_value
from hoopsdraft.config.tiers import PlayerCategory
from hoopsdraft.models import Player, SeasonRecord

from .metrics import (
    AdpValue,
    BreakoutScore,
    PlayerTrends,
    RankProfile,
    breakout_score,
    calculate_percentile,
    calculate_trends,
    categorize_player,
    games_played,
    latest_season,
    rank_profile,
    season_rank,
    value_vs_adp,
)


UNDERVALUED_THRESHOLD = 15.0
SEARCH_LIMIT = 10
SEARCH_MIN_LENGTH = 2
RECENT_SEASON_COUNT = 3


@dataclass(frozen=True)
class LeaderboardEntry:
    player: Player
    season: str
    season_data: SeasonRecord
    rank: int


@dataclass(frozen=True)
class BreakoutCandidate:
    player: Player
    score: float
    reasons: Tuple[str, ...]
    trends: PlayerTrends
    value: Optional[AdpValue]


@dataclass(frozen=True)
class UndervaluedPlayer:
    player: Player
    value: AdpValue
    trends: Optional[PlayerTrends]


@dataclass(frozen=True)
class HistoricalEntry:
    player: Player
    profile: RankProfile
    category: PlayerCategory

    @property
    def avg_rank(self) -> float:
        return self.profile.avg_rank

    @property
    def consistency(self) -> float:
        return self.profile.consistency


@dataclass(frozen=True)
class PlayerSummary:
    player_id: str
    name: str
    team: str
    positions: Tuple[str, ...]
    adp: Optional[float]
    rookie: bool
    seasons: Tuple[str, ...]


@dataclass(frozen=True)
class DraftBoardRow:
    """One row of the draft board; ``None`` marks a value that cannot be computed."""

    player: PlayerSummary
    drafted: bool
    adp: Optional[float]
    bucket_tier: Optional[str]
    proj_rank: Optional[int]
    proj_value: Optional[float]
    value_vs_previous: Optional[int]
    season_ranks: Tuple[Tuple[str, Optional[int]], ...]
    avg_rank: Optional[float]
    consistency: Optional[float]
    trend: Optional[int]


@dataclass(frozen=True)
class ComparisonCell:
    player_id: str
    value: Optional[float]
    percentile: float


@dataclass(frozen=True)
class ComparisonRow:
    category: str
    label: str
    cells: Tuple[ComparisonCell, ...]


@dataclass(frozen=True)
class TeamSummary:
    stats: Dict[str, float]
    player_count: int
    avg_rank: Optional[float]
    best_rank: Optional[int]
    entries: Tuple[HistoricalEntry, ...]


def _rank_for_leaderboard(
    player: Player,
    season: str,
    record: SeasonRecord,
    *,
    position: Optional[str],
    min_games: int,
    rank_type: str,
) -> Optional[LeaderboardEntry]:
    if games_played(record) < min_games:
        return None
    if position and position not in player.positions:
        return None
    rank = season_rank(record, rank_type)
    if not rank:
        return None
    return LeaderboardEntry(player=player, season=season, season_data=record, rank=rank)


def leaderboard(
    players: Mapping[str, Player],
    *,
    season: Optional[str] = None,
    position: Optional[str] = None,
    min_games: int = 0,
    rank_type: str = "per_game",
) -> List[LeaderboardEntry]:
    """Rank players for one season, or by each player's latest season when none is given."""

    entries: List[LeaderboardEntry] = []
    for player in players.values():
        if season:
            record = player.seasons.get(season)
            chosen = season
        else:
            chosen = max(player.seasons) if player.seasons else ""
            record = player.seasons.get(chosen)
        if record is None:
            continue
        entry = _rank_for_leaderboard(
            player,
            chosen,
            record,
            position=position,
            min_games=min_games,
            rank_type=rank_type,
        )
        if entry is not None:
            entries.append(entry)
    entries.sort(key=lambda entry: entry.rank)
    return entries


def breakout_candidates(players: Mapping[str, Player]) -> List[BreakoutCandidate]:
    candidates: List[BreakoutCandidate] = []
    for player in players.values():
        result: Optional[BreakoutScore] = breakout_score(player)
        if result is None or not result.qualifies:
            continue
        candidates.append(
            BreakoutCandidate(
                player=player,
                score=result.score,
                reasons=result.reasons,
                trends=result.trends,
                value=result.value,
            )
        )
    candidates.sort(key=lambda candidate: candidate.score, reverse=True)
    return candidates


def undervalued_players(
    players: Mapping[str, Player],
    *,
    threshold: float = UNDERVALUED_THRESHOLD,
) -> List[UndervaluedPlayer]:
    """Players whose latest rank beats their ADP by more than ``threshold`` spots."""

    result: List[UndervaluedPlayer] = []
    for player in players.values():
        value = value_vs_adp(player)
        if value is None or value.value <= threshold:
            continue
        result.append(UndervaluedPlayer(player=player, value=value, trends=calculate_trends(player)))
    result.sort(key=lambda item: item.value.value, reverse=True)
    return result


def historical_analysis(
    players: Mapping[str, Player],
    *,
    position: Optional[str] = None,
    category: Optional[PlayerCategory | str] = None,
    min_seasons: int = 2,
    min_games_per_season: int = 20,
    rank_type: str = "per_game",
    player_ids: Optional[Iterable[str]] = None,
) -> List[HistoricalEntry]:
    wanted_category = PlayerCategory(category) if category else None
    wanted_ids = set(player_ids) if player_ids is not None else None

    entries: List[HistoricalEntry] = []
    for player_id, player in players.items():
        if wanted_ids is not None and player_id not in wanted_ids:
            continue
        if len(player.seasons) < min_seasons:
            continue
        if position and position not in player.positions:
            continue
        profile = rank_profile(player, min_games=min_games_per_season, rank_type=rank_type)
        if profile is None or profile.seasons_analyzed < min_seasons:
            continue
        player_category = categorize_player(profile)
        if wanted_category is not None and player_category != wanted_category:
            continue
        entries.append(HistoricalEntry(player=player, profile=profile, category=player_category))
    entries.sort(key=lambda entry: entry.avg_rank)
    return entries


def _summary(player: Player) -> PlayerSummary:
    return PlayerSummary(
        player_id=player.player_id,
        name=player.name,
        team=player.latest_team,
        positions=tuple(player.positions),
        adp=player.adp.value if player.adp else None,
        rookie=player.adp.rookie if player.adp else False,
        seasons=tuple(player.seasons),
    )


def player_list(players: Mapping[str, Player]) -> List[PlayerSummary]:
    """Summaries ordered by ADP, with players lacking ADP last by name."""

    summaries = [_summary(player) for player in players.values()]
    summaries.sort(
        key=lambda s: (s.adp is None, s.adp if s.adp is not None else s.name.casefold())
    )
    return summaries


def search_players(
    players: Mapping[str, Player],
    query: Optional[str],
    *,
    limit: int = SEARCH_LIMIT,
) -> List[PlayerSummary]:
    if not query or len(query) < SEARCH_MIN_LENGTH:
        return []
    needle = query.lower()
    matches: List[PlayerSummary] = []
    for summary in player_list(players):
        if (
            needle in summary.name.lower()
            or needle in summary.team.lower()
            or any(needle in position.lower() for position in summary.positions)
        ):
            matches.append(summary)
            if len(matches) >= limit:
                break
    return matches


def _recent_season_ids(players: Mapping[str, Player], count: int = RECENT_SEASON_COUNT) -> List[str]:
    season_ids = {season for player in players.values() for season in player.seasons}
    return sorted(season_ids, reverse=True)[:count]


def _tier_number(bucket: Optional[str]) -> Optional[int]:
    if not bucket:
        return None
    match = re.match(r"\s*(-?\d+)", bucket)
    return int(match.group(1)) if match else None


def _draft_row(
    player: Player,
    *,
    drafted: bool,
    recent_seasons: Sequence[str],
) -> DraftBoardRow:
    season_ranks = tuple(
        (season, season_rank(player.seasons[season]) if season in player.seasons else None)
        for season in recent_seasons
    )
    latest_rank = season_ranks[0][1] if len(season_ranks) > 0 else None
    previous_rank = season_ranks[1][1] if len(season_ranks) > 1 else None

    adp = player.adp.value if player.adp else None
    proj_rank = player.bucket.rank if player.bucket and player.bucket.rank else None
    profile = rank_profile(player, min_games=1, rank_type="per_game")

    return DraftBoardRow(
        player=_summary(player),
        drafted=drafted,
        adp=adp,
        bucket_tier=player.bucket.bucket if player.bucket else None,
        proj_rank=proj_rank,
        proj_value=adp - proj_rank if adp and proj_rank else None,
        value_vs_previous=previous_rank - latest_rank if latest_rank and previous_rank else None,
        season_ranks=season_ranks,
        avg_rank=profile.avg_rank if profile else None,
        consistency=profile.consistency if profile else None,
        trend=profile.rank_trend if profile else None,
    )


def _season_rank_at(index: int) -> Callable[[DraftBoardRow], Optional[int]]:
    def extract(row: DraftBoardRow) -> Optional[int]:
        return row.season_ranks[index][1] if len(row.season_ranks) > index else None

    return extract


_DRAFT_SORT_KEYS: Dict[str, Callable[[DraftBoardRow], object]] = {
    "name": lambda row: row.player.name.casefold(),
    "adp": lambda row: row.adp,
    "tier": lambda row: _tier_number(row.bucket_tier),
    "proj_rank": lambda row: row.proj_rank,
    "proj_value": lambda row: row.proj_value,
    "value_vs_previous": lambda row: row.value_vs_previous,
    "avg_rank": lambda row: row.avg_rank,
    "latest_rank": _season_rank_at(0),
    "previous_rank": _season_rank_at(1),
    "earlier_rank": _season_rank_at(2),
    "consistency": lambda row: row.consistency,
    "trend": lambda row: row.trend,
}

DRAFT_SORT_COLUMNS: Tuple[str, ...] = tuple(_DRAFT_SORT_KEYS)


def sort_draft_rows(
    rows: Sequence[DraftBoardRow],
    *,
    sort_by: str = "adp",
    direction: Literal["asc", "desc"] = "asc",
) -> List[DraftBoardRow]:
    """Sort rows by a column; rows missing that value always go last."""

    if sort_by not in _DRAFT_SORT_KEYS:
        raise KeyError(f"Unknown draft board column {sort_by!r}")
    key = _DRAFT_SORT_KEYS[sort_by]
    present = [row for row in rows if key(row) is not None]
    missing = [row for row in rows if key(row) is None]
    present.sort(key=key, reverse=direction == "desc")  # type: ignore[arg-type]
    return present + missing


def draft_board(
    players: Mapping[str, Player],
    *,
    drafted_ids: Sequence[str] = (),
    position: Optional[str] = None,
    hide_drafted: bool = False,
    sort_by: str = "adp",
    direction: Literal["asc", "desc"] = "asc",
) -> List[DraftBoardRow]:
    drafted = set(drafted_ids)
    recent_seasons = _recent_season_ids(players)
    rows: List[DraftBoardRow] = []
    for summary in player_list(players):
        if position and position not in summary.positions:
            continue
        is_drafted = summary.player_id in drafted
        if hide_drafted and is_drafted:
            continue
        rows.append(_draft_row(players[summary.player_id], drafted=is_drafted, recent_seasons=recent_seasons))
    return sort_draft_rows(rows, sort_by=sort_by, direction=direction)


def compare_players(
    players: Mapping[str, Player],
    player_ids: Sequence[str],
    *,
    mode: str = "averages",
) -> List[ComparisonRow]:
    """Latest-season category values for the selected players with in-group percentiles."""

    selected = [players[player_id] for player_id in player_ids if player_id in players]
    if not selected:
        return []
    latest = {player.player_id: latest_season(player) for player in selected}

    rows: List[ComparisonRow] = []
    for category in iter_stat_categories():
        values = {
            player.player_id: stat_value(latest[player.player_id], category.key, mode)
            for player in selected
        }
        # lower-is-better categories rank on the negated value
        sign = -1 if category.lower_is_better else 1
        present = sorted(sign * value for value in values.values() if value is not None)
        cells = tuple(
            ComparisonCell(
                player_id=player.player_id,
                value=values[player.player_id],
                percentile=calculate_percentile(
                    None if values[player.player_id] is None else sign * values[player.player_id],
                    present,
                ),
            )
            for player in selected
        )
        rows.append(ComparisonRow(category=category.key, label=category.label, cells=cells))
    return rows


_TEAM_COUNTING_STATS: Tuple[str, ...] = ("PTS", "REB", "AST", "STL", "BLK", "3PM", "TOV")


def _total(record: SeasonRecord, field: str) -> float:
    value = record.totals.get(field)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def team_summary(players: Mapping[str, Player], drafted_ids: Sequence[str]) -> TeamSummary:
    """Aggregate per-game production and historical ranks of the drafted players."""

    stats: Dict[str, float] = {key: 0.0 for key in _TEAM_COUNTING_STATS}
    fg_made = fg_attempts = ft_made = ft_attempts = 0.0
    player_count = 0

    for player_id in drafted_ids:
        player = players.get(player_id)
        record = latest_season(player) if player else None
        if record is None or not record.averages:
            continue
        for key in _TEAM_COUNTING_STATS:
            stats[key] += stat_value(record, key) or 0.0
        if record.totals:
            fg_made += _total(record, "FG")
            fg_attempts += _total(record, "FGA")
            ft_made += _total(record, "FT")
            ft_attempts += _total(record, "FTA")
        player_count += 1

    stats["FG%"] = fg_made / fg_attempts if fg_attempts > 0 else 0.0
    stats["FT%"] = ft_made / ft_attempts if ft_attempts > 0 else 0.0

    entries = tuple(historical_analysis(players, player_ids=drafted_ids))
    avg_rank = sum(entry.avg_rank for entry in entries) / len(entries) if entries else None
    best_rank = min(entry.profile.best_rank for entry in entries) if entries else None

    return TeamSummary(
        stats=stats,
        player_count=player_count,
        avg_rank=avg_rank,
        best_rank=best_rank,
        entries=entries,
    )


__all__ = [
    "BreakoutCandidate",
    "ComparisonCell",
    "ComparisonRow",
    "DRAFT_SORT_COLUMNS",
    "DraftBoardRow",
    "HistoricalEntry",
    "LeaderboardEntry",
    "PlayerSummary",
    "TeamSummary",
    "UndervaluedPlayer",
    "breakout_candidates",
    "compare_players",
    "draft_board",
    "historical_analysis",
    "leaderboard",
    "player_list",
    "search_players",
    "sort_draft_rows",
    "team_summary",
    "undervalued_players",
]
