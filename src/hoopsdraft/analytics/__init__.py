"""Derived player metrics and dashboard queries."""

from .export import ExportError, export_rows_to_csv, render_rows
from .metrics import (
    AdpValue,
    BreakoutScore,
    PlayerTrends,
    RankProfile,
    breakout_score,
    calculate_slope,
    calculate_trends,
    categorize_player,
    consistency_rating,
    latest_season,
    player_consistency,
    rank_profile,
    rank_tier,
    standard_deviation,
    value_vs_adp,
)
from .queries import (
    BreakoutCandidate,
    DraftBoardRow,
    HistoricalEntry,
    LeaderboardEntry,
    PlayerSummary,
    TeamSummary,
    UndervaluedPlayer,
    breakout_candidates,
    compare_players,
    draft_board,
    historical_analysis,
    leaderboard,
    player_list,
    search_players,
    team_summary,
    undervalued_players,
)

__all__ = [
    "AdpValue",
    "BreakoutCandidate",
    "BreakoutScore",
    "DraftBoardRow",
    "ExportError",
    "HistoricalEntry",
    "LeaderboardEntry",
    "PlayerSummary",
    "PlayerTrends",
    "RankProfile",
    "TeamSummary",
    "UndervaluedPlayer",
    "breakout_candidates",
    "breakout_score",
    "calculate_slope",
    "calculate_trends",
    "categorize_player",
    "compare_players",
    "consistency_rating",
    "draft_board",
    "export_rows_to_csv",
    "historical_analysis",
    "latest_season",
    "leaderboard",
    "player_consistency",
    "player_list",
    "rank_profile",
    "rank_tier",
    "render_rows",
    "search_players",
    "standard_deviation",
    "team_summary",
    "undervalued_players",
    "value_vs_adp",
]
