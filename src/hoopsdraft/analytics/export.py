"""CSV export helpers for query results."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Any, Callable, Dict, List, Mapping, Sequence, Tuple

from hoopsdraft.config.tiers import get_category_info

from .metrics import consistency_rating, rank_tier, season_display_name
from .queries import (
    BreakoutCandidate,
    DraftBoardRow,
    HistoricalEntry,
    LeaderboardEntry,
    PlayerSummary,
    UndervaluedPlayer,
)


class ExportError(RuntimeError):
    """Raised when rows cannot be rendered with the requested columns."""


Column = Tuple[str, Callable[[Any], object]]


def _fmt(value: object, digits: int = 1) -> object:
    if value is None:
        return ""
    if isinstance(value, float):
        return f"{value:.{digits}f}"
    return value


LEADERBOARD_COLUMNS: List[Column] = [
    ("rank", lambda e: e.rank),
    ("tier", lambda e: rank_tier(e.rank)),
    ("player_id", lambda e: e.player.player_id),
    ("name", lambda e: e.player.name),
    ("team", lambda e: e.player.latest_team),
    ("positions", lambda e: "/".join(e.player.positions)),
    ("season", lambda e: e.season),
    ("games", lambda e: e.season_data.meta.games_played),
]

BREAKOUT_COLUMNS: List[Column] = [
    ("player_id", lambda c: c.player.player_id),
    ("name", lambda c: c.player.name),
    ("team", lambda c: c.player.latest_team),
    ("score", lambda c: _fmt(c.score)),
    ("rank_change", lambda c: c.trends.rank_change),
    ("adp_value", lambda c: _fmt(c.value.value) if c.value else ""),
    ("reasons", lambda c: "; ".join(c.reasons)),
]

UNDERVALUED_COLUMNS: List[Column] = [
    ("player_id", lambda u: u.player.player_id),
    ("name", lambda u: u.player.name),
    ("team", lambda u: u.player.latest_team),
    ("adp", lambda u: _fmt(u.value.adp)),
    ("rank", lambda u: u.value.roto_rank),
    ("value", lambda u: _fmt(u.value.value)),
    ("percentage", lambda u: _fmt(u.value.percentage)),
]

HISTORICAL_COLUMNS: List[Column] = [
    ("player_id", lambda h: h.player.player_id),
    ("name", lambda h: h.player.name),
    ("positions", lambda h: "/".join(h.player.positions)),
    ("category", lambda h: h.category.value),
    ("category_title", lambda h: get_category_info(h.category).title),
    ("avg_rank", lambda h: _fmt(h.avg_rank)),
    ("best_rank", lambda h: h.profile.best_rank),
    ("worst_rank", lambda h: h.profile.worst_rank),
    ("trend", lambda h: h.profile.rank_trend),
    ("consistency", lambda h: _fmt(h.consistency)),
    ("rating", lambda h: consistency_rating(h.consistency)),
    ("seasons", lambda h: h.profile.seasons_analyzed),
    ("age", lambda h: h.profile.age),
]

PLAYER_COLUMNS: List[Column] = [
    ("player_id", lambda p: p.player_id),
    ("name", lambda p: p.name),
    ("team", lambda p: p.team),
    ("positions", lambda p: "/".join(p.positions)),
    ("adp", lambda p: _fmt(p.adp)),
    ("rookie", lambda p: "yes" if p.rookie else ""),
]

DRAFT_BOARD_COLUMNS: List[Column] = [
    ("player_id", lambda r: r.player.player_id),
    ("name", lambda r: r.player.name),
    ("team", lambda r: r.player.team),
    ("adp", lambda r: _fmt(r.adp)),
    ("tier", lambda r: r.bucket_tier),
    ("proj_rank", lambda r: r.proj_rank),
    ("proj_value", lambda r: _fmt(r.proj_value, 0)),
    ("value_vs_previous", lambda r: r.value_vs_previous),
    ("avg_rank", lambda r: _fmt(r.avg_rank)),
    (
        "ranks",
        lambda r: " ".join(f"{season_display_name(season)}:{rank or '-'}" for season, rank in r.season_ranks),
    ),
    ("consistency", lambda r: _fmt(r.consistency)),
    ("trend", lambda r: r.trend),
    ("drafted", lambda r: "yes" if r.drafted else ""),
]

_COLUMNS_BY_TYPE: Dict[type, List[Column]] = {
    LeaderboardEntry: LEADERBOARD_COLUMNS,
    BreakoutCandidate: BREAKOUT_COLUMNS,
    UndervaluedPlayer: UNDERVALUED_COLUMNS,
    HistoricalEntry: HISTORICAL_COLUMNS,
    PlayerSummary: PLAYER_COLUMNS,
    DraftBoardRow: DRAFT_BOARD_COLUMNS,
}


def _cell(value: object) -> str:
    return "" if value is None else str(value)


def columns_for(rows: Sequence[Any]) -> List[Column]:
    if not rows:
        return []
    row_type = type(rows[0])
    if row_type not in _COLUMNS_BY_TYPE:
        raise ExportError(f"No export columns configured for {row_type.__name__}")
    return _COLUMNS_BY_TYPE[row_type]


def select_columns(columns: Sequence[Column], names: Sequence[str] | None) -> List[Column]:
    if not names:
        return list(columns)
    by_name: Mapping[str, Column] = {name: (name, getter) for name, getter in columns}
    unknown = [name for name in names if name not in by_name]
    if unknown:
        raise ExportError(f"Unknown columns: {', '.join(unknown)}")
    return [by_name[name] for name in names]


def render_rows(rows: Sequence[Any], *, columns: Sequence[str] | None = None) -> List[List[str]]:
    """Return a header row followed by one string row per result."""

    if not rows:
        return []
    selected = select_columns(columns_for(rows), columns)
    table = [[name for name, _ in selected]]
    for row in rows:
        table.append([_cell(getter(row)) for _, getter in selected])
    return table


def export_rows_to_csv(rows: Sequence[Any], *, columns: Sequence[str] | None = None) -> str:
    """Convert query results to CSV text."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    for line in render_rows(rows, columns=columns):
        writer.writerow(line)
    return buffer.getvalue()


__all__ = [
    "ExportError",
    "export_rows_to_csv",
    "render_rows",
]
