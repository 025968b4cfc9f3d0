"""Command-line interface for querying draft analytics."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, List, Mapping, Sequence

from hoopsdraft.analytics import (
    ExportError,
    breakout_candidates,
    compare_players,
    draft_board,
    export_rows_to_csv,
    historical_analysis,
    leaderboard,
    render_rows,
    search_players,
    team_summary,
    undervalued_players,
)
from hoopsdraft.analytics.metrics import RANK_TYPES, format_stat
from hoopsdraft.analytics.queries import DRAFT_SORT_COLUMNS
from hoopsdraft.config import STAT_MODES, PlayerCategory
from hoopsdraft.config.settings import default_min_games, log_level
from hoopsdraft.config_loader import DataSources
from hoopsdraft.ingest import DataLoadError, load_players
from hoopsdraft.models import Player


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data-dir", default=None, help="Directory or base URL holding the source JSON files")
    parser.add_argument("--sources", type=Path, default=None, help="Load source locations from a profile JSON")
    parser.add_argument("--save-sources", type=Path, default=None, help="Save resolved source locations to JSON")
    parser.add_argument("--output", type=Path, default=None, help="Write results as CSV to this path")
    parser.add_argument("--columns", default=None, help="Comma-separated CSV columns to include")
    parser.add_argument("--limit", type=int, default=None, help="Maximum rows to show")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fantasy basketball draft analytics")
    subparsers = parser.add_subparsers(dest="command", required=True)

    board = subparsers.add_parser("leaderboard", help="Players ranked by season rank")
    board.add_argument("--season", default=None, help="Season id, e.g. 2024-2025 (default: latest per player)")
    board.add_argument("--position", default=None, help="Only players eligible at this position")
    board.add_argument("--min-games", type=int, default=0, help="Minimum games played")
    board.add_argument("--rank-type", choices=RANK_TYPES, default="per_game")

    subparsers.add_parser("breakouts", help="Players with a breakout score of 4 or more")

    undervalued = subparsers.add_parser("undervalued", help="Players outperforming their ADP")
    undervalued.add_argument("--threshold", type=float, default=15.0, help="Minimum ADP value delta")

    history = subparsers.add_parser("history", help="Multi-season rank analysis")
    history.add_argument("--position", default=None)
    history.add_argument("--category", choices=[c.value for c in PlayerCategory], default=None)
    history.add_argument("--min-seasons", type=int, default=2)
    history.add_argument("--min-games", type=int, default=None, help="Minimum games per season")
    history.add_argument("--rank-type", choices=RANK_TYPES, default="per_game")

    search = subparsers.add_parser("search", help="Find players by name, team or position")
    search.add_argument("query")

    draft = subparsers.add_parser("board", help="Draft board with ADP, tiers and historical ranks")
    draft.add_argument("--drafted", nargs="*", default=[], help="Player IDs already drafted")
    draft.add_argument("--position", default=None)
    draft.add_argument("--hide-drafted", action="store_true")
    draft.add_argument("--sort", choices=DRAFT_SORT_COLUMNS, default="adp")
    draft.add_argument("--desc", action="store_true", help="Sort descending")

    compare = subparsers.add_parser("compare", help="Compare latest-season categories")
    compare.add_argument("player_ids", nargs="+")
    compare.add_argument("--mode", choices=STAT_MODES, default="averages")

    team = subparsers.add_parser("team", help="Summarize a drafted roster")
    team.add_argument("player_ids", nargs="+")

    for sub in subparsers.choices.values():
        _add_common(sub)
    return parser.parse_args(argv)


def _resolve_sources(args: argparse.Namespace) -> DataSources:
    if args.sources:
        return DataSources.load(args.sources)
    if args.data_dir:
        return DataSources.from_directory(args.data_dir)
    return DataSources.from_env()


def _print_table(table: List[List[str]]) -> None:
    if not table:
        print("No players found")
        return
    widths = [max(len(row[idx]) for row in table) for idx in range(len(table[0]))]
    for row in table:
        print("  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip())


def _run_query(args: argparse.Namespace, players: Mapping[str, Player]) -> List[Any]:
    if args.command == "leaderboard":
        return leaderboard(
            players,
            season=args.season,
            position=args.position,
            min_games=args.min_games,
            rank_type=args.rank_type,
        )
    if args.command == "breakouts":
        return breakout_candidates(players)
    if args.command == "undervalued":
        return undervalued_players(players, threshold=args.threshold)
    if args.command == "history":
        min_games = args.min_games if args.min_games is not None else default_min_games()
        return historical_analysis(
            players,
            position=args.position,
            category=args.category,
            min_seasons=args.min_seasons,
            min_games_per_season=min_games,
            rank_type=args.rank_type,
        )
    if args.command == "search":
        return search_players(players, args.query)
    if args.command == "board":
        return draft_board(
            players,
            drafted_ids=args.drafted,
            position=args.position,
            hide_drafted=args.hide_drafted,
            sort_by=args.sort,
            direction="desc" if args.desc else "asc",
        )
    raise ValueError(f"Unsupported command {args.command!r}")


def _print_comparison(args: argparse.Namespace, players: Mapping[str, Player]) -> None:
    rows = compare_players(players, args.player_ids, mode=args.mode)
    if not rows:
        print("No matching players")
        return
    names = [players[cell.player_id].name for cell in rows[0].cells]
    table = [["category", *names]]
    for row in rows:
        table.append(
            [row.label]
            + [f"{format_stat(cell.value, row.category)} ({cell.percentile:.0f}%)" for cell in row.cells]
        )
    _print_table(table)


def _print_team(args: argparse.Namespace, players: Mapping[str, Player]) -> None:
    summary = team_summary(players, args.player_ids)
    print(f"Players with stats: {summary.player_count}")
    for key, value in summary.stats.items():
        print(f"  {key:<4} {format_stat(value, key)}")
    if summary.avg_rank is not None:
        print(f"Average historical rank: {summary.avg_rank:.1f} (best {summary.best_rank})")
    else:
        print("Average historical rank: -")


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    sources = _resolve_sources(args)
    if args.save_sources:
        sources.save(args.save_sources)
        print(f"Saved source profile to {args.save_sources}")

    try:
        players, _ = load_players(sources)
    except DataLoadError as exc:
        raise SystemExit(f"Failed to load player data: {exc}") from exc

    if args.command == "compare":
        _print_comparison(args, players)
        return
    if args.command == "team":
        _print_team(args, players)
        return

    rows = _run_query(args, players)
    if args.limit is not None and args.limit > 0:
        rows = rows[: args.limit]
    columns = [name.strip() for name in args.columns.split(",")] if args.columns else None

    try:
        if args.output:
            args.output.write_text(export_rows_to_csv(rows, columns=columns), encoding="utf-8")
            print(f"Wrote {len(rows)} rows to {args.output}")
            return
        _print_table(render_rows(rows, columns=columns))
    except ExportError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
