"""Builders for players and source documents used across tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from hoopsdraft.models import AdpInfo, BucketInfo, Player, SeasonRecord


def make_season(
    rank: Optional[int] = None,
    *,
    total_rank: Optional[int] = None,
    games: Optional[int] = 70,
    age: Optional[int] = None,
    averages: Optional[Dict[str, Any]] = None,
    totals: Optional[Dict[str, Any]] = None,
    zscores: Optional[Dict[str, Any]] = None,
) -> SeasonRecord:
    return SeasonRecord(
        meta={"games_played": games, "age": age},
        averages=averages or {},
        totals=totals or {},
        zscores=zscores,
        ranks={"per_game_rank": rank, "total_rank": total_rank},
    )


def make_player(
    player_id: str,
    *,
    name: Optional[str] = None,
    team: str = "BOS",
    positions: Optional[list[str]] = None,
    seasons: Optional[Dict[str, SeasonRecord]] = None,
    adp: Optional[float] = None,
    rookie: bool = False,
    bucket: Optional[str] = None,
    bucket_rank: Optional[int] = None,
) -> Player:
    return Player(
        player_id=player_id,
        name=name or f"Player {player_id}",
        latest_team=team,
        positions=positions or ["PG"],
        seasons=seasons or {},
        adp=AdpInfo(value=adp, rookie=rookie) if adp else None,
        bucket=BucketInfo(bucket=bucket, rank=bucket_rank) if bucket else None,
    )


def universe(*players: Player) -> Dict[str, Player]:
    return {player.player_id: player for player in players}


def sample_documents() -> Dict[str, Dict[str, Any]]:
    registry = {
        "players": {
            "jokicni01": {
                "name": "Nikola Jokic",
                "team": "DEN",
                "positions": ["C"],
                "adp": 1.4,
                "bucket": "1",
                "bucket_rank": 1,
            },
            "youngtr01": {
                "name": "Trae Young",
                "team": "ATL",
                "positions": ["PG"],
                "adp": 45.0,
                "rookie": False,
                "bucket": "3",
                "bucket_rank": 30,
                "flags": ["injury"],
            },
            "flaggco01": {
                "name": "Cooper Flagg",
                "team": "DAL",
                "positions": ["SF", "PF"],
                "adp": 60.2,
                "rookie": True,
            },
        }
    }
    historical = {
        "players": {
            "Nikola Jokic": {
                "player_id": "jokicni01",
                "latest_team": "DEN",
                "positions": ["C"],
                "seasons": {
                    "2023-2024": {
                        "meta": {"games_played": 79, "age": 28},
                        "averages": {"PTS_G": 26.4, "REB_G": 12.4, "FG_PCT": 0.583},
                        "totals": {"PTS": 2085, "FG": 822, "FGA": 1411},
                        "ranks": {"per_game_rank": 1, "total_rank": 1},
                    },
                    "2024-2025": {
                        "meta": {"games_played": 70, "age": 29},
                        "averages": {"PTS_G": 29.6, "REB_G": 12.7, "FG_PCT": 0.576},
                        "totals": {"PTS": 2072, "FG": 806, "FGA": 1399},
                        "ranks": {"per_game_rank": 1, "total_rank": 2},
                    },
                },
            },
            "Trae Young": {
                "player_id": "youngtr01",
                "latest_team": "ATL",
                "positions": ["PG", "SG"],
                "seasons": {
                    "2023-2024": {
                        "meta": {"games_played": 54, "age": 25},
                        "averages": {"PTS_G": 25.7},
                        "ranks": {"per_game_rank": 40, "total_rank": 70},
                    },
                    "2024-2025": {
                        "meta": {"games_played": 76, "age": 26},
                        "averages": {"PTS_G": 24.2},
                        "ranks": {"per_game_rank": 20, "total_rank": 15},
                    },
                },
            },
            "Retired Guy": {
                "player_id": "retired01",
                "latest_team": "FA",
                "positions": ["SG"],
                "seasons": {},
            },
        }
    }
    adp = {
        "jokicni01": {"adp_date": "2025-10-01"},
        "youngtr01": {"adp_date": "2025-10-01"},
    }
    buckets = {"buckets": {"1": ["jokicni01"], "3": ["youngtr01"]}}
    return {"registry": registry, "historical": historical, "adp": adp, "buckets": buckets}


def write_documents(directory: Path, documents: Optional[Dict[str, Dict[str, Any]]] = None) -> Path:
    from hoopsdraft.config_loader import DataSources

    documents = documents or sample_documents()
    sources = DataSources.from_directory(directory)
    for key, payload in documents.items():
        Path(getattr(sources, key)).write_text(json.dumps(payload), encoding="utf-8")
    return directory
