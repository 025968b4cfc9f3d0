"""Fetch the four source documents and join them into player records."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import httpx
from pydantic import ValidationError

from hoopsdraft.config.settings import fetch_timeout
from hoopsdraft.config_loader import DataSources, is_remote
from hoopsdraft.models import AdpInfo, BucketInfo, Player


logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """Raised when any source document cannot be fetched, parsed or joined."""


@dataclass(frozen=True)
class SourceDocuments:
    historical: Mapping[str, Any]
    adp: Mapping[str, Any]
    buckets: Mapping[str, Any]
    registry: Mapping[str, Any]


@dataclass(frozen=True)
class JoinReport:
    total_players: int
    with_history: int
    with_adp: int
    with_bucket: int
    unmatched_history_ids: List[str]


def _parse_document(name: str, location: str, text: str) -> Mapping[str, Any]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"{name} document at {location} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise DataLoadError(f"{name} document at {location} must be a JSON object")
    return payload


async def _fetch_text(name: str, location: str, client: httpx.AsyncClient) -> str:
    if is_remote(location):
        try:
            response = await client.get(location)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DataLoadError(f"Failed to fetch {name} document from {location}: {exc}") from exc
        return response.text
    try:
        return await asyncio.to_thread(Path(location).read_text, encoding="utf-8")
    except OSError as exc:
        raise DataLoadError(f"Failed to read {name} document from {location}: {exc}") from exc


async def _fetch_document(name: str, location: str, client: httpx.AsyncClient) -> Mapping[str, Any]:
    text = await _fetch_text(name, location, client)
    return _parse_document(name, location, text)


async def fetch_documents(
    sources: DataSources,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> SourceDocuments:
    """Fetch all four documents concurrently; fail as a whole if any one fails."""

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=fetch_timeout())
    logger.info("Fetching source documents (registry=%s)", sources.registry)
    try:
        results = await asyncio.gather(
            _fetch_document("historical", sources.historical, client),
            _fetch_document("adp", sources.adp, client),
            _fetch_document("buckets", sources.buckets, client),
            _fetch_document("registry", sources.registry, client),
            return_exceptions=True,
        )
    finally:
        if owns_client:
            await client.aclose()
    failures = [result for result in results if isinstance(result, BaseException)]
    if failures:
        raise failures[0]
    historical, adp, buckets, registry = results
    return SourceDocuments(historical=historical, adp=adp, buckets=buckets, registry=registry)


def _players_table(name: str, document: Mapping[str, Any]) -> Mapping[str, Any]:
    table = document.get("players") or {}
    if not isinstance(table, Mapping):
        raise DataLoadError(f"{name} document 'players' must be an object")
    return table


def _index_history(historical: Mapping[str, Any]) -> Dict[str, Mapping[str, Any]]:
    by_id: Dict[str, Mapping[str, Any]] = {}
    for key, entry in _players_table("historical", historical).items():
        if not isinstance(entry, Mapping):
            logger.debug("Skipping historical entry %s: not an object", key)
            continue
        player_id = entry.get("player_id")
        if not player_id:
            logger.debug("Skipping historical entry %s: no player_id", key)
            continue
        by_id.setdefault(str(player_id), entry)
    return by_id


def _build_player(
    player_id: str,
    master: Mapping[str, Any],
    history: Optional[Mapping[str, Any]],
    adp_table: Mapping[str, Any],
) -> Player:
    seasons: Mapping[str, Any] = {}
    latest_team = master.get("team") or ""
    positions = master.get("positions") or []
    if history is not None:
        seasons = history.get("seasons") or {}
        latest_team = history.get("latest_team") or latest_team
        positions = history.get("positions") or positions
    if isinstance(positions, str):
        positions = [positions]

    adp: Optional[AdpInfo] = None
    if master.get("adp"):
        adp_entry = adp_table.get(player_id) or {}
        adp = AdpInfo(
            value=master["adp"],
            date=adp_entry.get("adp_date"),
            rookie=bool(master.get("rookie") or False),
        )

    bucket: Optional[BucketInfo] = None
    if master.get("bucket"):
        bucket = BucketInfo(
            bucket=str(master["bucket"]),
            rank=master.get("bucket_rank"),
            flags=list(master.get("flags") or []),
        )

    return Player(
        player_id=player_id,
        name=master.get("name") or "",
        latest_team=latest_team,
        positions=list(positions),
        seasons=seasons,
        adp=adp,
        bucket=bucket,
    )


def join_players(
    registry: Mapping[str, Any],
    historical: Mapping[str, Any],
    adp: Mapping[str, Any],
    buckets: Mapping[str, Any] | None = None,
) -> Dict[str, Player]:
    """Join the source documents into players keyed by id, in registry order.

    The registry defines the player universe. Historical data, when present,
    overrides team and positions. The bucket table is accepted for symmetry;
    bucket details are read from the registry entries that embed them.
    """

    history_by_id = _index_history(historical)
    players: Dict[str, Player] = {}
    for player_id, master in _players_table("registry", registry).items():
        key = str(player_id)
        try:
            players[key] = _build_player(key, master, history_by_id.get(key), adp)
        except (ValidationError, TypeError, AttributeError) as exc:
            raise DataLoadError(f"Invalid data for player {key}: {exc}") from exc
    return players


def join_documents(documents: SourceDocuments) -> Dict[str, Player]:
    return join_players(documents.registry, documents.historical, documents.adp, documents.buckets)


def join_report(players: Mapping[str, Player], historical: Mapping[str, Any]) -> JoinReport:
    history_ids = _index_history(historical)
    return JoinReport(
        total_players=len(players),
        with_history=sum(1 for player_id in players if player_id in history_ids),
        with_adp=sum(1 for player in players.values() if player.adp is not None),
        with_bucket=sum(1 for player in players.values() if player.bucket is not None),
        unmatched_history_ids=[player_id for player_id in history_ids if player_id not in players],
    )


async def load_players_async(
    sources: DataSources,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Tuple[Dict[str, Player], JoinReport]:
    documents = await fetch_documents(sources, client=client)
    players = join_documents(documents)
    report = join_report(players, documents.historical)
    logger.info(
        "Joined %s players (%s with history, %s with ADP, %s with bucket)",
        report.total_players,
        report.with_history,
        report.with_adp,
        report.with_bucket,
    )
    if report.unmatched_history_ids:
        logger.info("%s historical players are not in the registry", len(report.unmatched_history_ids))
    return players, report


def load_players(sources: DataSources) -> Tuple[Dict[str, Player], JoinReport]:
    """Synchronous entry point: fetch, parse and join in one step."""

    return asyncio.run(load_players_async(sources))
