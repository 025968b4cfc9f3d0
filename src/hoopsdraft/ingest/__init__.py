"""Input adapters that fetch and join the raw source documents."""

from .sources import (
    DataLoadError,
    JoinReport,
    SourceDocuments,
    fetch_documents,
    join_documents,
    join_players,
    join_report,
    load_players,
    load_players_async,
)

__all__ = [
    "DataLoadError",
    "JoinReport",
    "SourceDocuments",
    "fetch_documents",
    "join_documents",
    "join_players",
    "join_report",
    "load_players",
    "load_players_async",
]
