"""Player and season models shared across ingestion and analytics."""

from .player import AdpInfo, BucketInfo, Player, SeasonMeta, SeasonRanks, SeasonRecord

__all__ = [
    "AdpInfo",
    "BucketInfo",
    "Player",
    "SeasonMeta",
    "SeasonRanks",
    "SeasonRecord",
]
