"""Canonical player models produced by the join layer."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict


class SeasonMeta(BaseModel):
    games_played: Optional[int] = None
    age: Optional[int] = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class SeasonRanks(BaseModel):
    per_game_rank: Optional[int] = None
    total_rank: Optional[int] = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class SeasonRecord(BaseModel):
    """One season of a player's statistics and ranks."""

    meta: SeasonMeta = Field(default_factory=SeasonMeta)
    averages: Dict[str, Any] = Field(default_factory=dict)
    totals: Dict[str, Any] = Field(default_factory=dict)
    zscores: Optional[Dict[str, Any]] = None
    ranks: SeasonRanks = Field(default_factory=SeasonRanks)

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator("meta", "averages", "totals", "ranks", mode="before")
    @classmethod
    def _null_block_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class AdpInfo(BaseModel):
    value: float = Field(..., gt=0.0)
    date: Optional[str] = None
    rookie: bool = False

    model_config = ConfigDict(frozen=True)


class BucketInfo(BaseModel):
    bucket: str
    rank: Optional[int] = None
    flags: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class Player(BaseModel):
    """Joined player record keyed by ``player_id``."""

    player_id: str = Field(..., min_length=1)
    name: str
    latest_team: str = ""
    positions: List[str] = Field(..., min_length=1)
    seasons: Dict[str, SeasonRecord] = Field(default_factory=dict)
    adp: Optional[AdpInfo] = None
    bucket: Optional[BucketInfo] = None

    model_config = ConfigDict(frozen=True)
