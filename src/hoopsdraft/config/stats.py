"""Stat category definitions and their field names per display mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterable, Literal, Mapping, Tuple

if TYPE_CHECKING:
    from hoopsdraft.models import SeasonRecord


StatMode = Literal["averages", "totals", "zscores"]

STAT_MODES: Tuple[str, ...] = ("averages", "totals", "zscores")


@dataclass(frozen=True)
class StatCategory:
    key: str
    label: str
    fields: Mapping[str, str]
    percentage: bool = False
    lower_is_better: bool = False

    def field_for(self, mode: str) -> str:
        if mode not in self.fields:
            raise KeyError(f"No field configured for category={self.key!r}, mode={mode!r}")
        return self.fields[mode]


_STAT_CATEGORIES: Dict[str, StatCategory] = {
    "PTS": StatCategory(
        key="PTS",
        label="Points",
        fields={"averages": "PTS_G", "totals": "PTS", "zscores": "Z_PTS_G"},
    ),
    "REB": StatCategory(
        key="REB",
        label="Rebounds",
        fields={"averages": "REB_G", "totals": "TRB", "zscores": "Z_REB_G"},
    ),
    "AST": StatCategory(
        key="AST",
        label="Assists",
        fields={"averages": "AST_G", "totals": "AST", "zscores": "Z_AST_G"},
    ),
    "STL": StatCategory(
        key="STL",
        label="Steals",
        fields={"averages": "STL_G", "totals": "STL", "zscores": "Z_STL_G"},
    ),
    "BLK": StatCategory(
        key="BLK",
        label="Blocks",
        fields={"averages": "BLK_G", "totals": "BLK", "zscores": "Z_BLK_G"},
    ),
    "3PM": StatCategory(
        key="3PM",
        label="Three-pointers made",
        fields={"averages": "3PM_G", "totals": "3P", "zscores": "Z_3PM_G"},
    ),
    # Season totals carry the same percentage fields as the averages block.
    "FG%": StatCategory(
        key="FG%",
        label="Field goal percentage",
        fields={"averages": "FG_PCT", "totals": "FG_PCT", "zscores": "Z_FG_PCT"},
        percentage=True,
    ),
    "FT%": StatCategory(
        key="FT%",
        label="Free throw percentage",
        fields={"averages": "FT_PCT", "totals": "FT_PCT", "zscores": "Z_FT_PCT"},
        percentage=True,
    ),
    "TOV": StatCategory(
        key="TOV",
        label="Turnovers",
        fields={"averages": "TOV_G", "totals": "TOV", "zscores": "Z_TOV_G"},
        lower_is_better=True,
    ),
}

STAT_CATEGORY_KEYS: Tuple[str, ...] = tuple(_STAT_CATEGORIES)


def iter_stat_categories() -> Iterable[StatCategory]:
    """Return the configured stat categories in display order."""

    return _STAT_CATEGORIES.values()


def get_stat_category(key: str) -> StatCategory:
    """Fetch a stat category by key, raising KeyError if missing."""

    normalized = key.upper()
    if normalized not in _STAT_CATEGORIES:
        raise KeyError(f"No stat category configured for key={key!r}")
    return _STAT_CATEGORIES[normalized]


def _numeric(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def stat_value(record: "SeasonRecord | None", category: str, mode: str = "averages") -> float | None:
    """Resolve a category value from one season, or None when unavailable."""

    if record is None:
        return None
    if mode not in STAT_MODES:
        raise ValueError(f"mode must be one of {STAT_MODES}, got {mode!r}")
    field = get_stat_category(category).field_for(mode)
    source = getattr(record, mode)
    if not source:
        return None
    return _numeric(source.get(field))
