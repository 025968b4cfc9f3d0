"""Persist and load source document profiles."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from hoopsdraft.config.settings import data_dir


HISTORICAL_FILENAME = "fantasy_roto_dashboard.json"
ADP_FILENAME = "yahoo_adp.json"
BUCKETS_FILENAME = "dans_buckets.json"
REGISTRY_FILENAME = "players.json"


def is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


@dataclass(frozen=True)
class DataSources:
    """Locations (paths or URLs) of the four source documents."""

    historical: str
    adp: str
    buckets: str
    registry: str

    @classmethod
    def from_directory(cls, base: Path | str) -> "DataSources":
        if isinstance(base, str) and is_remote(base):
            root = base.rstrip("/")
            return cls(
                historical=f"{root}/{HISTORICAL_FILENAME}",
                adp=f"{root}/{ADP_FILENAME}",
                buckets=f"{root}/{BUCKETS_FILENAME}",
                registry=f"{root}/{REGISTRY_FILENAME}",
            )
        root_path = Path(base)
        return cls(
            historical=str(root_path / HISTORICAL_FILENAME),
            adp=str(root_path / ADP_FILENAME),
            buckets=str(root_path / BUCKETS_FILENAME),
            registry=str(root_path / REGISTRY_FILENAME),
        )

    @classmethod
    def from_env(cls) -> "DataSources":
        return cls.from_directory(data_dir())

    @classmethod
    def load(cls, path: Path, *, base: Optional[Path] = None) -> "DataSources":
        """Read a profile; relative local entries resolve against ``base`` or the profile's folder."""

        data = json.loads(path.read_text(encoding="utf-8"))
        defaults = cls.from_directory(base or path.parent)
        root = base or path.parent

        def resolve(key: str) -> str:
            value = data.get(key)
            if not value:
                return getattr(defaults, key)
            if is_remote(value) or Path(value).is_absolute():
                return value
            return str(root / value)

        return cls(
            historical=resolve("historical"),
            adp=resolve("adp"),
            buckets=resolve("buckets"),
            registry=resolve("registry"),
        )

    def save(self, path: Path) -> None:
        path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")
