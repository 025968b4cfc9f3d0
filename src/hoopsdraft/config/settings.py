"""Environment-driven settings."""

from __future__ import annotations

import logging
import os
from pathlib import Path


logger = logging.getLogger(__name__)

DATA_DIR_ENV = "HOOPSDRAFT_DATA_DIR"
MIN_GAMES_ENV = "HOOPSDRAFT_MIN_GAMES"
FETCH_TIMEOUT_ENV = "HOOPSDRAFT_FETCH_TIMEOUT"
LOG_LEVEL_ENV = "HOOPSDRAFT_LOG_LEVEL"

_DATA_DIR_DEFAULT = "data"
_MIN_GAMES_DEFAULT = 20
_FETCH_TIMEOUT_DEFAULT = 10.0
_LOG_LEVEL_DEFAULT = "INFO"


def _env_float(name: str, default: float, *, clamp_min: float | None = None, clamp_max: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    if clamp_max is not None:
        value = min(clamp_max, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def data_dir() -> Path:
    return Path(os.getenv(DATA_DIR_ENV) or _DATA_DIR_DEFAULT)


def default_min_games() -> int:
    return _env_int(MIN_GAMES_ENV, _MIN_GAMES_DEFAULT, min_value=0)


def fetch_timeout() -> float:
    return _env_float(FETCH_TIMEOUT_ENV, _FETCH_TIMEOUT_DEFAULT, clamp_min=0.1)


def log_level() -> int:
    raw = (os.getenv(LOG_LEVEL_ENV) or _LOG_LEVEL_DEFAULT).upper()
    level = logging.getLevelName(raw)
    if not isinstance(level, int):
        logger.warning("Invalid log level for %s: %s; using %s", LOG_LEVEL_ENV, raw, _LOG_LEVEL_DEFAULT)
        return logging.INFO
    return level
