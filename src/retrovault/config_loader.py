"""Persist and load league settings."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)

ROOKIE_GAMES_ENV = "RETROVAULT_ROOKIE_GAMES"
DB_PATH_ENV = "RETROVAULT_DB_PATH"

DEFAULT_ROOKIE_GAMES_THRESHOLD = 21
DEFAULT_DB_PATH = Path("retrovault.sqlite")


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None and value < min_value:
        logger.warning("%s=%d below minimum %d; clamping", name, value, min_value)
        value = min_value
    return value


@dataclass
class LeagueSettings:
    rookie_games_threshold: int = DEFAULT_ROOKIE_GAMES_THRESHOLD
    db_path: Optional[str] = None

    @classmethod
    def load(cls, path: Path) -> "LeagueSettings":
        data = json.loads(path.read_text(encoding="utf-8"))
        threshold = data.get("rookie_games_threshold", DEFAULT_ROOKIE_GAMES_THRESHOLD)
        if not isinstance(threshold, int) or threshold < 0:
            raise ValueError(f"rookie_games_threshold must be a non-negative int, got {threshold!r}")
        return cls(
            rookie_games_threshold=threshold,
            db_path=data.get("db_path"),
        )

    @classmethod
    def from_env(cls) -> "LeagueSettings":
        return cls(
            rookie_games_threshold=_env_int(ROOKIE_GAMES_ENV, DEFAULT_ROOKIE_GAMES_THRESHOLD, min_value=0),
            db_path=os.getenv(DB_PATH_ENV) or None,
        )

    def save(self, path: Path) -> None:
        payload = {
            "rookie_games_threshold": self.rookie_games_threshold,
            "db_path": self.db_path,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def resolved_db_path(self) -> Path | str:
        return self.db_path or DEFAULT_DB_PATH
