"""Persistence layer for raw exports, season history and player edits."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from retrovault.config_loader import DB_PATH_ENV
from retrovault.models import PlayerEdit, PlayerSeasonHistory
from retrovault.seasons.history import history_from_json, history_to_json, sort_seasons


logger = logging.getLogger(__name__)

CAREER_BASE_CSV = "career_base_csv"
SEASON_SNAPSHOTS = "season_snapshots"
SEASON_HISTORY = "season_history"
PLAYER_EDITS = "player_edits"
SETTINGS = "settings"
TEAM_OVERRIDES = "team_overrides"

BUCKETS = (CAREER_BASE_CSV, SEASON_SNAPSHOTS, SEASON_HISTORY, PLAYER_EDITS, SETTINGS, TEAM_OVERRIDES)


class KeyValueStore:
    """Simple SQLite-backed JSON store, partitioned into named buckets."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv(DB_PATH_ENV)
        target = env_db or db_path
        if isinstance(target, str) and target.startswith("file:"):
            self.db_path: Path | str = target
            self._use_uri = True
        else:
            self.db_path = Path(target)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(self.db_path)
            else:
                conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except (sqlite3.OperationalError, OSError) as exc:
            fallback_dir = Path(tempfile.gettempdir()) / "retrovault-runtime"
            fallback_dir.mkdir(parents=True, exist_ok=True)
            fallback = fallback_dir / "retrovault.sqlite"
            logger.warning("Unable to open %s (%s); falling back to %s", self.db_path, exc, fallback)
            conn = sqlite3.connect(fallback)
            self.db_path = fallback
            self._use_uri = False
            self._create_schema(conn)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv (
                bucket TEXT NOT NULL,
                key TEXT NOT NULL,
                value_json TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                PRIMARY KEY (bucket, key)
            )
            """
        )
        conn.commit()

    @staticmethod
    def _check_bucket(bucket: str) -> None:
        if bucket not in BUCKETS:
            raise KeyError(f"Unknown bucket {bucket!r}")

    def get(self, bucket: str, key: str) -> Optional[Any]:
        self._check_bucket(bucket)
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value_json FROM kv WHERE bucket = ? AND key = ?",
                (bucket, key),
            ).fetchone()
        if row is None:
            return None
        return json.loads(row["value_json"])

    def put(self, bucket: str, key: str, value: Any) -> None:
        self._check_bucket(bucket)
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv (bucket, key, value_json, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(bucket, key) DO UPDATE SET
                    value_json = excluded.value_json,
                    updated_at = excluded.updated_at
                """,
                (bucket, key, json.dumps(value), now),
            )
            conn.commit()

    def delete(self, bucket: str, key: str) -> None:
        self._check_bucket(bucket)
        with self._connect() as conn:
            conn.execute("DELETE FROM kv WHERE bucket = ? AND key = ?", (bucket, key))
            conn.commit()

    def keys(self, bucket: str) -> List[str]:
        self._check_bucket(bucket)
        with self._connect() as conn:
            rows = conn.execute("SELECT key FROM kv WHERE bucket = ? ORDER BY key", (bucket,)).fetchall()
        return [row["key"] for row in rows]

    def items(self, bucket: str) -> Dict[str, Any]:
        self._check_bucket(bucket)
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT key, value_json FROM kv WHERE bucket = ? ORDER BY key",
                (bucket,),
            ).fetchall()
        return {row["key"]: json.loads(row["value_json"]) for row in rows}

    def clear(self, bucket: str | None = None) -> None:
        with self._connect() as conn:
            if bucket is None:
                conn.execute("DELETE FROM kv")
            else:
                self._check_bucket(bucket)
                conn.execute("DELETE FROM kv WHERE bucket = ?", (bucket,))
            conn.commit()


class SeasonHistoryRepository:
    """Whole-map load/save of every player's season history under one key."""

    _KEY = "all"

    def __init__(self, store: KeyValueStore):
        self._store = store

    def load(self) -> PlayerSeasonHistory:
        return history_from_json(self._store.get(SEASON_HISTORY, self._KEY))

    def save(self, history: PlayerSeasonHistory) -> None:
        self._store.put(SEASON_HISTORY, self._KEY, history_to_json(history))


class PlayerEditRepository:
    def __init__(self, store: KeyValueStore):
        self._store = store

    def list_edits(self) -> Dict[str, PlayerEdit]:
        return {
            key: PlayerEdit.model_validate(value)
            for key, value in self._store.items(PLAYER_EDITS).items()
        }

    def get(self, key: str) -> Optional[PlayerEdit]:
        value = self._store.get(PLAYER_EDITS, key)
        return PlayerEdit.model_validate(value) if value is not None else None

    def save(self, edit: PlayerEdit) -> None:
        self._store.put(PLAYER_EDITS, edit.key, edit.model_dump(mode="json"))

    def delete(self, key: str) -> None:
        self._store.delete(PLAYER_EDITS, key)


class TeamOverrideRepository:
    """Player name to team name, merged across assignments."""

    _KEY = "all"

    def __init__(self, store: KeyValueStore):
        self._store = store

    def load(self) -> Dict[str, str]:
        value = self._store.get(TEAM_OVERRIDES, self._KEY)
        if not isinstance(value, dict):
            return {}
        return {str(name): str(team) for name, team in value.items()}

    def save(self, overrides: Dict[str, str]) -> None:
        self._store.put(TEAM_OVERRIDES, self._KEY, overrides)

    def merge(self, overrides: Dict[str, str]) -> Dict[str, str]:
        merged = {**self.load(), **overrides}
        self.save(merged)
        return merged


class SnapshotArchive:
    """Raw exports: the career baseline plus one full export per season."""

    _BASE_KEY = "base"
    _SNAPSHOTS_KEY = "all"
    _CURRENT_SEASON_KEY = "current_season"

    def __init__(self, store: KeyValueStore):
        self._store = store

    def get_base_csv(self) -> Optional[str]:
        return self._store.get(CAREER_BASE_CSV, self._BASE_KEY)

    def set_base_csv(self, csv_text: str) -> None:
        self._store.put(CAREER_BASE_CSV, self._BASE_KEY, csv_text)

    def season_snapshots(self) -> Dict[str, str]:
        return dict(self._store.get(SEASON_SNAPSHOTS, self._SNAPSHOTS_KEY) or {})

    def save_season_snapshots(self, snapshots: Dict[str, str]) -> None:
        self._store.put(SEASON_SNAPSHOTS, self._SNAPSHOTS_KEY, snapshots)

    def seasons(self) -> List[str]:
        return sort_seasons(self.season_snapshots())

    def get_current_season(self) -> str:
        return self._store.get(SETTINGS, self._CURRENT_SEASON_KEY) or ""

    def set_current_season(self, season: str) -> None:
        if season:
            self._store.put(SETTINGS, self._CURRENT_SEASON_KEY, season)
        else:
            self._store.delete(SETTINGS, self._CURRENT_SEASON_KEY)


__all__ = [
    "BUCKETS",
    "CAREER_BASE_CSV",
    "KeyValueStore",
    "PLAYER_EDITS",
    "PlayerEditRepository",
    "SEASON_HISTORY",
    "SEASON_SNAPSHOTS",
    "SETTINGS",
    "SeasonHistoryRepository",
    "SnapshotArchive",
    "TEAM_OVERRIDES",
    "TeamOverrideRepository",
]
