"""Season-local snapshots and manual entry payloads."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from .player import Position, Status, make_player_key


class SeasonSnapshot(BaseModel):
    """Season-local (non-cumulative) values for one player in one season."""

    season: str
    stats: Dict[str, float] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def get(self, stat: str, default: float = 0.0) -> float:
        return self.stats.get(stat, default)


PlayerSeasonHistory = Dict[str, List[SeasonSnapshot]]


class EntryMode(str, Enum):
    additive = "additive"
    cumulative_total = "cumulative_total"


class SeasonEntry(BaseModel):
    """One hand-entered season; ``stats`` are deltas or career totals per ``mode``."""

    season: str
    stats: Dict[str, float] = Field(default_factory=dict)
    mode: EntryMode = EntryMode.additive

    model_config = ConfigDict(frozen=True)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PlayerEdit(BaseModel):
    """Manual override (or addition) of one player's career record."""

    position: Position
    name: str = Field(..., min_length=1)
    nickname: Optional[str] = None
    status: Status = Status.active
    games: float = Field(0.0, ge=0.0)
    rings: float = Field(0.0, ge=0.0)
    mvp: float = Field(0.0, ge=0.0)
    opoy: float = Field(0.0, ge=0.0)
    sbmvp: float = Field(0.0, ge=0.0)
    roty: float = Field(0.0, ge=0.0)
    true_talent: float = 0.0
    dominance: float = 0.0
    career_legacy: float = 0.0
    tpg: float = 0.0
    position_stats: Dict[str, float] = Field(default_factory=dict)
    manual_seasons: List[SeasonEntry] = Field(default_factory=list)
    is_manually_added: bool = False
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        return make_player_key(self.position, self.name)
