"""Column layout and stat classification for each position table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple, Union

from retrovault.models.player import Position


NAME_COLUMN = 0
STATUS_COLUMN = 1
GAMES_COLUMN = 2

# Tail columns shared by every position table.
TAIL_COLUMNS: Mapping[str, int] = {
    "rings": 12,
    "mvp": 13,
    "opoy": 14,
    "sbmvp": 15,
    "roty": 16,
    "true_talent": 18,
    "dominance": 19,
    "career_legacy": 20,
    "tpg": 21,
}
NICKNAME_COLUMN = 23

BASE_COUNTERS: Tuple[str, ...] = ("games", "rings", "mvp", "opoy", "sbmvp", "roty")
METRIC_FIELDS: Tuple[str, ...] = ("true_talent", "dominance", "career_legacy", "tpg")


@dataclass(frozen=True)
class PositionSchema:
    position: Position
    collection: str
    stat_columns: Mapping[str, int]
    career_fields: frozenset[str] = frozenset()

    @property
    def stat_fields(self) -> Tuple[str, ...]:
        return tuple(self.stat_columns)

    @property
    def additive_stats(self) -> Tuple[str, ...]:
        """Position counters that accumulate across seasons."""

        return tuple(name for name in self.stat_columns if name not in self.career_fields)

    @property
    def additive_fields(self) -> Tuple[str, ...]:
        return BASE_COUNTERS + self.additive_stats

    @property
    def season_fields(self) -> Tuple[str, ...]:
        """Every stat a season snapshot carries, in column order."""

        return BASE_COUNTERS + self.stat_fields


_QB_COLUMNS = {
    "attempts": 3,
    "completions": 4,
    "pass_yds": 5,
    "pass_td": 6,
    "interceptions": 7,
    "sacks": 8,
    "rush_att": 9,
    "rush_yds": 10,
    "rush_td": 11,
}
_RB_COLUMNS = {
    "rush_att": 3,
    "rush_yds": 4,
    "rush_td": 5,
    "fumbles": 6,
    "receptions": 7,
    "rec_yds": 8,
    "rec_td": 9,
}
_RECEIVER_COLUMNS = {
    "receptions": 3,
    "rec_yds": 4,
    "rec_td": 5,
    "fumbles": 6,
    "longest": 7,
}
_OL_COLUMNS = {"blocks": 3}
_DEFENSE_COLUMNS = {
    "tackles": 3,
    "interceptions": 4,
    "sacks": 5,
    "forced_fumbles": 6,
}
_RECEIVER_CAREER_FIELDS = frozenset({"longest"})


_POSITION_SCHEMAS: Dict[Position, PositionSchema] = {
    Position.QB: PositionSchema(Position.QB, "quarterbacks", _QB_COLUMNS),
    Position.RB: PositionSchema(Position.RB, "runningbacks", _RB_COLUMNS),
    Position.WR: PositionSchema(Position.WR, "widereceivers", _RECEIVER_COLUMNS, _RECEIVER_CAREER_FIELDS),
    Position.TE: PositionSchema(Position.TE, "tightends", _RECEIVER_COLUMNS, _RECEIVER_CAREER_FIELDS),
    Position.OL: PositionSchema(Position.OL, "offensiveline", _OL_COLUMNS),
    Position.LB: PositionSchema(Position.LB, "linebackers", _DEFENSE_COLUMNS),
    Position.DB: PositionSchema(Position.DB, "defensivebacks", _DEFENSE_COLUMNS),
    Position.DL: PositionSchema(Position.DL, "defensiveline", _DEFENSE_COLUMNS),
}

POSITION_TAGS: frozenset[str] = frozenset(position.value for position in _POSITION_SCHEMAS)


def iter_schemas() -> Iterable[PositionSchema]:
    """Return schemas in table order (QB first, DL last)."""

    return _POSITION_SCHEMAS.values()


def get_schema(position: Union[Position, str]) -> PositionSchema:
    """Fetch the schema for a position tag, raising KeyError if unknown."""

    if isinstance(position, Position):
        return _POSITION_SCHEMAS[position]
    if not isinstance(position, str):
        raise TypeError("position must be a Position or str")
    tag = position.strip().upper()
    if tag not in POSITION_TAGS:
        raise KeyError(f"No schema configured for position={position!r}")
    return _POSITION_SCHEMAS[Position(tag)]

