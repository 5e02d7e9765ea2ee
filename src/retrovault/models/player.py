"""Canonical player models shared across ingestion and season layers."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Iterator, List, Literal, Optional, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Position(str, Enum):
    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    OL = "OL"
    LB = "LB"
    DB = "DB"
    DL = "DL"


class Status(str, Enum):
    active = "Active"
    retired = "Retired"


class BasePlayer(BaseModel):
    """Fields every position table shares.

    ``opoy`` holds OPOY for offensive tags and DPOY for defensive tags.
    """

    name: str = Field(..., min_length=1)
    status: Status = Status.retired
    games: float = 0.0
    rings: float = 0.0
    mvp: float = 0.0
    opoy: float = 0.0
    sbmvp: float = 0.0
    roty: float = 0.0
    true_talent: float = 0.0
    dominance: float = 0.0
    career_legacy: float = 0.0
    tpg: float = 0.0
    nickname: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def key(self) -> str:
        return player_key(self)


class QBPlayer(BasePlayer):
    position: Literal["QB"] = "QB"
    attempts: float = 0.0
    completions: float = 0.0
    pass_yds: float = 0.0
    pass_td: float = 0.0
    interceptions: float = 0.0
    sacks: float = 0.0
    rush_att: float = 0.0
    rush_yds: float = 0.0
    rush_td: float = 0.0


class RBPlayer(BasePlayer):
    position: Literal["RB"] = "RB"
    rush_att: float = 0.0
    rush_yds: float = 0.0
    rush_td: float = 0.0
    fumbles: float = 0.0
    receptions: float = 0.0
    rec_yds: float = 0.0
    rec_td: float = 0.0


class _ReceiverFields(BasePlayer):
    receptions: float = 0.0
    rec_yds: float = 0.0
    rec_td: float = 0.0
    fumbles: float = 0.0
    longest: float = 0.0


class WRPlayer(_ReceiverFields):
    position: Literal["WR"] = "WR"


class TEPlayer(_ReceiverFields):
    position: Literal["TE"] = "TE"


class OLPlayer(BasePlayer):
    position: Literal["OL"] = "OL"
    blocks: float = 0.0


class DefensivePlayer(BasePlayer):
    tackles: float = 0.0
    interceptions: float = 0.0
    sacks: float = 0.0
    forced_fumbles: float = 0.0


class LBPlayer(DefensivePlayer):
    position: Literal["LB"] = "LB"


class DBPlayer(DefensivePlayer):
    position: Literal["DB"] = "DB"


class DLPlayer(DefensivePlayer):
    position: Literal["DL"] = "DL"


Player = Annotated[
    Union[QBPlayer, RBPlayer, WRPlayer, TEPlayer, OLPlayer, LBPlayer, DBPlayer, DLPlayer],
    Field(discriminator="position"),
]

PLAYER_MODELS: dict[Position, type[BasePlayer]] = {
    Position.QB: QBPlayer,
    Position.RB: RBPlayer,
    Position.WR: WRPlayer,
    Position.TE: TEPlayer,
    Position.OL: OLPlayer,
    Position.LB: LBPlayer,
    Position.DB: DBPlayer,
    Position.DL: DLPlayer,
}


def player_key(player: BasePlayer) -> str:
    """Render the ``POSITION:name`` identity used by season history."""

    return make_player_key(getattr(player, "position"), player.name)


def make_player_key(position: Position | str, name: str) -> str:
    tag = position.value if isinstance(position, Position) else str(position).strip().upper()
    return f"{tag}:{name}"


class LeagueData(BaseModel):
    """One full league snapshot: eight ordered lists, one per position."""

    quarterbacks: List[QBPlayer] = Field(default_factory=list)
    runningbacks: List[RBPlayer] = Field(default_factory=list)
    widereceivers: List[WRPlayer] = Field(default_factory=list)
    tightends: List[TEPlayer] = Field(default_factory=list)
    offensiveline: List[OLPlayer] = Field(default_factory=list)
    linebackers: List[LBPlayer] = Field(default_factory=list)
    defensivebacks: List[DBPlayer] = Field(default_factory=list)
    defensiveline: List[DLPlayer] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def players_for(self, position: Position | str) -> List[BasePlayer]:
        from retrovault.config import get_schema

        return list(getattr(self, get_schema(position).collection))

    def iter_players(self) -> Iterator[BasePlayer]:
        from retrovault.config import iter_schemas

        for schema in iter_schemas():
            yield from getattr(self, schema.collection)

    def counts(self) -> dict[str, int]:
        from retrovault.config import iter_schemas

        return {schema.position.value: len(getattr(self, schema.collection)) for schema in iter_schemas()}
