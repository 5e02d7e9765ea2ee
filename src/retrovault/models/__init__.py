"""Typed records for league snapshots and season history."""

from .player import (
    PLAYER_MODELS,
    BasePlayer,
    DBPlayer,
    DefensivePlayer,
    DLPlayer,
    LBPlayer,
    LeagueData,
    OLPlayer,
    Player,
    Position,
    QBPlayer,
    RBPlayer,
    Status,
    TEPlayer,
    WRPlayer,
    make_player_key,
    player_key,
)
from .season import EntryMode, PlayerEdit, PlayerSeasonHistory, SeasonEntry, SeasonSnapshot

__all__ = [
    "PLAYER_MODELS",
    "BasePlayer",
    "DBPlayer",
    "DefensivePlayer",
    "DLPlayer",
    "EntryMode",
    "LBPlayer",
    "LeagueData",
    "OLPlayer",
    "Player",
    "PlayerEdit",
    "PlayerSeasonHistory",
    "Position",
    "QBPlayer",
    "RBPlayer",
    "SeasonEntry",
    "SeasonSnapshot",
    "Status",
    "TEPlayer",
    "WRPlayer",
    "make_player_key",
    "player_key",
]
