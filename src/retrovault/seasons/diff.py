"""Turn two career snapshots into one season's worth of production."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from retrovault.config import PositionSchema, get_schema, iter_schemas
from retrovault.config_loader import DEFAULT_ROOKIE_GAMES_THRESHOLD
from retrovault.models import BasePlayer, LeagueData, player_key


logger = logging.getLogger(__name__)


def _delta(next_value: float, prev_value: float) -> float:
    delta = next_value - prev_value
    return delta if delta > 0 else 0.0


def season_delta(player: BasePlayer, previous: BasePlayer, schema: Optional[PositionSchema] = None) -> BasePlayer:
    """Subtract ``previous`` career counters from ``player``, clamping at zero.

    Non-additive fields (metrics, status, nickname, longest) come from ``player``.
    """

    schema = schema or get_schema(getattr(player, "position"))
    update = {
        field: _delta(getattr(player, field), getattr(previous, field))
        for field in schema.additive_fields
    }
    return player.model_copy(update=update)


def zero_counters(player: BasePlayer, schema: Optional[PositionSchema] = None) -> BasePlayer:
    schema = schema or get_schema(getattr(player, "position"))
    return player.model_copy(update={field: 0.0 for field in schema.additive_fields})


def diff_league_data(
    prev: LeagueData,
    next_: LeagueData,
    *,
    rookie_games_threshold: int = DEFAULT_ROOKIE_GAMES_THRESHOLD,
) -> LeagueData:
    """Season-local records for every player in ``next_`` relative to ``prev``.

    Players missing from ``prev`` with at most ``rookie_games_threshold`` games
    keep their full totals (their career so far is this season). Missing
    players above the threshold get zeroed counters instead of a whole career
    attributed to one season.
    """

    previous: Dict[str, BasePlayer] = {player_key(p): p for p in prev.iter_players()}
    result: Dict[str, List[BasePlayer]] = {}
    rookies = 0
    veterans: List[str] = []

    for schema in iter_schemas():
        season_players: List[BasePlayer] = []
        for player in getattr(next_, schema.collection):
            old = previous.get(player_key(player))
            if old is not None:
                season_players.append(season_delta(player, old, schema))
            elif player.games <= rookie_games_threshold:
                rookies += 1
                season_players.append(player)
            else:
                veterans.append(player_key(player))
                season_players.append(zero_counters(player, schema))
        result[schema.collection] = season_players

    if rookies:
        logger.debug("Treated %d newly seen players as rookies", rookies)
    if veterans:
        logger.info(
            "Zeroed season counters for %d newly seen veterans (games > %d): %s",
            len(veterans),
            rookie_games_threshold,
            ", ".join(veterans[:5]) + (f", +{len(veterans) - 5} more" if len(veterans) > 5 else ""),
        )
    return LeagueData(**result)


def season_from_first_upload(next_: LeagueData) -> LeagueData:
    """Season records when no earlier snapshot exists at all: the totals as-is."""

    return next_
