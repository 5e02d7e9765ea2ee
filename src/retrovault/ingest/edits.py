"""Overlay hand-made player edits onto a parsed league snapshot."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from retrovault.config import get_schema, iter_schemas
from retrovault.models import PLAYER_MODELS, BasePlayer, LeagueData, PlayerEdit


logger = logging.getLogger(__name__)


def _edit_fields(edit: PlayerEdit) -> Dict[str, object]:
    schema = get_schema(edit.position)
    fields: Dict[str, object] = {
        "status": edit.status,
        "nickname": edit.nickname,
        "games": edit.games,
        "rings": edit.rings,
        "mvp": edit.mvp,
        "opoy": edit.opoy,
        "sbmvp": edit.sbmvp,
        "roty": edit.roty,
        "true_talent": edit.true_talent,
        "dominance": edit.dominance,
        "career_legacy": edit.career_legacy,
        "tpg": edit.tpg,
    }
    ignored = []
    for stat, value in edit.position_stats.items():
        if stat in schema.stat_columns:
            fields[stat] = float(value)
        else:
            ignored.append(stat)
    if ignored:
        logger.debug("Ignoring stats %s on edit for %s", ", ".join(sorted(ignored)), edit.key)
    return fields


def apply_player_edits(league: LeagueData, edits: Iterable[PlayerEdit]) -> LeagueData:
    """Return a new snapshot with ``edits`` applied.

    An edit overrides the matching (position, name) player. Edits for players
    absent from the snapshot only add a player when ``is_manually_added``.
    """

    collections: Dict[str, List[BasePlayer]] = {
        schema.collection: list(getattr(league, schema.collection)) for schema in iter_schemas()
    }
    applied = 0
    for edit in edits:
        schema = get_schema(edit.position)
        players = collections[schema.collection]
        fields = _edit_fields(edit)
        index = next((i for i, player in enumerate(players) if player.name == edit.name), None)
        if index is not None:
            players[index] = players[index].model_copy(update=fields)
        elif edit.is_manually_added:
            players.append(PLAYER_MODELS[schema.position](name=edit.name, **fields))
        else:
            continue
        applied += 1
    if applied:
        logger.debug("Applied %d player edits", applied)
    return LeagueData(**collections)
