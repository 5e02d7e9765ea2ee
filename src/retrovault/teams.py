"""Team names pasted in table order, mapped onto player names."""

from __future__ import annotations

import re
from typing import Dict, List, Mapping, Sequence

from retrovault.models import BasePlayer


_LINE_OR_COMMA = re.compile(r"\r?\n|,")


def split_teams(text: str) -> List[str]:
    """Split one-per-line or comma lists; a single line splits on whitespace."""

    raw = (text or "").strip()
    if not raw:
        return []
    if "\n" in raw or "," in raw:
        parts = _LINE_OR_COMMA.split(raw)
    else:
        parts = raw.split()
    return [part.strip() for part in parts if part.strip()]


def assign_teams(
    players: Sequence[BasePlayer],
    teams: Sequence[str],
    overrides: Mapping[str, str],
) -> Dict[str, str]:
    """Pair ``teams`` with players in table order.

    A list as long as the players without a team fills only those; a list as
    long as the whole table reassigns everyone. Any other length is rejected.
    """

    if not teams:
        raise ValueError("no teams provided")
    missing = [player for player in players if player.name not in overrides]
    if missing and len(teams) == len(missing):
        targets = missing
    elif len(teams) == len(players):
        targets = list(players)
    else:
        raise ValueError(
            f"got {len(teams)} teams; expected {len(missing)} (missing only) or {len(players)} (all players)"
        )
    return {player.name: team for player, team in zip(targets, teams)}
