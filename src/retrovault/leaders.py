"""Per-stat leaders for one position table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence, Tuple

from retrovault.config import METRIC_FIELDS, get_schema
from retrovault.models import BasePlayer, Position


@dataclass(frozen=True)
class StatLeader:
    name: str
    value: float


def leader_stats(position: Position | str) -> Tuple[str, ...]:
    """Stats ranked for a position: counters, position stats, then metrics."""

    return get_schema(position).season_fields + METRIC_FIELDS


def calculate_leaders(players: Iterable[BasePlayer], stats: Sequence[str]) -> Dict[str, StatLeader]:
    """Highest value per stat; the earlier player keeps a tie.

    Stats no player carries are left out of the result.
    """

    roster = list(players)
    leaders: Dict[str, StatLeader] = {}
    for stat in stats:
        best: Optional[StatLeader] = None
        for player in roster:
            value = getattr(player, stat, None)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            if best is None or value > best.value:
                best = StatLeader(name=player.name, value=float(value))
        if best is not None:
            leaders[stat] = best
    return leaders
